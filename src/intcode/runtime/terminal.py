import sys
from collections import deque
from typing import Iterable, TextIO
import logging as lg

import click


class TerminalError(ValueError):
    pass


class Terminal:
    ''' I/O channel the CPU talks to '''

    def try_take_input(self) -> int | None:
        raise NotImplementedError()

    def emit(self, value: int):
        raise NotImplementedError()


class QueueTerminal(Terminal):
    inbox: deque[int]
    outbox: deque[int]

    def __init__(self, inputs: Iterable[int] = ()):
        self.inbox = deque(inputs)
        self.outbox = deque()
        self.history: list[int] = []  # Everything ever emitted

    def feed(self, value: int):
        self.inbox.append(value)

    def try_take_input(self) -> int | None:
        if not self.inbox:
            return None

        return self.inbox.popleft()

    def emit(self, value: int):
        self.outbox.append(value)
        self.history.append(value)

    def drain(self) -> list[int]:
        values = list(self.outbox)
        self.outbox.clear()
        return values


class ConsoleTerminal(Terminal):
    ''' Blocks on a text stream for one integer per line, stdin/stdout by default '''

    def __init__(self, stream_in: TextIO | None = None, stream_out: TextIO | None = None):
        self.stream_in = stream_in
        self.stream_out = stream_out

    def try_take_input(self) -> int | None:
        stream = self.stream_in if self.stream_in is not None else sys.stdin
        line = stream.readline()

        # End of stream, nothing will ever arrive
        if not line:
            lg.debug('Console input closed')
            return None

        try:
            return int(line.strip())
        except ValueError as e:
            raise TerminalError(f'Not an integer: {line.strip()!r}') from e

    def emit(self, value: int):
        click.echo(value, file=self.stream_out)
