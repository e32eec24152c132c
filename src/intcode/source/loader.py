from pathlib import Path
from typing import Iterable, Mapping
import logging as lg

import pyparsing as pp

import intcode.source.grammar as grammar
from intcode.runtime.memory import Memory


class SourceError(ValueError):
    line: int
    column: int

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column


class Program:
    ''' Read-only program image; every launch gets its own copy '''

    words: tuple[int, ...]
    name: str

    def __init__(self, words: Iterable[int], name: str = '<program>'):
        self.words = tuple(words)
        self.name = name

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, address: int) -> int:
        return self.words[address]

    def __repr__(self) -> str:
        return f'Program({self.name}, {len(self.words)} words)'

    def patched(self, patches: Mapping[int, int]) -> 'Program':
        words = list(self.words)

        for address, value in patches.items():
            if address < 0 or address >= len(words):
                raise SourceError(f'Patch address {address} outside {self.name}')

            words[address] = value

        return Program(words, self.name)

    def launch(self) -> Memory:
        return Memory(self.words)


def load_string(source: str, name: str = '<string>') -> Program:
    try:
        words = grammar.program.parse_string(source)

    except pp.ParseException as e:
        raise SourceError(
            f'Malformed program {name} at {e.lineno}:{e.col}: {e.line.strip()!r}',
            e.lineno,
            e.col
        ) from e

    lg.debug(f'Loaded {name}: {len(words)} words')
    return Program(words, name)


def load_file(filepath: str | Path) -> Program:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Loading file {filepath}')
    return load_string(filepath.read_text(), filepath.stem)
