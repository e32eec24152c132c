''' Amplifier circuit: CPUs in a ring, polled in turn '''

import logging as lg
from typing import Sequence

from intcode.common.conf import AMPLIFIER_NAMES, INITIAL_SIGNAL
from intcode.source.loader import Program
from intcode.runtime.terminal import QueueTerminal
from intcode.runtime.memory import AddressError
from intcode.runtime.emulator import FaultError, boot
import intcode.runtime.cpu as cpu


class CircuitError(RuntimeError):
    pass


class AmplifierFault(CircuitError, FaultError):
    def __init__(self, amp: 'Amplifier'):
        FaultError.__init__(
            self,
            f'Amplifier {amp.name} faulted on {amp.proc.instruction} at {amp.proc.ip}',
            amp.proc
        )
        self.amplifier = amp.name


class AmplifierAddressError(CircuitError):
    def __init__(self, amp: 'Amplifier', error: AddressError):
        super().__init__(f'Amplifier {amp.name}: {error} at {error.pc}')
        self.amplifier = amp.name
        self.address = error.address
        self.pc = error.pc


class DeadlockError(CircuitError):
    def __init__(self, starving: Sequence[str]):
        super().__init__(f'Amplifiers {", ".join(starving)} wait for input nobody sends')
        self.starving = list(starving)


class Amplifier:
    name: str
    phase: int
    terminal: QueueTerminal
    proc: cpu.CPU

    def __init__(self, name: str, program: Program, phase: int):
        self.name = name
        self.phase = phase
        self.terminal = QueueTerminal([phase])
        self.proc = boot(program, self.terminal)

    def __repr__(self) -> str:
        return f'Amplifier({self.name}, phase={self.phase}, {self.proc.status.value})'

    @property
    def halted(self) -> bool:
        return self.proc.status == cpu.Status.HALTED


class Circuit:
    amplifiers: list[Amplifier]
    feedback: bool
    exit: list[int]  # Signals leaving the last amplifier

    def __init__(
        self,
        program: Program,
        phases: Sequence[int],
        feedback: bool = False,
        signal: int = INITIAL_SIGNAL
    ):
        if not phases:
            raise CircuitError('Circuit needs at least one amplifier')

        if len(phases) > len(AMPLIFIER_NAMES):
            raise CircuitError(f'At most {len(AMPLIFIER_NAMES)} amplifiers are supported')

        self.amplifiers = [
            Amplifier(name, program, phase)
            for name, phase in zip(AMPLIFIER_NAMES, phases)
        ]

        self.feedback = feedback
        self.exit = []
        self.amplifiers[0].terminal.feed(signal)

    def route(self, index: int, values: list[int]):
        last = index == len(self.amplifiers) - 1

        if last:
            self.exit.extend(values)

        if last and not self.feedback:
            return

        receiver = self.amplifiers[(index + 1) % len(self.amplifiers)]

        for value in values:
            lg.debug(f'{self.amplifiers[index].name} -> {receiver.name}: {value}')
            receiver.terminal.feed(value)

    def turn(self, index: int) -> bool:
        ''' Runs one amplifier until it suspends, reports progress '''
        amp = self.amplifiers[index]
        ticks = amp.proc.ticks

        try:
            status = amp.proc.run()
        except AddressError as e:
            raise AmplifierAddressError(amp, e) from e

        if status == cpu.Status.FAULTED:
            raise AmplifierFault(amp)

        outputs = amp.terminal.drain()
        self.route(index, outputs)

        return amp.proc.ticks != ticks or len(outputs) > 0

    def run(self) -> int:
        active = list(range(len(self.amplifiers)))

        while active:
            progress = False

            for index in active:
                if self.turn(index):
                    progress = True

            halted = [i for i in active if self.amplifiers[i].halted]

            for index in halted:
                lg.debug(f'Amplifier {self.amplifiers[index].name} halted')

            active = [i for i in active if i not in halted]

            if active and not progress:
                raise DeadlockError([self.amplifiers[i].name for i in active])

        if not self.exit:
            raise CircuitError('Circuit halted without a thruster signal')

        return self.exit[-1]


def thruster_signal(
    program: Program,
    phases: Sequence[int],
    feedback: bool = False,
    signal: int = INITIAL_SIGNAL
) -> int:
    return Circuit(program, phases, feedback, signal).run()
