from pathlib import Path
from typing import Sequence
import logging as lg
import tomllib


INITIAL_SIGNAL = 0

PHASES = (0, 1, 2, 3, 4)
FEEDBACK_PHASES = (5, 6, 7, 8, 9)

AMPLIFIER_NAMES = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

NOUN_ADDR = 1
VERB_ADDR = 2
RESULT_ADDR = 0
NOUN_VERB_RANGE = range(100)
GRAVITY_TARGET = 19690720


class CircuitSettings:
    phases: tuple[int, ...]
    feedback: bool
    signal: int

    def __init__(self):
        self.phases = PHASES
        self.feedback = False
        self.signal = INITIAL_SIGNAL

    def update(
        self,
        phases: Sequence[int] | None = None,
        feedback: bool | None = None,
        signal: int | None = None
    ):
        if feedback is not None and feedback != self.feedback:
            self.feedback = feedback

            # Phase set follows the wiring unless given explicitly
            if phases is None:
                self.phases = FEEDBACK_PHASES if feedback else PHASES

        if phases is not None:
            self.phases = tuple(phases)

        if signal is not None:
            self.signal = signal

        return self

    @staticmethod
    def from_toml(path: Path) -> 'CircuitSettings':
        lg.debug(f'Reading settings from {path}')
        config = tomllib.loads(path.read_text())
        circuit = config.get('circuit', {})

        return CircuitSettings().update(
            feedback=circuit.get('feedback'),
            phases=circuit.get('phases'),
            signal=circuit.get('signal')
        )
