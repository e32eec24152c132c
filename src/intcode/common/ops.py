from dataclasses import dataclass
from enum import IntEnum


class Op(IntEnum):
    # Arithmetic
    ADD = 1     # A + B -> [C]
    MUL = 2     # A * B -> [C]

    # I/O
    INP = 3     # input -> [A]
    OUT = 4     # A -> output

    # Control
    JNZ = 5     # if A .ne 0 jmp B
    JZ = 6      # if A .eq 0 jmp B
    LT = 7      # A .lt B -> [C]
    EQ = 8      # A .eq B -> [C]

    HLT = 99

    # Decoded from anything else
    UNKNOWN = -1


POSITION = 0
IMMEDIATE = 1

# Words per instruction, opcode included
WIDTHS = {
    Op.ADD: 4,
    Op.MUL: 4,
    Op.INP: 2,
    Op.OUT: 2,
    Op.JNZ: 3,
    Op.JZ: 3,
    Op.LT: 4,
    Op.EQ: 4,
    Op.HLT: 1,
}

KNOWN = frozenset(op.value for op in WIDTHS)


@dataclass(frozen=True)
class Instruction:
    op: Op
    word: int  # Raw instruction word, kept for diagnostics

    @property
    def known(self) -> bool:
        return self.op is not Op.UNKNOWN

    def mode(self, position: int) -> int:
        ''' Mode digit of 1-based parameter, hundreds digit first '''
        return (self.word // 100 // 10 ** (position - 1)) % 10

    def __str__(self) -> str:
        return f'{self.op.name}({self.word})'


def decode(word: int) -> Instruction:
    if word < 0 or word % 100 not in KNOWN:
        return Instruction(Op.UNKNOWN, word)

    return Instruction(Op(word % 100), word)
