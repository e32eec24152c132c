import logging as lg
from enum import Enum
from typing import Callable

from intcode.common.ops import Op, Instruction, IMMEDIATE, decode
from intcode.runtime.memory import Memory, AddressError
from intcode.runtime.terminal import Terminal


class Halt(Exception):
    pass


class Starve(Exception):
    pass


class Fault(Exception):
    def __init__(self, instruction: Instruction):
        super().__init__(f'Unknown opcode in {instruction}')
        self.instruction = instruction


class Status(Enum):
    RUNNING = 'running'
    NEEDS_INPUT = 'needs-input'
    HALTED = 'halted'
    FAULTED = 'faulted'


TERMINAL = (Status.HALTED, Status.FAULTED)


class CPU():
    ip: int  # Instruction pointer
    status: Status
    ticks: int  # Instructions retired
    instruction: Instruction  # Currently executing
    fault: Instruction | AddressError | None
    trace: list[int] | None  # Addresses of retired instructions

    def __init__(self, memory: Memory, terminal: Terminal, trace: bool = False):
        self.memory = memory        # Owned, never shared
        self.terminal = terminal    # Ref. to I/O channel

        self.ip = 0
        self.status = Status.RUNNING
        self.ticks = 0
        self.instruction = decode(0)
        self.fault = None
        self.trace = [] if trace else None

    # - Helpers - #

    def debug_dump(self):
        lg.debug(f'IP:{self.ip} ST:{self.status.value} TK:{self.ticks} OP:{self.instruction}')

    def parameter(self, position: int) -> int:
        return self.memory[self.ip + position]

    def operand(self, position: int) -> int:
        raw = self.parameter(position)

        if self.instruction.mode(position) == IMMEDIATE:
            return raw

        return self.memory[raw]

    def store(self, position: int, value: int):
        # Write targets are addresses whatever their mode digit says
        self.memory[self.parameter(position)] = value

    def arithm_pair(self, op: Callable[[int, int], int]):
        a = self.operand(1)
        b = self.operand(2)
        self.store(3, op(a, b))
        self.ip += 4

    def jump_if(self, cond: Callable[[int], bool]):
        if cond(self.operand(1)):
            self.ip = self.operand(2)
        else:
            self.ip += 3

    def retire(self, addr: int):
        self.ticks += 1

        if self.trace is not None:
            self.trace.append(addr)

    # - Operations - #

    def add(self):
        self.arithm_pair(lambda a, b: a + b)

    def mul(self):
        self.arithm_pair(lambda a, b: a * b)

    def inp(self):
        value = self.terminal.try_take_input()

        if value is None:
            raise Starve()

        self.store(1, value)
        self.ip += 2

    def out(self):
        self.terminal.emit(self.operand(1))
        self.ip += 2

    def jnz(self):
        self.jump_if(lambda a: a != 0)

    def jz(self):
        self.jump_if(lambda a: a == 0)

    def lt(self):
        self.arithm_pair(lambda a, b: int(a < b))

    def eq(self):
        self.arithm_pair(lambda a, b: int(a == b))

    def hlt(self):
        raise Halt()

    HANDLERS = {
        Op.ADD: add,
        Op.MUL: mul,
        Op.INP: inp,
        Op.OUT: out,
        Op.JNZ: jnz,
        Op.JZ: jz,
        Op.LT: lt,
        Op.EQ: eq,
        Op.HLT: hlt
    }

    # -- Implementation -- #

    def exec_next(self):
        addr = self.ip
        self.instruction = decode(self.memory[addr])

        if not self.instruction.known:
            raise Fault(self.instruction)

        handler = self.HANDLERS[self.instruction.op]
        handler(self)
        self.retire(addr)

    def run(self) -> Status:
        ''' Executes until halted, faulted or starving for input '''
        if self.status in TERMINAL:
            return self.status

        self.status = Status.RUNNING

        try:
            while True:
                self.exec_next()

        except Halt:
            self.retire(self.ip)
            self.status = Status.HALTED

        except Starve:
            self.status = Status.NEEDS_INPUT

        except Fault as e:
            lg.info(f'Fault at {self.ip}: {e}')
            self.status = Status.FAULTED
            self.fault = e.instruction

        except AddressError as e:
            lg.info(f'Fault at {self.ip}: {e}')
            e.pc = self.ip
            self.status = Status.FAULTED
            self.fault = e
            raise

        finally:
            self.debug_dump()

        return self.status
