import sys
from pathlib import Path
from typing import Iterable, Tuple
import logging as lg
import traceback

import click

from intcode.source.loader import Program, SourceError, load_file
from intcode.runtime.memory import Memory
from intcode.runtime.terminal import Terminal, QueueTerminal, ConsoleTerminal
import intcode.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_STARVED = 2
EXIT_KEYBOARD = 3
EXIT_SOURCE_ERROR = 4
EXIT_EXEC_ERROR = 100


class ExecutionError(RuntimeError):
    pass


class FaultError(ExecutionError):
    def __init__(self, message: str, proc: cpu.CPU):
        super().__init__(message)
        self.instruction = proc.instruction
        self.pc = proc.ip


class StarvationError(ExecutionError):
    pass


def check_status(proc: cpu.CPU, name: str):
    if proc.status == cpu.Status.FAULTED:
        raise FaultError(f'{name} faulted on {proc.instruction} at {proc.ip}', proc)

    if proc.status == cpu.Status.NEEDS_INPUT:
        raise StarvationError(f'{name} is waiting for input at {proc.ip}')


def boot(program: Program, terminal: Terminal, trace: bool = False) -> cpu.CPU:
    return cpu.CPU(program.launch(), terminal, trace)


def execute(program: Program, inputs: Iterable[int] = ()) -> list[int]:
    ''' Runs a fresh copy of the program to halt, returns its outputs '''
    terminal = QueueTerminal(inputs)
    proc = boot(program, terminal)
    proc.run()
    check_status(proc, program.name)
    return terminal.drain()


def execute_memory(program: Program, inputs: Iterable[int] = ()) -> Tuple[Memory, list[int]]:
    terminal = QueueTerminal(inputs)
    proc = boot(program, terminal)
    proc.run()
    check_status(proc, program.name)
    return proc.memory, terminal.drain()


def interact(program: Program, terminal: Terminal) -> cpu.Status:
    proc = boot(program, terminal)
    proc.run()
    check_status(proc, program.name)
    return proc.status


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-i', '--input', 'inputs', multiple=True, type=int, help='Scripted input value')
@click.argument('program_filename', type=Path)
def run(verbose: bool, inputs: Tuple[int], program_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTCODE')

    try:
        program = load_file(program_filename)

        if inputs:
            for value in execute(program, inputs):
                click.echo(value)
        else:
            interact(program, ConsoleTerminal())

        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except SourceError as e:
        lg.info(f'Cannot load program: {e}')
        sys.exit(EXIT_SOURCE_ERROR)

    except StarvationError as e:
        lg.info(f'Execution stopped without input: {e}')
        sys.exit(EXIT_STARVED)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
