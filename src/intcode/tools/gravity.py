import sys
from pathlib import Path
from typing import Iterable, Tuple
import logging as lg
import traceback

import click

from intcode.common.conf import GRAVITY_TARGET, NOUN_ADDR, VERB_ADDR, RESULT_ADDR, NOUN_VERB_RANGE
from intcode.source.loader import Program, SourceError, load_file
from intcode.runtime.memory import AddressError
import intcode.runtime.emulator as emulator


def gravity_assist(program: Program, noun: int, verb: int) -> int:
    patched = program.patched({NOUN_ADDR: noun, VERB_ADDR: verb})
    memory, _ = emulator.execute_memory(patched)
    return memory[RESULT_ADDR]


def find_noun_verb(
    program: Program,
    target: int = GRAVITY_TARGET,
    nouns: Iterable[int] = NOUN_VERB_RANGE,
    verbs: Iterable[int] = NOUN_VERB_RANGE
) -> Tuple[int, int]:
    verbs = list(verbs)

    for noun in nouns:
        for verb in verbs:
            try:
                result = gravity_assist(program, noun, verb)

            except (AddressError, emulator.ExecutionError) as e:
                lg.debug(f'Rejected {noun}/{verb}: {e}')
                continue

            if result == target:
                lg.info(f'prog({noun}, {verb}) = {result}')
                return (noun, verb)

    raise LookupError(f'No noun/verb gives {target}')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-t', '--target', type=int, default=GRAVITY_TARGET, show_default=True)
@click.option('-n', '--noun', type=int, help='Run once with this noun')
@click.option('-b', '--verb', type=int, help='Run once with this verb')
@click.argument('program_filename', type=Path)
def gravity(
    verbose: bool,
    target: int,
    noun: int | None,
    verb: int | None,
    program_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTCODE GRAVITY ASSIST')

    if (noun is None) != (verb is None):
        raise click.UsageError('--noun and --verb go together')

    try:
        program = load_file(program_filename)

        if noun is not None and verb is not None:
            click.echo(gravity_assist(program, noun, verb))
        else:
            noun, verb = find_noun_verb(program, target)
            click.echo(100 * noun + verb)

        sys.exit(emulator.EXIT_HALT)

    except SourceError as e:
        lg.info(f'Cannot load program: {e}')
        sys.exit(emulator.EXIT_SOURCE_ERROR)

    except KeyboardInterrupt:
        lg.info('Search halted by the user')
        sys.exit(emulator.EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Search halted on general error {e}')
        traceback.print_exc()
        sys.exit(emulator.EXIT_EXEC_ERROR)


if __name__ == '__main__':
    gravity()
