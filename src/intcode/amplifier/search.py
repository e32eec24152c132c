import sys
from itertools import permutations
from pathlib import Path
from typing import Sequence, Tuple, cast
import logging as lg
import traceback

import click

from intcode.common.conf import INITIAL_SIGNAL, CircuitSettings
from intcode.source.loader import Program, SourceError, load_file
from intcode.amplifier.circuit import DeadlockError, AmplifierFault, AmplifierAddressError, thruster_signal
import intcode.runtime.emulator as emulator


def max_thruster_signal(
    program: Program,
    phases: Sequence[int],
    feedback: bool = False,
    signal: int = INITIAL_SIGNAL
) -> Tuple[int, Tuple[int, ...]]:
    ''' Tries every ordering of the phases, first best ordering wins '''
    if not phases:
        raise ValueError('No phases to try')

    best: Tuple[int, Tuple[int, ...]] | None = None

    for sequence in permutations(phases):
        result = thruster_signal(program, sequence, feedback, signal)
        lg.debug(f'Phases {sequence}: {result}')

        if best is None or result > best[0]:
            best = (result, sequence)

    best = cast(Tuple[int, Tuple[int, ...]], best)
    lg.info(f'Best phases {best[1]}: {best[0]}')
    return best


def parse_phases(ctx, param, value: str | None):
    if value is None:
        return None

    try:
        return tuple(int(p) for p in value.split(','))
    except ValueError:
        raise click.BadParameter('expected comma-separated integers')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--feedback/--no-feedback', default=None, help='Wire the last amplifier back to the first')
@click.option('-p', '--phases', callback=parse_phases, help='Comma-separated phase settings')
@click.option('-c', '--config', type=click.Path(exists=True, path_type=Path), help='TOML settings file')
@click.argument('program_filename', type=Path)
def amp(
    verbose: bool,
    feedback: bool | None,
    phases: Tuple[int, ...] | None,
    config: Path | None,
    program_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTCODE AMPLIFIERS')

    settings = CircuitSettings.from_toml(config) if config else CircuitSettings()
    settings.update(feedback=feedback, phases=phases)

    try:
        program = load_file(program_filename)
        signal, sequence = max_thruster_signal(
            program,
            settings.phases,
            settings.feedback,
            settings.signal
        )

        click.echo(f'{",".join(map(str, sequence))} {signal}')
        sys.exit(emulator.EXIT_HALT)

    except SourceError as e:
        lg.info(f'Cannot load program: {e}')
        sys.exit(emulator.EXIT_SOURCE_ERROR)

    except DeadlockError as e:
        lg.info(f'Circuit deadlocked: {e}')
        sys.exit(emulator.EXIT_STARVED)

    except (AmplifierFault, AmplifierAddressError) as e:
        lg.info(f'Circuit faulted: {e}')
        sys.exit(emulator.EXIT_EXEC_ERROR)

    except KeyboardInterrupt:
        lg.info('Search halted by the user')
        sys.exit(emulator.EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Search halted on general error {e}')
        traceback.print_exc()
        sys.exit(emulator.EXIT_EXEC_ERROR)


if __name__ == '__main__':
    amp()
