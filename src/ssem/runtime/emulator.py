import sys
import time
import logging as lg
import traceback
from pathlib import Path

import click

from ssem.common.codec import Instruction
from ssem.common.errors import LoadError, RunawayProgramCounter
from ssem.runtime.cpu import CPU
from ssem.runtime.display import format_state
from ssem.runtime.memory import Memory
from ssem.sasm.loader import load_file


EXIT_HALT = 0
EXIT_LOAD_ERROR = 1
EXIT_RUNAWAY = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100

COMMANDS = ['step', 'run', 'reset', 'reboot', 'quit']


def show(proc: CPU, inst: Instruction | None = None):
    click.clear()

    if inst is not None:
        click.echo(inst)

    click.echo(format_state(proc))
    click.echo()


def execute(memory: Memory, delay: float = 0.0, display: bool = False) -> CPU:
    proc = CPU(memory, observer=show if display else None)

    if display:
        show(proc)

    while proc.running:
        proc.step()

        if delay > 0:
            time.sleep(delay)

    return proc


def interactive(program: Path, delay: float = 0.0) -> CPU:
    proc = CPU(load_file(program))

    while True:
        show(proc)
        command = click.prompt('Command', type=click.Choice(COMMANDS), default='step')

        try:
            if command == 'quit':
                return proc

            if command == 'step':
                proc.step()

            if command == 'run':
                while proc.running:
                    proc.step()
                    show(proc)

                    if delay > 0:
                        time.sleep(delay)

            if command == 'reset':
                proc.reset()

            if command == 'reboot':
                proc.reboot(load_file(program))

        except RunawayProgramCounter as e:
            lg.warning(f'Machine halted: {e}')

        except (LoadError, OSError, UnicodeDecodeError) as e:
            lg.warning(f'Reboot failed, keeping the old store: {e}')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug and shows every step')
@click.option('-d', '--delay', type=float, default=0.0, show_default=True,
              help='Seconds to wait between displayed steps')
@click.option('-i', '--interactive', 'is_interactive', is_flag=True,
              help='Drive the machine from a step/run/reset/reboot/quit prompt')
@click.argument('program', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(verbose: bool, delay: float, is_interactive: bool, program: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('SSEM')

    try:
        if is_interactive:
            interactive(program, delay)
        else:
            proc = execute(load_file(program), delay, display=verbose or delay > 0)
            click.echo(f'ci: {proc.ci}, acc: {proc.acc}')

        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except LoadError as e:
        lg.error(f'Couldn\'t load program from {program}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    except RunawayProgramCounter as e:
        lg.info(f'Execution halted on {e}')
        sys.exit(EXIT_RUNAWAY)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
