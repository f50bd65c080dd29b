import logging as lg
import sys
from pathlib import Path

import click

import ssem.common.hwconf as hw
from ssem.common.codec import decode, encode
from ssem.common.errors import LoadError
from ssem.runtime.memory import Memory
from ssem.sasm.loader import load_file


EXIT_OK = 0
EXIT_LOAD_ERROR = 1


def binary_line(memory: Memory, addr: int) -> str:
    return f'{addr:04d}:{memory.raw(addr):0{hw.WORD_BITS}b}'


def assembly_line(memory: Memory, addr: int) -> str:
    word = memory.read(addr)
    inst = decode(word)

    # Only words without stray bits survive a trip through assembly
    if encode(inst) != word:
        return binary_line(memory, addr)

    return f'{addr:04d} {inst}'


def to_binary(memory: Memory) -> list[str]:
    return [binary_line(memory, addr) for addr in range(hw.WORDS)]


def to_assembly(memory: Memory) -> list[str]:
    return [assembly_line(memory, addr) for addr in range(hw.WORDS)]


FORMATS = {
    'asm': to_assembly,
    'bin': to_binary,
}


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-f', '--format', 'fmt', type=click.Choice(list(FORMATS)), default='asm',
              help='Notation of the listing')
@click.argument('program', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def listing(verbose: bool, fmt: str, program: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('SSEM LIST')

    try:
        memory = load_file(program)

    except LoadError as e:
        lg.error(f'Couldn\'t load program from {program}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    for line in FORMATS[fmt](memory):
        click.echo(line)

    sys.exit(EXIT_OK)


if __name__ == '__main__':
    listing()
