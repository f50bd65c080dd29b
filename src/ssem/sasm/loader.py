import logging as lg
from pathlib import Path
from typing import Iterable

import pyparsing as pp

import ssem.sasm.grammar as grammar
import ssem.common.errors as err
from ssem.common.ops import MNEMONICS, NUM, Opcode
from ssem.common.codec import Instruction, encode, reverse32, to_signed32, valid_address
from ssem.runtime.memory import Memory


BIN_SEPARATOR = ':'
ASM_SEPARATOR = ' '
LINE_SEPARATOR = '\n'


def parse_address(text: str) -> int:
    try:
        addr = grammar.parse_token(grammar.address, text)
    except pp.ParseException:
        raise err.BadAddress(text)

    if not valid_address(addr):
        raise err.BadAddress(text)

    return addr


def parse_operand(text: str) -> int:
    try:
        value = grammar.parse_token(grammar.operand, text)
    except pp.ParseException:
        raise err.BadOperand(text)

    if not valid_address(value):
        raise err.BadOperand(text)

    return value


def parse_assembly(line: str) -> tuple[int, Instruction]:
    ''' ADDRESS MNEMONIC [OPERAND], e.g. `0010 JMP 22` or `0003 CMP` '''
    parts = line.split(ASM_SEPARATOR, 2)
    addr = parse_address(parts[0])

    if len(parts) < 2:
        raise err.BadEntry(line)

    mnemonic = parts[1]

    if mnemonic in (Opcode.CMP.mnemonic, Opcode.STP.mnemonic):
        if len(parts) > 2:
            raise err.ExtraOperand(line)

        return addr, Instruction(MNEMONICS[mnemonic])

    if len(parts) < 3:
        raise err.MissingOperand(line)

    operand = parse_operand(parts[2])

    if mnemonic == NUM:
        return addr, Instruction(Opcode.JMP, operand)

    if mnemonic not in MNEMONICS:
        raise err.BadInstruction(mnemonic)

    return addr, Instruction(MNEMONICS[mnemonic], operand)


def parse_binary(line: str) -> tuple[int, int]:
    ''' ADDRESS:BITS, bits are written least significant first '''
    parts = line.split(BIN_SEPARATOR, 1)

    if len(parts) < 2:
        raise err.BadEntry(line)

    addr = parse_address(parts[0])

    try:
        value = grammar.parse_token(grammar.word, parts[1])
    except pp.ParseException:
        raise err.BadMemory(parts[1])

    return addr, to_signed32(reverse32(value))


def parse_line(line: str) -> tuple[int, int]:
    if BIN_SEPARATOR in line:
        return parse_binary(line)

    addr, inst = parse_assembly(line)
    return addr, encode(inst)


def load_program(lines: Iterable[str]) -> Memory:
    memory = Memory()

    for number, line in enumerate(lines, start=1):
        if line == '':
            continue

        try:
            addr, word = parse_line(line)
        except err.ProgramError as e:
            raise err.LoadError(number, e) from e

        lg.debug(f'Line {number}: {addr:04d} <- {word}')
        memory.write(addr, word)

    return memory


def load_text(text: str) -> Memory:
    return load_program(text.split(LINE_SEPARATOR))


def load_file(filepath: str | Path) -> Memory:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Loading program {filepath}')
    memory = load_text(filepath.read_text())
    lg.info(f'Loaded program {filepath}')
    return memory
