from dataclasses import dataclass

import ssem.common.hwconf as hw
from ssem.common.ops import Opcode, DECODE_TABLE


def to_signed32(value: int) -> int:
    value &= hw.WORD_MASK
    return value - (1 << hw.WORD_BITS) if value & hw.SIGN_BIT else value


def reverse32(value: int) -> int:
    value &= hw.WORD_MASK
    result = 0

    for _ in range(hw.WORD_BITS):
        result = (result << 1) | (value & 1)
        value >>= 1

    return result


def valid_address(value: int) -> bool:
    return 0 <= value < hw.WORDS


@dataclass(frozen=True)
class Instruction:
    op: Opcode
    operand: int = 0

    def __post_init__(self):
        if not valid_address(self.operand):
            raise ValueError(f'Operand {self.operand} is not a store line')

        if not self.op.has_operand and self.operand != 0:
            raise ValueError(f'{self.op.mnemonic} takes no operand')

    def __str__(self) -> str:
        if self.op.has_operand:
            return f'{self.op.mnemonic} {self.operand}'

        return self.op.mnemonic


def decode(word: int) -> Instruction:
    op = DECODE_TABLE[(word >> hw.OPCODE_SHIFT) & hw.OPCODE_MASK]
    operand = word & hw.OPERAND_MASK if op.has_operand else 0
    return Instruction(op, operand)


def encode(inst: Instruction) -> int:
    return (inst.op.value << hw.OPCODE_SHIFT) | inst.operand


def raw_word(word: int) -> int:
    ''' LSB-first view of a word, as the CRT shows it '''
    return reverse32(word)
