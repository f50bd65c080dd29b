from enum import Enum


class Opcode(Enum):
    ''' Function numbers as read from bits 13..15 '''

    JMP = 0x0   # CI = S
    JRP = 0x1   # CI = CI + S
    LDN = 0x2   # A = -S
    STO = 0x3   # S = A
    SUB = 0x4   # A = A - S
    CMP = 0x6   # if A < 0: CI = CI + 1
    STP = 0x7   # halt

    @property
    def mnemonic(self) -> str:
        return self.name

    @property
    def has_operand(self) -> bool:
        return self not in (Opcode.CMP, Opcode.STP)


SUB2 = 0x5  # A = A - S (alternate wiring of the same function)

# All eight encodings, folded onto the seven operations
DECODE_TABLE = {op.value: op for op in Opcode}
DECODE_TABLE[SUB2] = Opcode.SUB

MNEMONICS = {op.mnemonic: op for op in Opcode}

# Assembler sugar for a constant word
NUM = 'NUM'
