WORDS = 32                  # Store lines on the CRT
WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF
SIGN_BIT = 0x80000000

OPCODE_SHIFT = 13           # Function number lives in bits 13..15
OPCODE_MASK = 0x7
OPERAND_MASK = 0x1F         # Line number lives in bits 0..4

START_CI = -1               # CI is incremented before the first fetch

