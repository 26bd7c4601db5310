"""
Hack CPU Instruction Set Definitions
====================================

Fixed lookup tables for the Hack computer's 16-bit instruction word.

Instruction Formats
-------------------
```
A-instruction:  0 vvvvvvvvvvvvvvv          @value
C-instruction:  1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
                      └──── comp ────┘  └dest┘  └jump┘
```

The dest and jump fields are encoded positionally: the n-th mnemonic in
its table (0-indexed) has code n + 1, and an absent field encodes as 0.
The comp field is a 7-bit value whose top bit (``a``) selects M instead
of A as the ALU's second operand.

Memory Map
----------
| Range         | Use                         |
|---------------|-----------------------------|
| 0 - 15        | virtual registers R0..R15   |
| 16 - 255      | variables (allocated from 16) |
| 16384 - 24575 | screen memory map (SCREEN)  |
| 24576         | keyboard register (KBD)     |
"""

from types import MappingProxyType
from typing import Mapping


# =============================================================================
# Word Layout
# =============================================================================

WORD_BITS = 16
MAX_ADDRESS = 0x7FFF           # A-instructions carry 15 bits
VARIABLE_BASE_ADDRESS = 16     # First RAM word past R0..R15

C_INSTRUCTION_PREFIX = 0b111   # bits 15-13
COMP_SHIFT = 6                 # bits 12-6
DEST_SHIFT = 3                 # bits 5-3
JUMP_SHIFT = 0                 # bits 2-0


# =============================================================================
# Syntax Markers
# =============================================================================

COMMENT_MARKER = "//"
ADDRESS_SIGIL = "@"
LABEL_OPEN = "("
LABEL_CLOSE = ")"
DEST_SEPARATOR = "="
JUMP_SEPARATOR = ";"


# =============================================================================
# Mnemonic Tables
# =============================================================================

# Order matters: code = index + 1 (d1 d2 d3 = A D M)
DEST_MNEMONICS: tuple[str, ...] = (
    "M",     # 001
    "D",     # 010
    "MD",    # 011
    "A",     # 100
    "AM",    # 101
    "AD",    # 110
    "AMD",   # 111
)

# Order matters: code = index + 1 (j1 j2 j3 = out<0 out=0 out>0)
JUMP_MNEMONICS: tuple[str, ...] = (
    "JGT",   # 001
    "JEQ",   # 010
    "JGE",   # 011
    "JLT",   # 100
    "JNE",   # 101
    "JLE",   # 110
    "JMP",   # 111
)

COMP_CODES: Mapping[str, int] = MappingProxyType({
    # a=0
    "0":   0b0101010,
    "1":   0b0111111,
    "-1":  0b0111010,
    "D":   0b0001100,
    "A":   0b0110000,
    "!D":  0b0001101,
    "!A":  0b0110001,
    "-D":  0b0001111,
    "-A":  0b0110011,
    "D+1": 0b0011111,
    "A+1": 0b0110111,
    "D-1": 0b0001110,
    "A-1": 0b0110010,
    "D+A": 0b0000010,
    "D-A": 0b0010011,
    "A-D": 0b0000111,
    "D&A": 0b0000000,
    "D|A": 0b0010101,
    # a=1
    "M":   0b1110000,
    "!M":  0b1110001,
    "-M":  0b1110011,
    "M+1": 0b1110111,
    "M-1": 0b1110010,
    "D+M": 0b1000010,
    "D-M": 0b1010011,
    "M-D": 0b1000111,
    "D&M": 0b1000000,
    "D|M": 0b1010101,
})


# =============================================================================
# Predefined Symbols
# =============================================================================

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType({
    **{f"R{i}": i for i in range(16)},
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    "SCREEN": 0x4000,
    "KBD": 0x6000,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def is_predefined(name: str) -> bool:
    return name in PREDEFINED_SYMBOLS
