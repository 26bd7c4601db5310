"""
Hack Assembler
==============

Converts Hack assembly source (.asm) into Hack machine code text (.hack):
one 16-character binary word per instruction.

Main Components
---------------
- **Assembler**: Drives the two passes and writes output files
- **Parser**: Streams the source and tokenizes one statement at a time
- **SymbolTable**: Maps labels, variables and predefined symbols to addresses
- **encode_dest / encode_comp / encode_jump**: C-instruction field encoder

Assembly Process
----------------
1. **Pass 1**: bind each ``(LABEL)`` to the ROM address of the next
   instruction.
2. **Pass 2**: rewind, resolve ``@symbol`` references (allocating new
   variables from RAM[16] upward) and encode every instruction.

Example Usage
-------------
>>> from hackasm.assembler import assemble
>>> assemble("@2\\nD=A\\n@3\\nD=D+A\\n@0\\nM=D\\n")
['0000000000000010', '1110110000010000', '0000000000000011', '1110000010010000', '0000000000000000', '1110001100001000']
"""

from hackasm.assembler.assembler import Assembler, ListingEntry, assemble, assemble_file
from hackasm.assembler.parser import (
    InstructionType,
    Parser,
    Statement,
    classify,
    strip_comment,
    tokenize_line,
)
from hackasm.assembler.symbols import SymbolTable
from hackasm.assembler.code import (
    combine_fields,
    encode_comp,
    encode_dest,
    encode_jump,
    format_word,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "ListingEntry",
    "assemble",
    "assemble_file",
    # Parser
    "Parser",
    "Statement",
    "InstructionType",
    "classify",
    "strip_comment",
    "tokenize_line",
    # Symbol table
    "SymbolTable",
    # Field encoder
    "encode_dest",
    "encode_comp",
    "encode_jump",
    "combine_fields",
    "format_word",
]
