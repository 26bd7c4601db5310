"""
Hack CPU Package
================

Architecture definitions for the Hack computer: the mnemonic tables used
to encode C-instructions and the predefined symbol table.

Modules:
    hack: Instruction word layout, mnemonic tables, predefined symbols
          and lookup helpers.

Usage:
    from hackasm.cpu import (
        DEST_MNEMONICS,
        COMP_CODES,
        PREDEFINED_SYMBOLS,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.cpu.hack import (
    # Word layout
    WORD_BITS,
    MAX_ADDRESS,
    VARIABLE_BASE_ADDRESS,
    C_INSTRUCTION_PREFIX,
    COMP_SHIFT,
    DEST_SHIFT,
    JUMP_SHIFT,
    # Syntax markers
    COMMENT_MARKER,
    ADDRESS_SIGIL,
    LABEL_OPEN,
    LABEL_CLOSE,
    DEST_SEPARATOR,
    JUMP_SEPARATOR,
    # Tables
    DEST_MNEMONICS,
    JUMP_MNEMONICS,
    COMP_CODES,
    PREDEFINED_SYMBOLS,
    # Lookup functions
    is_predefined,
)

__all__ = [
    # Word layout
    "WORD_BITS",
    "MAX_ADDRESS",
    "VARIABLE_BASE_ADDRESS",
    "C_INSTRUCTION_PREFIX",
    "COMP_SHIFT",
    "DEST_SHIFT",
    "JUMP_SHIFT",
    # Syntax markers
    "COMMENT_MARKER",
    "ADDRESS_SIGIL",
    "LABEL_OPEN",
    "LABEL_CLOSE",
    "DEST_SEPARATOR",
    "JUMP_SEPARATOR",
    # Tables
    "DEST_MNEMONICS",
    "JUMP_MNEMONICS",
    "COMP_CODES",
    "PREDEFINED_SYMBOLS",
    # Lookup functions
    "is_predefined",
]
