"""
Hack C-Instruction Field Encoder
================================

Pure lookups from field mnemonics to their bit values. The encoder has no
notion of source lines; callers attach location information to the
MnemonicError it raises.

| Field | Width | Absent | Unknown               |
|-------|-------|--------|-----------------------|
| dest  | 3     | 0      | InvalidDestMnemonic   |
| comp  | 7     | error  | InvalidCompMnemonic   |
| jump  | 3     | 0      | InvalidJumpMnemonic   |
"""

from typing import Optional

from hackasm.cpu import (
    COMP_CODES,
    C_INSTRUCTION_PREFIX,
    COMP_SHIFT,
    DEST_MNEMONICS,
    DEST_SHIFT,
    JUMP_MNEMONICS,
    JUMP_SHIFT,
    WORD_BITS,
)
from hackasm.errors import (
    InvalidCompMnemonic,
    InvalidDestMnemonic,
    InvalidJumpMnemonic,
)


def encode_dest(mnemonic: Optional[str]) -> int:
    """
    Encode a dest mnemonic as its 3-bit value.

    Args:
        mnemonic: The dest field text, or None when the instruction has
                  no dest

    Returns:
        0 for None, otherwise the mnemonic's table position plus one

    Raises:
        InvalidDestMnemonic: If the mnemonic is not in the dest table
    """
    if mnemonic is None:
        return 0
    try:
        return DEST_MNEMONICS.index(mnemonic) + 1
    except ValueError:
        raise InvalidDestMnemonic(
            mnemonic,
            hint=f"dest must be one of {', '.join(DEST_MNEMONICS)}",
        ) from None


def encode_comp(mnemonic: Optional[str]) -> int:
    """
    Encode a comp mnemonic as its 7-bit value (including the a-bit).

    Every C-instruction has a comp field, so None is an error too.

    Raises:
        InvalidCompMnemonic: If the mnemonic is None or not a legal
                             computation
    """
    if mnemonic is None:
        raise InvalidCompMnemonic("", hint="a C-instruction needs a comp field")
    code = COMP_CODES.get(mnemonic)
    if code is None:
        raise InvalidCompMnemonic(mnemonic)
    return code


def encode_jump(mnemonic: Optional[str]) -> int:
    """
    Encode a jump mnemonic as its 3-bit value.

    Raises:
        InvalidJumpMnemonic: If the mnemonic is not in the jump table
    """
    if mnemonic is None:
        return 0
    try:
        return JUMP_MNEMONICS.index(mnemonic) + 1
    except ValueError:
        raise InvalidJumpMnemonic(
            mnemonic,
            hint=f"jump must be one of {', '.join(JUMP_MNEMONICS)}",
        ) from None


def combine_fields(dest: int, comp: int, jump: int) -> int:
    """Assemble encoded fields into a C-instruction word."""
    return (
        (C_INSTRUCTION_PREFIX << 13)
        | (comp << COMP_SHIFT)
        | (dest << DEST_SHIFT)
        | (jump << JUMP_SHIFT)
    )


def format_word(value: int) -> str:
    """Format a word as a zero-padded 16-character binary string."""
    return format(value, f"0{WORD_BITS}b")
