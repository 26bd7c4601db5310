"""
hackasm - Assembler for the Hack Computer
=========================================

This package translates Hack assembly language into Hack machine code.
The Hack computer is a 16-bit machine with two instruction kinds:
A-instructions load a 15-bit value into the address register, and
C-instructions drive the ALU, store its output and optionally jump.

Main Components
---------------
- **assembler**: Two-pass assembler (hackasm)
    Converts assembly source files (.asm) to machine code text (.hack)

- **cpu**: Architecture tables
    Mnemonic codes and predefined symbols

Quick Start
-----------
Assemble a program:
    >>> from hackasm import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm
    $ hackasm Max.asm -o build/Max.hack -s build/Max.sym
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import Assembler, assemble, assemble_file
from hackasm.errors import (
    HackError,
    SourceLocation,
    AssemblerError,
    MnemonicError,
    InvalidDestMnemonic,
    InvalidCompMnemonic,
    InvalidJumpMnemonic,
    AdvanceError,
    SymbolError,
    CodeError,
    CombinedErrors,
    UndefinedSymbolError,
    AddressRangeError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "SourceLocation",
    "AssemblerError",
    "MnemonicError",
    "InvalidDestMnemonic",
    "InvalidCompMnemonic",
    "InvalidJumpMnemonic",
    "AdvanceError",
    "SymbolError",
    "CodeError",
    "CombinedErrors",
    "UndefinedSymbolError",
    "AddressRangeError",
]
