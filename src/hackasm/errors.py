"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (source-level errors)
    ├── MnemonicError - unrecognized field mnemonic
    │   ├── InvalidDestMnemonic
    │   ├── InvalidCompMnemonic
    │   └── InvalidJumpMnemonic
    ├── AdvanceError - the source stream could not be read
    ├── SymbolError - symbol requested from a compute instruction
    ├── CodeError - compute field missing, invalid, or not applicable
    │   └── CombinedErrors - several field failures on one instruction
    ├── UndefinedSymbolError - symbol unresolved after binding
    └── AddressRangeError - literal does not fit in an A-instruction

Error messages follow this format:
    filename:line: error: description
        source_line_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional, Sequence


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Location of a statement in the source for error reporting.

    Hack statements occupy a whole line, so a line number is as precise
    as a location gets.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all errors tied to assembly source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The statement text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line_number(self) -> Optional[int]:
        """Line number of the error, or None when it has no location."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:12: error: invalid comp mnemonic 'D+2'
                D=D+2
            hint: comp must be one of the ALU operations, e.g. 'D+1'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MnemonicError(AssemblerError):
    """
    An unrecognized dest, comp or jump field.

    Raised by the field encoder, which knows nothing about source lines;
    the parser wraps it in a CodeError that carries the location.

    Attributes:
        mnemonic: The offending field text ("" when the field was absent)
    """

    field_name = "field"

    def __init__(self, mnemonic: str, hint: Optional[str] = None):
        self.mnemonic = mnemonic
        super().__init__(f"invalid {self.field_name} mnemonic '{mnemonic}'", hint=hint)


class InvalidDestMnemonic(MnemonicError):
    """The dest field is not one of M, D, MD, A, AM, AD, AMD."""
    field_name = "dest"


class InvalidCompMnemonic(MnemonicError):
    """The comp field is absent or not a legal ALU computation."""
    field_name = "comp"


class InvalidJumpMnemonic(MnemonicError):
    """The jump field is not one of JGT, JEQ, JGE, JLT, JNE, JLE, JMP."""
    field_name = "jump"


class AdvanceError(AssemblerError):
    """
    The source stream failed while reading the next statement.

    Wraps the underlying OSError or UnicodeDecodeError, which is kept as
    the exception's __cause__.
    """
    pass


class SymbolError(AssemblerError):
    """
    A symbol was requested from a statement that has none.

    Raised when asking a compute instruction for its symbol, or when an
    address or label instruction names an empty symbol.
    """
    pass


class CodeError(AssemblerError):
    """
    A compute-instruction field could not be produced.

    Either the statement is not a compute instruction, or one of its
    fields failed to encode. In the latter case the MnemonicError is
    available as ``cause`` and as the exception's __cause__.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        cause: Optional[MnemonicError] = None,
    ):
        self.cause = cause
        super().__init__(message, location=location, hint=hint, source_line=source_line)


class CombinedErrors(CodeError):
    """
    Every field failure of a single compute instruction.

    binary_string() evaluates dest, comp and jump independently so that
    a line with several bad fields reports all of them at once.

    Attributes:
        errors: The individual CodeErrors, in dest, comp, jump order
    """

    def __init__(self, errors: Sequence[CodeError]):
        self.errors = list(errors)
        first = self.errors[0] if self.errors else None
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        details = "; ".join(e.message for e in self.errors)
        super().__init__(
            f"{count} field {noun}: {details}",
            location=first.location if first else None,
            source_line=first.source_line if first else None,
            cause=first.cause if first else None,
        )

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class UndefinedSymbolError(AssemblerError):
    """
    A symbol could not be resolved after it should have been bound.

    In a correct run every symbol is either predefined, a label, or a
    freshly allocated variable, so this signals an internal fault.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    An A-instruction value does not fit in 15 bits.

    Raised for numeric constants above 32767 and for a variable that
    would be allocated past the top of the address space.

    Example:
        @40000  ; Error: A-instructions hold 0..32767
    """

    def __init__(
        self,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        kind: str = "constant",
    ):
        self.value = value
        super().__init__(
            f"{kind} {value} out of range for an A-instruction",
            location=location,
            hint="A-instruction values must be between 0 and 32767",
            source_line=source_line,
        )
