"""
Hack Assembly Language Parser
=============================

This module implements the line scanner for Hack assembly. It reads the
source one line at a time, strips comments and whitespace, and tokenizes
each remaining line into an immutable Statement. Field accessors then
work on that Statement, never on the raw read buffer.

Statement Types
---------------
1. **A-instruction**: load a constant or symbol into the A register
   ```asm
   @21
   @LOOP
   ```

2. **L-instruction**: bind a label to the address of the next instruction
   ```asm
   (LOOP)
   ```

3. **C-instruction**: compute, optionally store, optionally jump
   ```asm
   D=M
   M=M+1
   D;JGT
   AM=M-1;JNE
   ```

Classification is purely syntactic: a leading ``@`` means A, a line
wrapped in parentheses means L, anything else is C.

Streaming
---------
The parser holds a single line at a time. reset() rewinds the underlying
stream so that the assembler can make its second pass without reopening
or buffering the source.

Example
-------
>>> import io
>>> parser = Parser(io.StringIO("@2\\nD=A // load\\n"))
>>> parser.advance()
1
>>> parser.symbol()
'2'
>>> parser.advance()
1
>>> parser.binary_string()
'1110110000010000'
"""

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, TextIO
import logging

from hackasm.cpu import (
    ADDRESS_SIGIL,
    COMMENT_MARKER,
    DEST_SEPARATOR,
    JUMP_SEPARATOR,
    LABEL_CLOSE,
    LABEL_OPEN,
)
from hackasm.errors import (
    AdvanceError,
    CodeError,
    CombinedErrors,
    MnemonicError,
    SourceLocation,
    SymbolError,
)
from hackasm.assembler.code import (
    combine_fields,
    encode_comp,
    encode_dest,
    encode_jump,
    format_word,
)

# Logger for this module
logger = logging.getLogger(__name__)

SOURCE_ENCODING = "utf-8"


# =============================================================================
# Statement Model
# =============================================================================

class InstructionType(Enum):
    """The three kinds of Hack statement."""
    A_INSTRUCTION = auto()  # @value
    L_INSTRUCTION = auto()  # (LABEL)
    C_INSTRUCTION = auto()  # dest=comp;jump


@dataclass(frozen=True)
class Statement:
    """
    One tokenized source statement.

    Attributes:
        text: The statement after comment and whitespace stripping
        line_number: 1-based source line the statement came from
        type: The instruction kind
        symbol_text: Text after '@' or between the parentheses (A/L only)
        dest_text: Text before '=' (C only, None when absent)
        comp_text: Text between '=' and ';' (C only)
        jump_text: Text after ';' (C only, None when absent)
    """
    text: str
    line_number: int
    type: InstructionType
    symbol_text: Optional[str] = None
    dest_text: Optional[str] = None
    comp_text: Optional[str] = None
    jump_text: Optional[str] = None

    @property
    def emits_code(self) -> bool:
        """True for statements that occupy a ROM address."""
        return self.type is not InstructionType.L_INSTRUCTION


# =============================================================================
# Tokenization
# =============================================================================

def strip_comment(line: str) -> str:
    """Remove a trailing // comment and surrounding whitespace."""
    return line.split(COMMENT_MARKER, 1)[0].strip()


def classify(text: str) -> InstructionType:
    """Classify a stripped statement by its leading/trailing characters."""
    if text.startswith(ADDRESS_SIGIL):
        return InstructionType.A_INSTRUCTION
    if text.startswith(LABEL_OPEN) and text.endswith(LABEL_CLOSE):
        return InstructionType.L_INSTRUCTION
    return InstructionType.C_INSTRUCTION


def tokenize_line(text: str, line_number: int) -> Statement:
    """
    Split a stripped statement into its fields.

    C-instructions are split on the first '=' and the first ';' after it;
    each field is trimmed. A missing separator leaves its field as None.
    """
    kind = classify(text)

    if kind is InstructionType.A_INSTRUCTION:
        return Statement(text, line_number, kind, symbol_text=text[1:].strip())

    if kind is InstructionType.L_INSTRUCTION:
        return Statement(text, line_number, kind, symbol_text=text[1:-1].strip())

    dest_text: Optional[str] = None
    rest = text
    if DEST_SEPARATOR in text:
        dest_text, rest = text.split(DEST_SEPARATOR, 1)
        dest_text = dest_text.strip()

    comp_text, separator, jump_text = rest.partition(JUMP_SEPARATOR)
    return Statement(
        text,
        line_number,
        kind,
        dest_text=dest_text,
        comp_text=comp_text.strip(),
        jump_text=jump_text.strip() if separator else None,
    )


# =============================================================================
# Parser Class
# =============================================================================

class Parser:
    """
    Line scanner and instruction parser for Hack assembly.

    The parser owns a text stream and a current statement. advance()
    moves to the next statement; the accessor methods describe it.

    Attributes:
        filename: Name used in error locations
    """

    def __init__(self, stream: TextIO | BinaryIO, filename: str = "<input>"):
        """
        Initialize the parser.

        Args:
            stream: Seekable text or UTF-8 byte stream holding the source
            filename: Name used in error messages
        """
        self._stream = stream
        self.filename = filename
        self._owns_stream = False
        self._line_number = 0
        self._statement = tokenize_line("", 0)

    @classmethod
    def from_file(cls, filepath: str | Path) -> "Parser":
        """
        Open a source file for parsing.

        The file is read as bytes and decoded one line at a time, so a
        bad byte is reported on the line that holds it. It stays open
        until close() is called (or the parser is used as a context
        manager).

        Raises:
            FileNotFoundError: If the source file does not exist
        """
        stream = open(filepath, "rb")
        parser = cls(stream, str(filepath))
        parser._owns_stream = True
        return parser

    def close(self) -> None:
        """Close the stream if the parser opened it."""
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "Parser":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def current_line_number(self) -> int:
        """Number of raw lines read since the start (or last reset)."""
        return self._line_number

    @property
    def current_line(self) -> str:
        """The current statement text ("" before the first advance)."""
        return self._statement.text

    @property
    def statement(self) -> Statement:
        return self._statement

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._statement.line_number)

    # =========================================================================
    # Scanning
    # =========================================================================

    def advance(self) -> int:
        """
        Move to the next statement.

        Blank and comment-only lines are consumed silently.

        Returns:
            The number of raw lines consumed, including skipped ones, or
            0 when the end of input was reached without a statement

        Raises:
            AdvanceError: If reading or decoding the next line fails
        """
        self._statement = tokenize_line("", self._line_number)
        lines_read = 0

        while True:
            try:
                raw = self._stream.readline()
                if isinstance(raw, bytes):
                    raw = raw.decode(SOURCE_ENCODING)
            except (OSError, UnicodeDecodeError) as e:
                raise AdvanceError(
                    f"cannot read source: {e}",
                    location=SourceLocation(self.filename, self._line_number + 1),
                ) from e

            if not raw:
                return 0

            lines_read += 1
            self._line_number += 1
            text = strip_comment(raw)
            if text:
                self._statement = tokenize_line(text, self._line_number)
                return lines_read

    def statements(self) -> Iterator[Statement]:
        """Yield every remaining statement in source order."""
        while self.advance():
            yield self._statement

    def reset(self) -> None:
        """
        Rewind to the start of the source for another pass.

        Raises:
            AdvanceError: If the stream cannot be rewound
        """
        try:
            self._stream.seek(0)
        except (OSError, ValueError) as e:
            raise AdvanceError(
                f"cannot rewind source: {e}",
                location=SourceLocation(self.filename, self._line_number),
            ) from e
        self._line_number = 0
        self._statement = tokenize_line("", 0)
        logger.debug(f"Rewound {self.filename}")

    # =========================================================================
    # Classification and Fields
    # =========================================================================

    def instruction_type(self) -> InstructionType:
        return self._statement.type

    def symbol(self) -> str:
        """
        Return the symbol of an A- or L-instruction.

        Raises:
            SymbolError: If the statement is a C-instruction or the symbol
                         is empty
        """
        stmt = self._statement
        if stmt.type is InstructionType.C_INSTRUCTION:
            raise SymbolError(
                f"'{stmt.text}' is not an A or L instruction",
                location=self._location(),
                source_line=stmt.text,
            )
        if not stmt.symbol_text:
            raise SymbolError(
                f"'{stmt.text}' does not name a symbol",
                location=self._location(),
                source_line=stmt.text,
            )
        return stmt.symbol_text

    def dest(self) -> int:
        """Return the encoded dest field of a C-instruction."""
        self._require_compute()
        return self._encode_field("dest", encode_dest, self._statement.dest_text)

    def comp(self) -> int:
        """Return the encoded comp field of a C-instruction."""
        self._require_compute()
        return self._encode_field("comp", encode_comp, self._statement.comp_text)

    def jump(self) -> int:
        """Return the encoded jump field of a C-instruction."""
        self._require_compute()
        return self._encode_field("jump", encode_jump, self._statement.jump_text)

    def binary_string(self) -> str:
        """
        Encode the current C-instruction as a 16-character binary string.

        All three fields are evaluated before any error is raised, so a
        line with a bad comp and a bad jump reports both.

        Raises:
            CodeError: If the statement is not a C-instruction
            CombinedErrors: If any field failed to encode
        """
        self._require_compute()

        errors: list[CodeError] = []
        fields: dict[str, int] = {}
        for name, getter in (("dest", self.dest), ("comp", self.comp), ("jump", self.jump)):
            try:
                fields[name] = getter()
            except CodeError as e:
                errors.append(e)

        if errors:
            raise CombinedErrors(errors)

        return format_word(combine_fields(fields["dest"], fields["comp"], fields["jump"]))

    def _require_compute(self) -> None:
        if self._statement.type is not InstructionType.C_INSTRUCTION or not self._statement.text:
            raise CodeError(
                f"'{self._statement.text}' is not a C instruction",
                location=self._location(),
                source_line=self._statement.text,
            )

    def _encode_field(self, name: str, encoder, text: Optional[str]) -> int:
        """Run a field encoder, re-raising its failure with location info."""
        try:
            return encoder(text)
        except MnemonicError as e:
            raise CodeError(
                f"'{self._statement.text}' does not contain a valid {name} mnemonic",
                location=self._location(),
                hint=e.hint,
                source_line=self._statement.text,
                cause=e,
            ) from e
