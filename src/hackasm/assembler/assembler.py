"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, which drives the parser through
two passes to turn Hack assembly into .hack machine code.

Pass 1 (Symbol Collection)
--------------------------
- Scan every statement
- Count A- and C-instructions (labels occupy no ROM address)
- Bind each label to the address of the instruction that follows it

Pass 2 (Code Generation)
------------------------
- Rewind the parser and scan again
- Resolve A-instruction symbols, allocating variables from RAM[16]
- Encode C-instructions
- Emit one 16-character binary word per instruction

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
... (LOOP)
...     @LOOP
...     0;JMP
... ''')
['0000000000000000', '1110101010000111']
>>> asm.write_hack("Loop.hack")

Command-Line Usage
------------------
    $ hackasm Prog.asm -o Prog.hack -s Prog.sym -l Prog.lst
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO
import io
import logging

from hackasm.assembler.code import format_word
from hackasm.assembler.parser import InstructionType, Parser
from hackasm.assembler.symbols import SymbolTable
from hackasm.cpu import MAX_ADDRESS, VARIABLE_BASE_ADDRESS, is_predefined
from hackasm.errors import AddressRangeError, SourceLocation, UndefinedSymbolError

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Listing Entry
# =============================================================================

@dataclass
class ListingEntry:
    """
    One emitted word with its origin, for the listing file.

    Attributes:
        address: ROM address of the instruction
        word: The 16-character binary word
        line_number: Source line the instruction came from
        source: Statement text after comment stripping
    """
    address: int
    word: str
    line_number: int
    source: str


# =============================================================================
# Assembler Class
# =============================================================================

class Assembler:
    """
    Two-pass Hack assembler.

    Each assemble_* call is a complete, independent run with a fresh
    symbol table; the results of the last run are kept for the get_* and
    write_* methods.

    Attributes:
        verbose: If True, print progress messages
    """

    def __init__(self, verbose: bool = False):
        self._verbose = verbose
        self._symbols = SymbolTable.with_predefined()
        self._words: list[str] = []
        self._listing: list[ListingEntry] = []
        self._instruction_count = 0
        self._next_variable = VARIABLE_BASE_ADDRESS
        self._source_name: Optional[str] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble a source file.

        The file is opened once and read twice.

        Returns:
            The emitted binary words, in program order

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If the source file does not exist
        """
        filepath = Path(filepath)

        if self._verbose:
            print(f"Assembling {filepath}...")

        with Parser.from_file(filepath) as parser:
            return self._assemble(parser)

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code held in a string.

        Args:
            source: Hack assembly source
            filename: Virtual filename for error messages
        """
        return self.assemble_stream(io.StringIO(source), filename)

    def assemble_stream(self, stream: TextIO, filename: str = "<input>") -> list[str]:
        """
        Assemble from an open, seekable text stream.

        The stream is rewound between passes but not closed.
        """
        return self._assemble(Parser(stream, filename))

    def _assemble(self, parser: Parser) -> list[str]:
        self._symbols = SymbolTable.with_predefined()
        self._words = []
        self._listing = []
        self._instruction_count = 0
        self._next_variable = VARIABLE_BASE_ADDRESS
        self._source_name = parser.filename

        self._pass1(parser)
        parser.reset()
        self._pass2(parser)

        if self._verbose:
            print(f"Generated {len(self._words)} instructions")

        return list(self._words)

    # =========================================================================
    # Pass 1: Symbol Collection
    # =========================================================================

    def _pass1(self, parser: Parser) -> None:
        """Bind labels to ROM addresses and count instructions."""
        address = 0

        for stmt in parser.statements():
            if stmt.emits_code:
                address += 1
            else:
                label = parser.symbol()
                if self._symbols.contains(label):
                    kind = "predefined symbol" if is_predefined(label) else "label"
                    logger.warning(
                        f"{parser.filename}:{parser.current_line_number}: "
                        f"{kind} '{label}' already bound to "
                        f"{self._symbols.get_address(label)}, ignoring redefinition"
                    )
                else:
                    self._symbols.add_entry(label, address)

        self._instruction_count = address
        logger.debug(f"Pass 1: {address} instructions, {len(self._symbols)} symbols")

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def _pass2(self, parser: Parser) -> None:
        """Resolve symbols and encode every instruction."""
        for stmt in parser.statements():
            if not stmt.emits_code:
                continue

            if stmt.type is InstructionType.A_INSTRUCTION:
                word = format_word(self._resolve_address(parser))
            else:
                word = parser.binary_string()

            self._listing.append(ListingEntry(
                address=len(self._words),
                word=word,
                line_number=stmt.line_number,
                source=stmt.text,
            ))
            self._words.append(word)

        logger.debug(
            f"Pass 2: {len(self._words)} words, "
            f"{self.variable_count} variables allocated"
        )

    def _resolve_address(self, parser: Parser) -> int:
        """Return the value an A-instruction loads, allocating variables."""
        symbol = parser.symbol()
        location = SourceLocation(parser.filename, parser.current_line_number)

        if symbol.isascii() and symbol.isdigit():
            value = int(symbol)
            if value > MAX_ADDRESS:
                raise AddressRangeError(value, location=location, source_line=parser.current_line)
            return value

        if not self._symbols.contains(symbol):
            if self._next_variable > MAX_ADDRESS:
                raise AddressRangeError(
                    self._next_variable,
                    location=location,
                    source_line=parser.current_line,
                    kind=f"variable '{symbol}' address",
                )
            self._symbols.add_entry(symbol, self._next_variable)
            logger.debug(f"Variable '{symbol}' allocated at {self._next_variable}")
            self._next_variable += 1

        address = self._symbols.get_address(symbol)
        if address is None:
            raise UndefinedSymbolError(symbol, location=location, source_line=parser.current_line)
        return address

    # =========================================================================
    # Results
    # =========================================================================

    @property
    def instruction_count(self) -> int:
        """Number of A- and C-instructions counted in pass 1."""
        return self._instruction_count

    @property
    def variable_count(self) -> int:
        """Number of variables allocated in pass 2."""
        return self._next_variable - VARIABLE_BASE_ADDRESS

    def get_words(self) -> list[str]:
        return list(self._words)

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table of the last run.

        Returns:
            Dictionary mapping symbol names to addresses, including the
            predefined symbols
        """
        return self._symbols.as_dict()

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing ROM addresses, words and source lines,
            followed by the symbol table
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr   Word              Line  Source")
        lines.append("-" * 60)
        for entry in self._listing:
            lines.append(
                f"{entry.address:5d}  {entry.word}  {entry.line_number:4d}  {entry.source}"
            )
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for name, address in self._symbols.items():
            lines.append(f"{name:20s} = {address}")
        return "\n".join(lines)

    def get_listing_entries(self) -> list[ListingEntry]:
        return list(self._listing)

    # =========================================================================
    # Output File Writing
    # =========================================================================

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine code, one word per line.

        Every line, including the last, ends with a newline.
        """
        with open(filepath, "w", encoding="utf-8", newline="\n") as f:
            for word in self._words:
                f.write(word + "\n")

        if self._verbose:
            print(f"Wrote {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, sorted by name)
        """
        with open(filepath, "w", encoding="utf-8") as f:
            f.write("# Symbol table\n")
            f.write(f"# Generated by hackasm from {self._source_name}\n")
            for name, address in self._symbols.items():
                f.write(f"{name} {address}\n")

        if self._verbose:
            print(f"Wrote symbols to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.get_listing())
            f.write("\n")

        if self._verbose:
            print(f"Wrote listing to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        The emitted binary words

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
        FileNotFoundError: If the source file does not exist
    """
    return Assembler().assemble_file(filepath)
