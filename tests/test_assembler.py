# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end tests for the two-pass Hack assembler.
#
# Test coverage includes:
#   - Reference programs in tests/programs compared word for word
#   - Label binding and forward references
#   - Variable allocation from RAM[16]
#   - Error propagation with line numbers
#   - Symbol, listing and .hack output files
# =============================================================================

import io
from pathlib import Path

import pytest

from hackasm.assembler import Assembler, assemble, assemble_file
from hackasm.errors import (
    AddressRangeError,
    AdvanceError,
    AssemblerError,
    CodeError,
    CombinedErrors,
    InvalidCompMnemonic,
    InvalidJumpMnemonic,
    SymbolError,
)

PROGRAMS_DIR = Path(__file__).parent / "programs"


# =============================================================================
# Reference Programs
# =============================================================================

class TestReferencePrograms:
    """Assemble each tests/programs/*.asm and compare with its .hack."""

    @pytest.mark.parametrize(
        "source",
        sorted(PROGRAMS_DIR.glob("*.asm")),
        ids=lambda p: p.stem,
    )
    def test_matches_expected_output(self, source, tmp_path):
        expected = source.with_suffix(".hack").read_text()
        output = tmp_path / f"{source.stem}.hack"

        asm = Assembler()
        asm.assemble_file(source)
        asm.write_hack(output)

        assert output.read_text() == expected


# =============================================================================
# Full Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline."""

    def test_add_program(self):
        """Numeric A-instructions and simple computations."""
        words = assemble("@2\nD=A\n@3\nD=D+A\n@0\nM=D")
        assert words == [
            "0000000000000010",
            "1110110000010000",
            "0000000000000011",
            "1110000010010000",
            "0000000000000000",
            "1110001100001000",
        ]

    def test_label_emits_nothing(self):
        words = assemble("(LOOP)\n@LOOP\n0;JMP")
        assert words == ["0000000000000000", "1110101010000111"]

    def test_empty_source(self):
        assert assemble("") == []

    def test_only_comments(self):
        assert assemble("// nothing\n\n   // here\n") == []

    def test_every_word_is_sixteen_bits(self):
        words = assemble_file(PROGRAMS_DIR / "Max.asm")
        assert all(len(w) == 16 and set(w) <= {"0", "1"} for w in words)

    def test_idempotent(self):
        """Assembling the same source twice gives identical output."""
        source = (PROGRAMS_DIR / "Sum.asm").read_text()
        asm = Assembler()
        first = asm.assemble_string(source)
        second = asm.assemble_string(source)
        assert first == second

    def test_assemble_stream_not_closed(self):
        stream = io.StringIO("@1\nD=A\n")
        Assembler().assemble_stream(stream)
        assert not stream.closed

    def test_instruction_count(self):
        """The instruction counter skips labels."""
        asm = Assembler()
        asm.assemble_string("(A)\n@1\n(B)\nD=A\n(C)\n0;JMP\n")
        assert asm.instruction_count == 3
        assert len(asm.get_words()) == 3

    def test_large_constant(self):
        assert assemble("@32767") == ["0111111111111111"]


# =============================================================================
# Symbol Resolution Tests
# =============================================================================

class TestSymbols:
    """Test labels, variables and predefined symbols."""

    def test_forward_label_reference(self):
        """A label used before its declaration resolves to the next address."""
        source = """
            @LOOP
            D=A
            0;JMP
            (LOOP)
            D=M
        """
        asm = Assembler()
        words = asm.assemble_string(source)
        assert asm.get_symbols()["LOOP"] == 3
        assert words[0] == "0000000000000011"

    def test_consecutive_labels_share_address(self):
        asm = Assembler()
        asm.assemble_string("@0\n(A)\n(B)\nD=A\n")
        symbols = asm.get_symbols()
        assert symbols["A"] == symbols["B"] == 1

    def test_variables_allocated_from_16(self):
        asm = Assembler()
        words = asm.assemble_string("@first\nM=0\n@second\nM=0\n@first\nD=M\n")
        symbols = asm.get_symbols()
        assert symbols["first"] == 16
        assert symbols["second"] == 17
        assert words[4] == "0000000000010000"
        assert asm.variable_count == 2

    def test_labels_are_not_variables(self):
        """A label declared later is not allocated as a variable."""
        asm = Assembler()
        asm.assemble_string("@x\n@END\n0;JMP\n(END)\n@y\n")
        symbols = asm.get_symbols()
        assert symbols["END"] == 3
        assert symbols["x"] == 16
        assert symbols["y"] == 17

    def test_predefined_symbols(self):
        words = assemble("@SCREEN\n@KBD\n@R15\n@THAT\n")
        assert words == [
            "0100000000000000",
            "0110000000000000",
            "0000000000001111",
            "0000000000000100",
        ]

    def test_numeric_literal_not_bound(self):
        asm = Assembler()
        asm.assemble_string("@100\n")
        assert "100" not in asm.get_symbols()
        assert asm.variable_count == 0

    def test_first_label_definition_wins(self, caplog):
        """A repeated label keeps its first address and logs a warning."""
        asm = Assembler()
        with caplog.at_level("WARNING"):
            asm.assemble_string("(X)\n@1\n(X)\n@2\n")
        assert asm.get_symbols()["X"] == 0
        assert "already bound" in caplog.text

    def test_label_cannot_rebind_predefined(self):
        asm = Assembler()
        asm.assemble_string("@0\n(SCREEN)\n@SCREEN\n")
        assert asm.get_symbols()["SCREEN"] == 16384

    def test_symbol_table_reset_between_runs(self):
        asm = Assembler()
        asm.assemble_string("@a\n")
        asm.assemble_string("@b\n")
        symbols = asm.get_symbols()
        assert "a" not in symbols
        assert symbols["b"] == 16


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestErrors:
    """Test that errors stop the run and cite the source line."""

    def test_invalid_comp(self):
        """D=FOO;JMP fails with a CodeError wrapping InvalidCompMnemonic."""
        asm = Assembler()
        with pytest.raises(CodeError) as exc_info:
            asm.assemble_string("@1\nD=FOO;JMP\n", "bad.asm")
        error = exc_info.value
        assert isinstance(error, CombinedErrors)
        assert error.line_number == 2
        assert isinstance(error.errors[0].cause, InvalidCompMnemonic)
        assert "bad.asm:2" in str(error)

    def test_no_output_after_error(self, tmp_path):
        source = tmp_path / "bad.asm"
        source.write_text("@1\nD=FOO;JMP\n")
        asm = Assembler()
        with pytest.raises(AssemblerError):
            asm.assemble_file(source)
        assert not (tmp_path / "bad.hack").exists()

    def test_error_in_first_pass(self):
        """Label errors are found in pass 1."""
        with pytest.raises(SymbolError) as exc_info:
            assemble("@1\n()\n")
        assert exc_info.value.line_number == 2

    def test_empty_address_symbol(self):
        with pytest.raises(SymbolError):
            assemble("@\n")

    def test_constant_out_of_range(self):
        with pytest.raises(AddressRangeError) as exc_info:
            assemble("@32768\n")
        assert exc_info.value.value == 32768

    def test_variable_space_exhausted(self):
        """RAM[16]..RAM[32767] hold 32752 variables; one more is an error."""
        source = "\n".join(f"@v{i}" for i in range(32753))
        with pytest.raises(AddressRangeError) as exc_info:
            assemble(source, "vars.asm")
        error = exc_info.value
        assert error.value == 32768
        assert error.line_number == 32753
        assert "v32752" in str(error)

    def test_last_variable_address(self):
        asm = Assembler()
        asm.assemble_string("\n".join(f"@v{i}" for i in range(32752)))
        assert asm.get_symbols()["v32751"] == 32767
        assert asm.variable_count == 32752

    def test_repeated_jump_separator(self):
        with pytest.raises(CombinedErrors) as exc_info:
            assemble("0;JMP;JMP\n")
        assert isinstance(exc_info.value.errors[0].cause, InvalidJumpMnemonic)

    def test_undecodable_source_file(self, tmp_path):
        source = tmp_path / "bad.asm"
        source.write_bytes(b"@1\nD=A\n@\xff\n")
        with pytest.raises(AdvanceError) as exc_info:
            assemble_file(source)
        assert exc_info.value.line_number == 3
        assert f"{source}:3" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            assemble_file(tmp_path / "missing.asm")


# =============================================================================
# Output File Tests
# =============================================================================

class TestOutputFiles:
    """Test .hack, symbol and listing output."""

    def test_write_hack_newline_terminated(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("@1\nD=A\n")
        output = tmp_path / "out.hack"
        asm.write_hack(output)
        assert output.read_bytes() == b"0000000000000001\n1110110000010000\n"

    def test_write_symbols(self, tmp_path):
        asm = Assembler()
        asm.assemble_file(PROGRAMS_DIR / "Max.asm")
        output = tmp_path / "Max.sym"
        asm.write_symbols(output)
        lines = output.read_text().splitlines()
        assert lines[0] == "# Symbol table"
        assert "OUTPUT_FIRST 10" in lines
        assert "INFINITE_LOOP 14" in lines
        assert "R0 0" in lines

    def test_listing(self):
        asm = Assembler()
        asm.assemble_string("// add\n@2\nD=A\n")
        listing = asm.get_listing()
        assert "Hack Assembler Listing" in listing
        assert "0000000000000010" in listing
        assert "D=A" in listing
        entries = asm.get_listing_entries()
        assert [(e.address, e.line_number) for e in entries] == [(0, 2), (1, 3)]

    def test_write_listing(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("(END)\n@END\n0;JMP\n")
        output = tmp_path / "out.lst"
        asm.write_listing(output)
        text = output.read_text()
        assert "END" in text
        assert "1110101010000111" in text
