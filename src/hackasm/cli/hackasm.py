"""
hackasm - Hack Assembler Command-Line Interface
===============================================

Usage Examples
--------------
Basic assembly (writes Max.hack next to the source):
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm -o build/Max.hack

Symbol table and listing:
    $ hackasm Max.asm -s Max.sym -l Max.lst

Verbose mode:
    $ hackasm -v Max.asm
"""

from pathlib import Path
from typing import Optional
import logging

import click

from hackasm import __version__
from hackasm.assembler import Assembler
from hackasm.cli.errors import handle_cli_exception


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input with .hack extension)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    symbols: Optional[Path],
    listing: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The output holds one 16-character binary word per instruction.
    Nothing is written if assembly fails.

    \b
    Examples:
        hackasm Max.asm               # Outputs Max.hack
        hackasm Max.asm -o out.hack   # Specify output file
        hackasm Max.asm -s Max.sym    # Also write the symbol table
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    output_file = output if output is not None else input_file.with_suffix(".hack")

    asm = Assembler()

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        words = asm.assemble_file(input_file)
        asm.write_hack(output_file)
        if verbose:
            click.echo(f"Wrote {len(words)} instructions to {output_file}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if verbose:
            click.echo(
                f"Assembly complete: {asm.instruction_count} instructions, "
                f"{asm.variable_count} variables"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
