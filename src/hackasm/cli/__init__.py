"""
hackasm Command-Line Interface
==============================

This package provides the command-line front end of the assembler:

- **hackasm**: Hack assembler (.asm -> .hack)

The tool is a Click application with help text and uniform error
reporting through hackasm.cli.errors.
"""

__all__ = ["hackasm"]
