"""
CLI Error Handling
==================

Maps exceptions raised while assembling to stderr reports and exit codes.

- Source errors (any HackError) exit with BUILD_ERROR. A CombinedErrors is
  reported one failing field per line.
- Unreadable or unwritable files exit with INVALID_ARGS.
- Anything else is an internal error.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hackasm.errors import CombinedErrors, HackError


class ExitCode(IntEnum):
    """Exit codes of the hackasm command."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Assembly error in the source
    INVALID_ARGS = 2     # Bad arguments, missing or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def _describe_os_error(error: OSError) -> str:
    """Render an OSError as 'path: reason' when the path is known."""
    reason = error.strerror or str(error)
    if error.filename is not None:
        return f"{error.filename}: {reason}"
    return reason


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception raised by the CLI command and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print a traceback for internal errors
        error_type: Prefix for source error reports (e.g., "Assembly")

    Raises:
        SystemExit: Always
    """
    if isinstance(error, HackError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        reports = error.errors if isinstance(error, CombinedErrors) else [error]
        for report in reports:
            click.echo(f"{prefix}{report}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    if isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if isinstance(error, OSError):
        click.echo(f"Error: {_describe_os_error(error)}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    click.echo(f"Internal error: {error}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(ExitCode.INTERNAL_ERROR)
