"""
lunec Error Handling
====================

Maps exceptions raised while running lunec to messages and exit codes.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from lune.errors import LuneError


class ExitCode(IntEnum):
    """Exit codes returned by lunec."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Lexer or parse error in the source
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised by lunec and exit.

    Front end errors are printed as-is since they already carry their
    own "LexerError:"/"ParseError:" prefix.

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, LuneError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, UnicodeDecodeError):
        click.echo(f"Error: source is not valid UTF-8: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
