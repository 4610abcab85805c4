"""
lunec - Lune Front End Command-Line Interface
=============================================

Tokenizes and parses a Lune source file, printing the result.

Usage Examples
--------------
Print the parsed program as S-expressions:
    $ lunec program.lune

Dump the token stream:
    $ lunec --tokens program.lune

Reject unknown characters instead of skipping them:
    $ lunec --strict program.lune

Verbose mode:
    $ lunec -v program.lune
"""

import logging
from pathlib import Path

import click

from lune import __version__
from lune.ast import ASTPrinter
from lune.frontend import Frontend, FrontendOptions
from lune.lexer import UnknownCharPolicy
from lune.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the parsed statements as S-expressions (default)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat unknown characters as errors instead of skipping them",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lunec")
def main(
    input_file: Path,
    tokens: bool,
    ast: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """
    Tokenize and parse a Lune source file.

    INPUT_FILE is the Lune source file to process.

    \b
    Examples:
        lunec program.lune              # Print S-expressions
        lunec --tokens program.lune     # Print tokens
        lunec --tokens --ast prog.lune  # Print both
    """
    setup_logging(verbose)

    options = FrontendOptions(
        unknown_char=UnknownCharPolicy.ERROR if strict else UnknownCharPolicy.SKIP,
        keep_newlines=True,
    )

    try:
        logger.debug(f"Processing {input_file} (strict={strict})")
        result = Frontend(options).process_file(input_file)

        if tokens:
            for token in result.tokens:
                click.echo(repr(token))

        if ast or not tokens:
            output = ASTPrinter().print(result.statements)
            if output:
                click.echo(output)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parsed: {len(result.statements)} statements")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
