"""
atomc-check - AtomC Syntax Checker Command-Line Interface
=========================================================

Tokenizes an AtomC source file and verifies it against the grammar,
printing "Parsed successfully" or the first syntax error.

Usage Examples
--------------
Check a file:
    $ atomc-check prog.c

Dump the token list first:
    $ atomc-check --tokens prog.c

Accept struct-typed variables and arguments:
    $ atomc-check --struct-types prog.c

Verbose mode (debug logging):
    $ atomc-check -v prog.c
"""

import logging
from pathlib import Path

import click

from atomc import __version__
from atomc.checker import FrontendOptions, SyntaxChecker
from atomc.cli.errors import handle_cli_exception

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
    "-t", "--tokens",
    is_flag=True,
    help="Print every token before parsing",
)
@click.option(
    "--struct-types",
    is_flag=True,
    help="Accept 'struct NAME' as a type in declarations and casts "
         "(also ATOMC_STRUCT_TYPES=1)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="atomc-check")
def main(
    input_file: Path,
    tokens: bool,
    struct_types: bool,
    verbose: bool,
) -> None:
    """
    Syntax-check an AtomC source file.

    INPUT_FILE is the AtomC source file to check.

    \b
    Examples:
        atomc-check prog.c                # Parsed successfully / error
        atomc-check --tokens prog.c       # Also list the tokens
        atomc-check -v prog.c             # Debug logging

    Unknown characters are reported and skipped. The first syntax error
    stops the check and sets exit status 1.
    """
    setup_logging(verbose)

    overrides = {}
    if struct_types:
        overrides["struct_types"] = True
    options = FrontendOptions.from_env(**overrides)
    logger.debug("options: %s", options)

    try:
        if verbose:
            click.echo(f"Checking {input_file}...")
            click.echo(f"Struct types: {'on' if options.struct_types else 'off'}")

        result = SyntaxChecker(options).check_file(input_file)

        if tokens:
            for token in result.tokens:
                click.echo(repr(token))

        for warning in result.warnings:
            click.echo(str(warning), err=True)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")

        # Rejected sources surface as the stored AtomCSyntaxError
        result.parse.raise_for_error()
        click.echo(result.parse.message)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
