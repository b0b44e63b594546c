"""
AtomC Syntax Checker
====================

This module runs the complete front-end over one source buffer:

    Source → Lexer → Parser → CheckResult

Usage
-----
Command line:
    $ atomc-check prog.c

Programmatic:
    >>> from atomc import check_source
    >>> result = check_source('int main() { return; }')
    >>> result.success
    True

Configuration
-------------
FrontendOptions carries the few switches the front-end has. Defaults
match the traditional behaviour; FrontendOptions.from_env() lets the
environment override them:

    ATOMC_STRUCT_TYPES   accept 'struct ID' as a base type (1/true/yes/on)
    ATOMC_ECHO_TOKENS    log every token at DEBUG level (1/true/yes/on)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from atomc.errors import AtomCSyntaxError, UnknownCharacterWarning
from atomc.lexer import Lexer, Token
from atomc.parser import ParseResult, Parser

logger = logging.getLogger(__name__)

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable; None if unset or unrecognised."""
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        filename: Name reported in diagnostics for string input
        struct_types: Accept 'struct ID' as a base type in declarations,
                      arguments and casts. False keeps the traditional
                      behaviour where typeBase consumes 'struct ID' but
                      does not report a match.
        echo_tokens: Log every token at DEBUG level while checking
    """
    filename: str = "<input>"
    struct_types: bool = False
    echo_tokens: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "FrontendOptions":
        """
        Create options from environment variables.

        Unrecognised values are ignored. Keyword arguments win over the
        environment.
        """
        options = cls()

        if (struct_types := _env_flag("ATOMC_STRUCT_TYPES")) is not None:
            options.struct_types = struct_types

        if (echo_tokens := _env_flag("ATOMC_ECHO_TOKENS")) is not None:
            options.echo_tokens = echo_tokens

        for name, value in overrides.items():
            setattr(options, name, value)

        return options


@dataclass
class CheckResult:
    """
    Result of checking one source buffer.

    Attributes:
        filename: Source filename
        tokens: Full token list, ending with END
        warnings: Unknown characters skipped by the lexer
        parse: The parser's verdict
    """
    filename: str
    tokens: list[Token] = field(default_factory=list)
    warnings: list[UnknownCharacterWarning] = field(default_factory=list)
    parse: Optional[ParseResult] = None

    @property
    def success(self) -> bool:
        return self.parse is not None and self.parse.accepted

    @property
    def error(self) -> Optional[AtomCSyntaxError]:
        return self.parse.error if self.parse is not None else None

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    def report(self) -> list[str]:
        """Diagnostic lines in the order the front-end prints them."""
        lines = [str(w) for w in self.warnings]
        if self.parse is not None:
            lines.append(self.parse.message)
        return lines


class SyntaxChecker:
    """
    Runs lexer and parser for AtomC sources.

    Example:
        checker = SyntaxChecker(FrontendOptions(struct_types=True))
        result = checker.check_file("prog.c")
        print(result.parse.message)

    Attributes:
        options: Front-end configuration
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def check_source(self, source: str, filename: Optional[str] = None) -> CheckResult:
        """
        Tokenize and parse one buffer.

        Syntax errors are reported through the result, never raised.
        """
        filename = filename or self.options.filename
        result = CheckResult(filename=filename)

        lexer = Lexer(source, filename)
        result.tokens = list(lexer.tokenize())
        result.warnings = list(lexer.warnings)
        logger.debug(
            "%s: %d tokens, %d unknown characters",
            filename, result.token_count, len(result.warnings),
        )

        if self.options.echo_tokens:
            for token in result.tokens:
                logger.debug("%r", token)

        parser = Parser(result.tokens, struct_types=self.options.struct_types)
        result.parse = parser.parse()

        if result.success:
            logger.info("%s: parsed successfully", filename)
        else:
            logger.info("%s: %s", filename, result.parse.outcome.value)

        return result

    def check_file(self, filepath: str | Path) -> CheckResult:
        """
        Read a UTF-8 source file and check it.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.check_source(source, str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def check_source(
    source: str,
    filename: Optional[str] = None,
    options: Optional[FrontendOptions] = None,
) -> CheckResult:
    """Check a source string with the given (or default) options."""
    return SyntaxChecker(options).check_source(source, filename)


def check_file(
    filepath: str | Path,
    options: Optional[FrontendOptions] = None,
) -> CheckResult:
    """Check a source file with the given (or default) options."""
    return SyntaxChecker(options).check_file(filepath)
