"""
AtomC Error Hierarchy
=====================

This module defines the exception hierarchy and diagnostic records for the
AtomC front-end. All exceptions inherit from AtomCError, allowing callers to
catch every front-end error with a single except clause.

Exception Hierarchy
-------------------
AtomCError (base)
└── AtomCSyntaxError - a token sequence that does not fit the grammar
    ├── FatalSyntaxError - a committed production found a required token missing
    └── UnexpectedTokenError - no production applied before end of input

Lexical problems are not exceptions: an unknown character is recorded as an
UnknownCharacterWarning and scanning continues.

Message Format
--------------
Syntax errors keep the front-end's traditional wording:

    Syntax error at token: 3 missing ';' after variable declaration
    Syntax error at token: Token(CT_INT, "3", Line: 1)

The first form comes from a committed production, the second from the
generic fallback when the declaration loop stalls.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from atomc.lexer import Token


# =============================================================================
# Base Exception Class
# =============================================================================

class AtomCError(Exception):
    """
    Base exception for all AtomC front-end errors.

        try:
            check_file("prog.c").parse.raise_for_error()
        except AtomCError as e:
            print(e)
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


# =============================================================================
# Lexical Diagnostics
# =============================================================================

@dataclass(frozen=True)
class UnknownCharacterWarning:
    """
    A character the scanner could not classify.

    The character is skipped and no token is produced for it.
    """
    char: str
    location: SourceLocation

    @property
    def line(self) -> int:
        return self.location.line

    def __str__(self) -> str:
        return f"Unknown character {self.char}"


# =============================================================================
# Syntax Errors
# =============================================================================

class AtomCSyntaxError(AtomCError):
    """
    The token sequence does not conform to the grammar.

    Attributes:
        message: Human-readable description
        token: The token at which matching stopped
    """

    def __init__(self, message: str, token: "Token"):
        self.message = message
        self.token = token
        super().__init__(self._format_message())

    @property
    def location(self) -> SourceLocation:
        return self.token.location

    @property
    def line(self) -> int:
        return self.token.line

    def _format_message(self) -> str:
        return f"Syntax error at token: {self.token.line} {self.message}"


class FatalSyntaxError(AtomCSyntaxError):
    """
    A committed production is missing a required follow-on token.

    Raised as soon as the construct has been recognised (its keyword or
    opening punctuation consumed) and the remainder turns out to be
    invalid. It aborts the whole parse; no alternatives are tried.

    Example:
        struct { int x; };    // "missing ID after 'struct'"
    """
    pass


class UnexpectedTokenError(AtomCSyntaxError):
    """
    The top-level declaration loop stopped before the end of input.

    No committed production fired, so the report names only the token at
    which matching stopped.
    """

    def __init__(self, token: "Token", message: Optional[str] = None):
        super().__init__(message or "unexpected token", token)

    def _format_message(self) -> str:
        return f"Syntax error at token: {self.token}"
