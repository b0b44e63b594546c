"""
AtomC Front-End
===============

Lexer and syntax checker for AtomC, a small C-like teaching language.

The front-end decides whether a program is grammatical and, if it is not,
where the first violation is. It builds no syntax tree and does no type
checking.

Pipeline
--------
    Source → Lexer → Token list → Parser → accepted / syntax error

Language Subset
---------------
- Types: int, double, char, struct, one-dimensional arrays (T name[])
- Declarations: global and local variables, structs, functions
- Statements: blocks, if/else, while, for ( ; ; ), break, return, expressions
- Expressions: = || && == != < <= > >= + - * / casts, unary - !,
  indexing, member access, calls

Usage
-----
>>> from atomc import check_source
>>> result = check_source('int main() { return; }')
>>> result.parse.message
'Parsed successfully'

Or from the command line:
    $ atomc-check prog.c --tokens
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from atomc.errors import (
    AtomCError,
    AtomCSyntaxError,
    FatalSyntaxError,
    UnexpectedTokenError,
    SourceLocation,
    UnknownCharacterWarning,
)
from atomc.lexer import Lexer, Token, TokenKind, KEYWORDS, tokenize
from atomc.parser import Parser, ParseResult, ParseOutcome, Cursor, parse_source
from atomc.checker import (
    FrontendOptions,
    SyntaxChecker,
    CheckResult,
    check_source,
    check_file,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "AtomCError",
    "AtomCSyntaxError",
    "FatalSyntaxError",
    "UnexpectedTokenError",
    "SourceLocation",
    "UnknownCharacterWarning",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "tokenize",
    # Parser
    "Parser",
    "ParseResult",
    "ParseOutcome",
    "Cursor",
    "parse_source",
    # Checker
    "FrontendOptions",
    "SyntaxChecker",
    "CheckResult",
    "check_source",
    "check_file",
]
