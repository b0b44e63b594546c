"""
AtomC Lexer (Scanner)
=====================

This module converts AtomC source text into a list of tokens for the parser.

Token Categories
----------------
- Keywords: break, char, double, else, for, if, int, return, struct, void, while
- Identifiers: letters, digits and underscore, not starting with a digit
- Integer literals: decimal (123), hexadecimal (0x1F), zero-prefixed (017)
- Real literals: 1.5, 2e10, 3.25E-2
- Strings: "double quoted", characters: 'single quoted'
- Operators and delimiters: + - * / . , ; ( ) [ ] { } < <= > >= = == ! != && ||

Number Formats
--------------
| Format          | Example | Kind    | Notes                               |
|-----------------|---------|---------|-------------------------------------|
| Decimal         | 123     | CT_INT  |                                     |
| Hexadecimal     | 0x7F    | CT_INT  | no fraction/exponent after the hex  |
| Zero-prefixed   | 0177    | CT_INT  | digits read as decimal, not octal   |
| Fraction        | 12.5    | CT_REAL |                                     |
| Exponent        | 1e-3    | CT_REAL | sign is optional                    |

Scanning is maximal munch: every class consumes the longest run it can,
so "12.3.4" is CT_REAL "12.3", DOT, CT_INT "4".

Literal text is kept verbatim. Strings and characters store what lies
between the delimiters with no escape processing, and an unterminated
literal or block comment simply runs to the end of input.

Unknown characters are reported as warnings and skipped; scanning never
aborts.

Example Usage
-------------
>>> from atomc.lexer import Lexer
>>> for token in Lexer('int x;').tokenize():
...     print(token)
Token(INT, "int", Line: 1)
Token(ID, "x", Line: 1)
Token(SEMICOLON, ";", Line: 1)
Token(END, "EOF", Line: 1)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from atomc.errors import SourceLocation, UnknownCharacterWarning

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Closed set of token classifications for AtomC."""

    # === Identifiers ===
    ID = auto()

    # === Keywords ===
    BREAK = auto()
    CHAR = auto()
    DOUBLE = auto()
    ELSE = auto()
    FOR = auto()
    IF = auto()
    INT = auto()
    RETURN = auto()
    STRUCT = auto()
    VOID = auto()
    WHILE = auto()

    # === Literals ===
    CT_INT = auto()         # 42, 0x2A, 042
    CT_REAL = auto()        # 4.2, 42e-1
    CT_STRING = auto()      # "..."
    CT_CHAR = auto()        # '...'

    # === Delimiters ===
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;
    LPAR = auto()           # (
    RPAR = auto()           # )
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    LACC = auto()           # {
    RACC = auto()           # }

    # === Operators ===
    ADD = auto()            # +
    SUB = auto()            # -
    MUL = auto()            # *
    DIV = auto()            # /
    DOT = auto()            # .
    AND = auto()            # &&
    OR = auto()             # ||
    NOT = auto()            # !
    ASSIGN = auto()         # =
    EQUAL = auto()          # ==
    NOTEQ = auto()          # !=
    LESS = auto()           # <
    LESSEQ = auto()         # <=
    GREATER = auto()        # >
    GREATEREQ = auto()      # >=

    # === Structural ===
    END = auto()


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenKind] = {
    "break": TokenKind.BREAK,
    "char": TokenKind.CHAR,
    "double": TokenKind.DOUBLE,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "int": TokenKind.INT,
    "return": TokenKind.RETURN,
    "struct": TokenKind.STRUCT,
    "void": TokenKind.VOID,
    "while": TokenKind.WHILE,
}

# Symbols that are always a single character
SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    ".": TokenKind.DOT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAR,
    ")": TokenKind.RPAR,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LACC,
    "}": TokenKind.RACC,
}

# Symbols with an optional trailing '=': char -> (alone, with '=')
EQUALS_SUFFIX_TOKENS: dict[str, tuple[TokenKind, TokenKind]] = {
    "<": (TokenKind.LESS, TokenKind.LESSEQ),
    ">": (TokenKind.GREATER, TokenKind.GREATEREQ),
    "=": (TokenKind.ASSIGN, TokenKind.EQUAL),
    "!": (TokenKind.NOT, TokenKind.NOTEQ),
}

# Symbols that only exist doubled
DOUBLED_TOKENS: dict[str, TokenKind] = {
    "&": TokenKind.AND,
    "|": TokenKind.OR,
}

END_TEXT = "EOF"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified slice of source text.

    Tokens are created once by the lexer and never modified, so the parser
    can revisit them freely while backtracking.

    Attributes:
        kind: The TokenKind classification
        text: Matched source text (literal payload for strings and chars)
        line: Line on which the token starts (1-indexed)
        filename: Name of the source file, for diagnostics
    """
    kind: TokenKind
    text: str
    line: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f'Token({self.kind.name}, "{self.text}", Line: {self.line})'

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line)

    def is_type_keyword(self) -> bool:
        """Return True if this token can start a base type."""
        return self.kind in (
            TokenKind.INT,
            TokenKind.DOUBLE,
            TokenKind.CHAR,
            TokenKind.STRUCT,
        )


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes AtomC source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())
        for warning in lexer.warnings:
            print(warning)

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for diagnostics)
        warnings: Unknown characters met so far
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = string.digits
    HEX_DIGITS = string.hexdigits

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.warnings: list[UnknownCharacterWarning] = []

        self._pos = 0
        self._line = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order, ending with exactly one END token
        """
        while not self._at_end():
            char = self._peek()

            if char.isspace():
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                self._skip_line_comment()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_block_comment()
                continue

            token = self._scan_token()
            if token is not None:
                yield token

        yield self._make_token(TokenKind.END, END_TEXT, self._line)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume the current character, counting newlines."""
        if self._at_end():
            return ""
        char = self.source[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
        return char

    def _match(self, expected: str) -> bool:
        if self._peek() and self._peek() == expected:
            self._advance()
            return True
        return False

    def _advance_while(self, allowed: str) -> None:
        while self._peek() and self._peek() in allowed:
            self._advance()

    def _make_token(self, kind: TokenKind, text: str, line: int) -> Token:
        return Token(kind=kind, text=text, line=line, filename=self.filename)

    # =========================================================================
    # Comment Handling
    # =========================================================================

    def _skip_line_comment(self) -> None:
        """Skip // up to (not including) the end of line."""
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Skip /* ... */, or everything that is left if it never closes."""
        self._advance()  # consume /
        self._advance()  # consume *

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """Scan one token, or return None for a skipped unknown character."""
        start_line = self._line
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line)

        if char in self.DIGITS:
            return self._scan_number(start_line)

        if char == '"':
            return self._scan_quoted('"', TokenKind.CT_STRING, start_line)

        if char == "'":
            return self._scan_quoted("'", TokenKind.CT_CHAR, start_line)

        return self._scan_operator(start_line)

    def _scan_identifier(self, start_line: int) -> Token:
        """Scan an identifier, then promote it if it is a reserved word."""
        start = self._pos
        self._advance_while(self.IDENT_CHARS)
        name = self.source[start:self._pos]

        return self._make_token(KEYWORDS.get(name, TokenKind.ID), name, start_line)

    def _scan_number(self, start_line: int) -> Token:
        """
        Scan a numeric literal.

        Handles:
        - Hexadecimal: 0x1F (digits optional, "0x" alone is still CT_INT)
        - Zero-prefixed: 0123, plain decimal digits, always CT_INT
        - Decimal: 123, with optional fraction and/or exponent for CT_REAL
        """
        start = self._pos

        if self._peek() == "0":
            if self._peek(1) in ("x", "X"):
                self._advance()  # consume 0
                self._advance()  # consume x
                self._advance_while(self.HEX_DIGITS)
                return self._make_token(TokenKind.CT_INT, self.source[start:self._pos], start_line)

            if self._peek(1) and self._peek(1) in self.DIGITS:
                self._advance_while(self.DIGITS)
                return self._make_token(TokenKind.CT_INT, self.source[start:self._pos], start_line)

        is_real = False
        self._advance_while(self.DIGITS)

        if self._match("."):
            is_real = True
            self._advance_while(self.DIGITS)

        if self._match("e") or self._match("E"):
            is_real = True
            if not self._match("+"):
                self._match("-")
            self._advance_while(self.DIGITS)

        kind = TokenKind.CT_REAL if is_real else TokenKind.CT_INT
        return self._make_token(kind, self.source[start:self._pos], start_line)

    def _scan_quoted(self, delimiter: str, kind: TokenKind, start_line: int) -> Token:
        """
        Scan a string or character literal.

        The closing delimiter is optional at end of input. The token text
        excludes both delimiters.
        """
        self._advance()  # consume opening delimiter
        start = self._pos

        while not self._at_end() and self._peek() != delimiter:
            self._advance()

        text = self.source[start:self._pos]
        self._match(delimiter)
        return self._make_token(kind, text, start_line)

    def _scan_operator(self, start_line: int) -> Optional[Token]:
        """Scan an operator or delimiter, reporting anything unrecognised."""
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, start_line)

        if char in EQUALS_SUFFIX_TOKENS:
            alone, with_equals = EQUALS_SUFFIX_TOKENS[char]
            if self._match("="):
                return self._make_token(with_equals, char + "=", start_line)
            return self._make_token(alone, char, start_line)

        if char in DOUBLED_TOKENS and self._match(char):
            return self._make_token(DOUBLED_TOKENS[char], char * 2, start_line)

        self._report_unknown(char, start_line)
        return None

    def _report_unknown(self, char: str, line: int) -> None:
        warning = UnknownCharacterWarning(char, SourceLocation(self.filename, line))
        self.warnings.append(warning)
        logger.debug("%s: %s", warning.location, warning)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """
    Tokenize a whole buffer into a list ending with the END token.

    Unknown characters are logged and skipped; use Lexer directly to
    inspect them.
    """
    return list(Lexer(source, filename).tokenize())
