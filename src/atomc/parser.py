"""
AtomC Recursive Descent Parser
==============================

This module verifies that a token list conforms to the AtomC grammar. It
builds no tree: every production is a predicate over a shared cursor that
either matches (and advances the cursor) or does not.

Grammar (EBNF)
--------------
unit        ::= (declStruct | declFunc | declVar)* END
declStruct  ::= 'struct' ID '{' declVar* '}' ';'
declVar     ::= typeBase ID arrayDecl? (',' ID arrayDecl?)* ';'
typeBase    ::= 'int' | 'double' | 'char' | 'struct' ID
arrayDecl   ::= '[' ']'
typeName    ::= typeBase
declFunc    ::= (typeBase | 'void') ID '(' (funcArg (',' funcArg)*)? ')' stmCompound
funcArg     ::= typeBase ID arrayDecl?

stm         ::= stmCompound
              | 'if' '(' expr ')' stm ('else' stm)?
              | 'while' '(' expr ')' stm
              | 'for' '(' ';' ';' ')' stm
              | 'break' ';'
              | 'return' ';'
              | expr ';'
              | ';'
stmCompound ::= '{' (declVar | stm)* '}'

Expression Precedence (lowest to highest)
-----------------------------------------
1.  assignment     =            (right-associative, target is a unary expr)
2.  logical_or     ||
3.  logical_and    &&
4.  equality       == !=
5.  relational     < <= > >=
6.  additive       + -
7.  multiplicative * /
8.  cast           (type) expr
9.  unary          - !
10. postfix        [expr]  .ID
    primary        ID, ID(args), CT_INT, CT_REAL, CT_CHAR, CT_STRING, (expr)

Speculation and Commit Points
-----------------------------
Alternatives are tried in order. A production that fails before its
commit point restores the cursor and returns False so the next
alternative starts from the same token. Once the identifying token of a
construct has been consumed (a keyword, an opening bracket after a
confirmed prefix, a binary operator), any missing required token raises
FatalSyntaxError and the whole parse stops. Committed productions never
re-explore, which keeps backtracking bounded.

Example Usage
-------------
>>> from atomc.parser import parse_source
>>> parse_source('int main() { return; }').accepted
True
>>> print(parse_source('int 3x;').error)
Syntax error at token: Token(CT_INT, "3", Line: 1)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from atomc.errors import AtomCSyntaxError, FatalSyntaxError, UnexpectedTokenError
from atomc.lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Parse Result
# =============================================================================

class ParseOutcome(Enum):
    """How a parse attempt ended."""
    ACCEPTED = "accepted"   # unit consumed everything through END
    REJECTED = "rejected"   # no declaration applied before END
    FATAL = "fatal"         # a committed production was broken


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of one parse attempt.

    Attributes:
        outcome: ACCEPTED, REJECTED or FATAL
        error: The syntax error for REJECTED and FATAL, None when ACCEPTED
        tokens_consumed: How far the cursor got before the parse ended
    """
    outcome: ParseOutcome
    error: Optional[AtomCSyntaxError] = None
    tokens_consumed: int = 0

    @property
    def accepted(self) -> bool:
        return self.outcome is ParseOutcome.ACCEPTED

    @property
    def message(self) -> str:
        """The line the front-end prints for this result."""
        if self.error is None:
            return "Parsed successfully"
        return str(self.error)

    def raise_for_error(self) -> None:
        """Raise the stored syntax error, if any."""
        if self.error is not None:
            raise self.error


# =============================================================================
# Cursor
# =============================================================================

class Cursor:
    """
    Position of the parser within an immutable token list.

    Saving and restoring is a plain integer copy, which is what makes
    backtracking cheap: nothing else about the parse needs undoing.

    Attributes:
        tokens: The token list, ending with an END token
        pos: Index of the current token
        consumed: The most recently consumed token, if any
        furthest: Highest index a match was attempted at
    """

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.END:
            raise ValueError("token list must end with an END token")
        self.tokens = tokens
        self.pos = 0
        self.consumed: Optional[Token] = None
        self.furthest = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    @property
    def furthest_token(self) -> Token:
        return self.tokens[self.furthest]

    def mark(self) -> int:
        return self.pos

    def reset(self, mark: int) -> None:
        self.pos = mark

    def consume(self, kind: TokenKind) -> bool:
        """Advance past the current token if it has the given kind."""
        if self.pos > self.furthest:
            self.furthest = self.pos

        token = self.tokens[self.pos]
        if token.kind is not kind:
            return False

        self.consumed = token
        # END is the last token; consuming it leaves the cursor there
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return True


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Recursive descent recogniser for AtomC.

    Each production method returns True when it matched. Speculative
    productions return False with the cursor restored; committed ones raise
    FatalSyntaxError.

    Usage:
        result = Parser(tokens).parse()
        if not result.accepted:
            print(result.error)

    Attributes:
        tokens: Token list from the lexer
        struct_types: Treat 'struct ID' as a valid base type. When False
            (the default), typeBase consumes 'struct ID' but reports no
            match, so struct-typed variables and arguments do not parse.
    """

    def __init__(self, tokens: list[Token], struct_types: bool = False):
        self.tokens = tokens
        self.struct_types = struct_types
        self._cursor = Cursor(tokens)
        self._unary_memo: dict[int, tuple[bool, int, Optional[Token], int]] = {}

    def parse(self) -> ParseResult:
        """
        Match the start symbol against the whole token list.

        Returns:
            ParseResult; fatal errors are captured in it rather than raised
        """
        self._cursor = Cursor(self.tokens)
        self._unary_memo = {}

        try:
            matched = self._unit()
        except FatalSyntaxError as e:
            logger.debug("parse aborted: %s", e)
            return ParseResult(ParseOutcome.FATAL, e, self._cursor.pos)
        except RecursionError:
            error = FatalSyntaxError("expression nested too deeply", self._cursor.current)
            logger.debug("parse aborted: %s", error)
            return ParseResult(ParseOutcome.FATAL, error, self._cursor.pos)

        if matched:
            return ParseResult(ParseOutcome.ACCEPTED, None, self._cursor.pos + 1)

        error = UnexpectedTokenError(self._cursor.furthest_token)
        logger.debug("parse stalled at %r", self._cursor.current)
        return ParseResult(ParseOutcome.REJECTED, error, self._cursor.pos)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _consume(self, kind: TokenKind) -> bool:
        return self._cursor.consume(kind)

    def _consume_any(self, *kinds: TokenKind) -> bool:
        return any(self._consume(kind) for kind in kinds)

    def _expect(self, kind: TokenKind, message: str) -> None:
        """Consume a required token inside a committed production."""
        if not self._consume(kind):
            self._fail(message)

    def _require(self, matched: bool, message: str) -> None:
        """Require a sub-production inside a committed production."""
        if not matched:
            self._fail(message)

    def _fail(self, message: str) -> None:
        raise FatalSyntaxError(message, self._cursor.current)

    # =========================================================================
    # Declarations
    # =========================================================================

    def _unit(self) -> bool:
        """unit: (declStruct | declFunc | declVar)* END"""
        while self._decl_struct() or self._decl_func() or self._decl_var():
            pass
        return self._consume(TokenKind.END)

    def _decl_struct(self) -> bool:
        start = self._cursor.mark()

        if not self._consume(TokenKind.STRUCT):
            return False
        self._expect(TokenKind.ID, "missing ID after 'struct'")

        # 'struct ID' without a body is a struct-typed declaration, not ours
        if not self._consume(TokenKind.LACC):
            self._cursor.reset(start)
            return False

        while self._decl_var():
            pass
        self._expect(TokenKind.RACC, "missing '}' in struct declaration")
        self._expect(TokenKind.SEMICOLON, "missing ';' after struct declaration")
        return True

    def _decl_var(self) -> bool:
        start = self._cursor.mark()

        if not (self._type_base() and self._consume(TokenKind.ID)):
            self._cursor.reset(start)
            return False

        self._array_decl()
        while self._consume(TokenKind.COMMA):
            self._expect(TokenKind.ID, "missing ID after ',' in variable list")
            self._array_decl()

        self._expect(TokenKind.SEMICOLON, "missing ';' after variable declaration")
        return True

    def _decl_func(self) -> bool:
        start = self._cursor.mark()

        has_return_type = self._type_base()
        if not has_return_type:
            self._cursor.reset(start)
            has_return_type = self._consume(TokenKind.VOID)

        if not (has_return_type
                and self._consume(TokenKind.ID)
                and self._consume(TokenKind.LPAR)):
            self._cursor.reset(start)
            return False

        if self._func_arg():
            while self._consume(TokenKind.COMMA):
                self._require(self._func_arg(), "invalid funcArg after ','")

        self._expect(TokenKind.RPAR, "missing ')' in function declaration")
        self._require(self._stm_compound(), "invalid function body")
        return True

    def _func_arg(self) -> bool:
        start = self._cursor.mark()

        if self._type_base() and self._consume(TokenKind.ID):
            self._array_decl()
            return True

        self._cursor.reset(start)
        return False

    def _type_base(self) -> bool:
        if self._consume_any(TokenKind.INT, TokenKind.DOUBLE, TokenKind.CHAR):
            return True

        if self._consume(TokenKind.STRUCT):
            self._expect(TokenKind.ID, "missing ID after 'struct'")
            return self.struct_types

        return False

    def _array_decl(self) -> bool:
        if not self._consume(TokenKind.LBRACKET):
            return False
        self._expect(TokenKind.RBRACKET, "missing ']' in array declaration")
        return True

    def _type_name(self) -> bool:
        return self._type_base()

    # =========================================================================
    # Statements
    # =========================================================================

    def _stm(self) -> bool:
        start = self._cursor.mark()

        if self._stm_compound():
            return True

        if self._consume(TokenKind.IF):
            self._expect(TokenKind.LPAR, "missing '(' after if")
            self._require(self._expr(), "invalid expression inside if")
            self._expect(TokenKind.RPAR, "missing ')' after if condition")
            self._require(self._stm(), "missing statement after if")
            if self._consume(TokenKind.ELSE):
                self._require(self._stm(), "missing statement after else")
            return True

        if self._consume(TokenKind.WHILE):
            self._expect(TokenKind.LPAR, "missing '(' after while")
            self._require(self._expr(), "invalid expression inside while")
            self._expect(TokenKind.RPAR, "missing ')' after while condition")
            self._require(self._stm(), "missing statement after while")
            return True

        if self._consume(TokenKind.FOR):
            self._expect(TokenKind.LPAR, "missing '(' after for")
            self._expect(TokenKind.SEMICOLON, "missing ';' after first for expression")
            self._expect(TokenKind.SEMICOLON, "missing ';' after second for expression")
            self._expect(TokenKind.RPAR, "missing ')' after for expressions")
            self._require(self._stm(), "missing statement after for")
            return True

        if self._consume(TokenKind.BREAK):
            self._expect(TokenKind.SEMICOLON, "missing ';' after break")
            return True

        if self._consume(TokenKind.RETURN):
            self._expect(TokenKind.SEMICOLON, "missing ';' after return")
            return True

        if self._expr():
            self._expect(TokenKind.SEMICOLON, "missing ';' after expression")
            return True

        if self._consume(TokenKind.SEMICOLON):
            return True

        self._cursor.reset(start)
        return False

    def _stm_compound(self) -> bool:
        if not self._consume(TokenKind.LACC):
            return False

        while self._decl_var() or self._stm():
            pass

        self._expect(TokenKind.RACC, "missing '}' or syntax error in stmCompound")
        return True

    # =========================================================================
    # Expressions
    # =========================================================================

    def _expr(self) -> bool:
        return self._expr_assign()

    def _expr_assign(self) -> bool:
        """Assignment is right-associative and needs a unary target."""
        start = self._cursor.mark()

        if self._expr_unary():
            if self._consume(TokenKind.ASSIGN):
                self._require(self._expr_assign(), "invalid assignment")
                return True
            self._cursor.reset(start)

        return self._expr_or()

    def _expr_or(self) -> bool:
        return self._expr_binary(
            self._expr_and,
            (TokenKind.OR,),
            "invalid expression after ||",
        )

    def _expr_and(self) -> bool:
        return self._expr_binary(
            self._expr_eq,
            (TokenKind.AND,),
            "invalid expression after &&",
        )

    def _expr_eq(self) -> bool:
        return self._expr_binary(
            self._expr_rel,
            (TokenKind.EQUAL, TokenKind.NOTEQ),
            "invalid expression after == or !=",
        )

    def _expr_rel(self) -> bool:
        return self._expr_binary(
            self._expr_add,
            (TokenKind.LESS, TokenKind.LESSEQ, TokenKind.GREATER, TokenKind.GREATEREQ),
            "invalid expression after relational operator",
        )

    def _expr_add(self) -> bool:
        return self._expr_binary(
            self._expr_mul,
            (TokenKind.ADD, TokenKind.SUB),
            "invalid expression after '+' or '-'",
        )

    def _expr_mul(self) -> bool:
        return self._expr_binary(
            self._expr_cast,
            (TokenKind.MUL, TokenKind.DIV),
            "invalid expression after '*' or '/'",
        )

    def _expr_binary(
        self,
        operand: Callable[[], bool],
        operators: tuple[TokenKind, ...],
        message: str,
    ) -> bool:
        """
        Generic left-associative binary level.

        Args:
            operand: Production for the next higher precedence level
            operators: Token kinds accepted as the operator at this level
            message: Fatal message when an operator has no right operand
        """
        if not operand():
            return False

        while self._consume_any(*operators):
            self._require(operand(), message)

        return True

    def _expr_cast(self) -> bool:
        start = self._cursor.mark()

        if self._consume(TokenKind.LPAR):
            if self._type_name():
                self._expect(TokenKind.RPAR, "missing ')' after cast")
                self._require(self._expr_cast(), "invalid expression after cast")
                return True
            self._cursor.reset(start)

        return self._expr_unary()

    def _expr_unary(self) -> bool:
        """
        Unary expressions, memoised by start position.

        exprAssign tries a unary target before falling back to exprOr, and
        the fallback reaches exprUnary again at the same token. Replaying
        the first outcome keeps nested expressions from being re-parsed at
        every level.
        """
        start = self._cursor.mark()
        cached = self._unary_memo.get(start)
        if cached is not None:
            matched, end, consumed, furthest = cached
            self._cursor.pos = end
            self._cursor.consumed = consumed
            self._cursor.furthest = max(self._cursor.furthest, furthest)
            return matched

        matched = self._match_unary()
        self._unary_memo[start] = (
            matched,
            self._cursor.pos,
            self._cursor.consumed,
            self._cursor.furthest,
        )
        return matched

    def _match_unary(self) -> bool:
        prefixed = False
        while self._consume_any(TokenKind.SUB, TokenKind.NOT):
            prefixed = True

        if prefixed:
            self._require(self._expr_postfix(), "invalid expression after unary '-' or '!'")
            return True

        return self._expr_postfix()

    def _expr_postfix(self) -> bool:
        if not self._expr_primary():
            return False

        while True:
            if self._consume(TokenKind.LBRACKET):
                self._require(self._expr(), "invalid index expression in array access")
                self._expect(TokenKind.RBRACKET, "missing ']' in array access")
            elif self._consume(TokenKind.DOT):
                self._expect(TokenKind.ID, "missing field name after '.'")
            else:
                return True

    def _expr_primary(self) -> bool:
        """Identifiers, calls, literals and parenthesised expressions."""
        if self._consume(TokenKind.ID):
            if self._consume(TokenKind.LPAR):
                if self._expr():
                    while self._consume(TokenKind.COMMA):
                        self._require(self._expr(), "invalid expression after ',' in call")
                self._expect(TokenKind.RPAR, "missing ')' after function call arguments")
            return True

        if self._consume_any(
            TokenKind.CT_INT,
            TokenKind.CT_REAL,
            TokenKind.CT_CHAR,
            TokenKind.CT_STRING,
        ):
            return True

        start = self._cursor.mark()
        if self._consume(TokenKind.LPAR):
            # '(' followed by a type is a cast, left for exprCast
            if self._cursor.current.is_type_keyword():
                self._cursor.reset(start)
                return False
            self._require(self._expr(), "invalid expression inside '(' ')'")
            self._expect(TokenKind.RPAR, "missing ')' after expression")
            return True

        return False


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    struct_types: bool = False,
) -> ParseResult:
    """
    Tokenize and parse AtomC source in one step.

    Args:
        source: The AtomC source code
        filename: Source filename for diagnostics
        struct_types: Accept 'struct ID' as a base type

    Returns:
        ParseResult for the whole buffer
    """
    tokens = list(Lexer(source, filename).tokenize())
    return Parser(tokens, struct_types=struct_types).parse()
