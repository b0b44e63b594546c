# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the AtomC lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords and identifiers
#   - Integer and real literals: decimal, hexadecimal, zero-prefixed,
#     fraction, exponent
#   - String and character literals, including unterminated ones
#   - Comments (line and block forms)
#   - Operators and delimiters, maximal munch
#   - Line tracking and unknown-character reporting
# =============================================================================

import dataclasses

import pytest
from atomc.lexer import KEYWORDS, Lexer, Token, TokenKind, tokenize


# =============================================================================
# Helper Functions
# =============================================================================

def scan(source: str) -> list:
    """Tokenize and drop the trailing END token."""
    tokens = tokenize(source, "<test>")
    assert tokens[-1].kind == TokenKind.END
    return tokens[:-1]


def kinds(source: str) -> list:
    return [t.kind for t in scan(source)]


def texts(source: str) -> list:
    return [t.text for t in scan(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only the END token."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.END
        assert tokens[0].text == "EOF"
        assert tokens[0].line == 1

    def test_whitespace_only(self):
        """Whitespace produces no tokens."""
        assert scan("  \t\r\n  ") == []

    def test_exactly_one_end_token(self):
        tokens = tokenize("int x; // trailing")
        assert [t.kind for t in tokens].count(TokenKind.END) == 1
        assert tokens[-1].kind == TokenKind.END

    @pytest.mark.parametrize("text,kind", sorted(KEYWORDS.items()))
    def test_keywords(self, text, kind):
        tokens = scan(text)
        assert len(tokens) == 1
        assert tokens[0].kind == kind
        assert tokens[0].text == text

    def test_keywords_are_case_sensitive(self):
        assert kinds("Int WHILE Struct") == [TokenKind.ID] * 3

    def test_identifiers(self):
        for ident in ["main", "_bar", "test123", "_123_abc", "integer", "iff"]:
            tokens = scan(ident)
            assert len(tokens) == 1
            assert tokens[0].kind == TokenKind.ID
            assert tokens[0].text == ident

    def test_token_repr(self):
        """Tokens print in the traditional Token(KIND, "text", Line: n) form."""
        token = scan("\n\n42")[0]
        assert repr(token) == 'Token(CT_INT, "42", Line: 3)'
        assert str(token) == repr(token)

    def test_end_token_repr(self):
        assert repr(tokenize("x")[-1]) == 'Token(END, "EOF", Line: 1)'

    def test_tokens_are_immutable(self):
        token = scan("x")[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.text = "y"

    def test_filename_recorded(self):
        token = list(Lexer("x", "prog.c").tokenize())[0]
        assert token.filename == "prog.c"
        assert str(token.location) == "prog.c:1"


# =============================================================================
# Number Format Tests
# =============================================================================

class TestNumberFormats:
    """Test integer and real literal recognition."""

    def test_decimal_integer(self):
        tokens = scan("123")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_INT
        assert tokens[0].text == "123"

    def test_zero(self):
        tokens = scan("0")
        assert tokens[0].kind == TokenKind.CT_INT
        assert tokens[0].text == "0"

    def test_hex(self):
        """Hex literals keep their prefix in the text."""
        tokens = scan("0x1F")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_INT
        assert tokens[0].text == "0x1F"

    def test_hex_uppercase_prefix(self):
        tokens = scan("0XaBcD")
        assert tokens[0].kind == TokenKind.CT_INT
        assert tokens[0].text == "0XaBcD"

    def test_hex_prefix_without_digits(self):
        """A bare 0x is still an integer literal."""
        tokens = scan("0x")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_INT
        assert tokens[0].text == "0x"

    def test_hex_stops_at_non_hex_letter(self):
        assert texts("0x1Fg") == ["0x1F", "g"]
        assert kinds("0x1Fg") == [TokenKind.CT_INT, TokenKind.ID]

    def test_hex_has_no_fraction(self):
        assert kinds("0x1.5") == [TokenKind.CT_INT, TokenKind.DOT, TokenKind.CT_INT]

    def test_zero_prefixed_is_plain_integer(self):
        """Leading-zero literals are not reinterpreted as octal."""
        tokens = scan("0189")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_INT
        assert tokens[0].text == "0189"

    def test_zero_prefixed_has_no_fraction(self):
        assert texts("01.5") == ["01", ".", "5"]

    @pytest.mark.parametrize("text", ["12.5", "0.5", "3.", "1e10", "1E10", "1.5e-3", "2e+7", "6.02E23", "1e"])
    def test_real_literals(self, text):
        tokens = scan(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_REAL
        assert tokens[0].text == text

    def test_exponent_takes_one_sign(self):
        assert texts("1e--2") == ["1e-", "-", "2"]

    def test_maximal_munch_real_then_dot(self):
        """12.3.4 is a real, a dot and an integer."""
        tokens = scan("12.3.4")
        assert [t.kind for t in tokens] == [TokenKind.CT_REAL, TokenKind.DOT, TokenKind.CT_INT]
        assert [t.text for t in tokens] == ["12.3", ".", "4"]

    def test_digits_do_not_run_into_identifier(self):
        tokens = scan("123abc")
        assert [t.kind for t in tokens] == [TokenKind.CT_INT, TokenKind.ID]
        assert [t.text for t in tokens] == ["123", "abc"]


# =============================================================================
# String and Character Literal Tests
# =============================================================================

class TestQuotedLiterals:
    """Test string and character literals."""

    def test_string(self):
        tokens = scan('"hello world"')
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_STRING
        assert tokens[0].text == "hello world"

    def test_empty_string(self):
        tokens = scan('""')
        assert tokens[0].kind == TokenKind.CT_STRING
        assert tokens[0].text == ""

    def test_no_escape_processing(self):
        tokens = scan(r'"a\nb"')
        assert tokens[0].text == r"a\nb"

    def test_unterminated_string_runs_to_end(self):
        tokens = tokenize('"abc def')
        assert [t.kind for t in tokens] == [TokenKind.CT_STRING, TokenKind.END]
        assert tokens[0].text == "abc def"

    def test_char(self):
        tokens = scan("'a'")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CT_CHAR
        assert tokens[0].text == "a"

    def test_unterminated_char(self):
        tokens = tokenize("'a")
        assert [t.kind for t in tokens] == [TokenKind.CT_CHAR, TokenKind.END]
        assert tokens[0].text == "a"

    def test_string_keeps_start_line(self):
        tokens = scan('"first\nsecond" x')
        assert tokens[0].line == 1
        assert tokens[1].line == 2


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test that comments are skipped."""

    def test_line_comment(self):
        tokens = scan("// comment\nx")
        assert len(tokens) == 1
        assert tokens[0].text == "x"
        assert tokens[0].line == 2

    def test_line_comment_at_end(self):
        assert scan("x // no newline") == scan("x")

    def test_block_comment(self):
        tokens = scan("/* a\n b */ x")
        assert len(tokens) == 1
        assert tokens[0].text == "x"
        assert tokens[0].line == 2

    def test_block_comment_between_tokens(self):
        assert texts("a/**/b") == ["a", "b"]

    def test_unterminated_block_comment_swallows_rest(self):
        tokens = tokenize("int /* never closed\nint x;")
        assert [t.kind for t in tokens] == [TokenKind.INT, TokenKind.END]
        assert tokens[-1].line == 2

    def test_slash_alone_is_division(self):
        assert kinds("a/b") == [TokenKind.ID, TokenKind.DIV, TokenKind.ID]


# =============================================================================
# Operator and Delimiter Tests
# =============================================================================

class TestOperators:
    """Test operators and delimiters."""

    def test_single_character_symbols(self):
        assert kinds("+ - * / . , ; ( ) [ ] { }") == [
            TokenKind.ADD, TokenKind.SUB, TokenKind.MUL, TokenKind.DIV,
            TokenKind.DOT, TokenKind.COMMA, TokenKind.SEMICOLON,
            TokenKind.LPAR, TokenKind.RPAR, TokenKind.LBRACKET,
            TokenKind.RBRACKET, TokenKind.LACC, TokenKind.RACC,
        ]

    def test_comparison_operators(self):
        assert kinds("< <= > >= = == ! !=") == [
            TokenKind.LESS, TokenKind.LESSEQ, TokenKind.GREATER,
            TokenKind.GREATEREQ, TokenKind.ASSIGN, TokenKind.EQUAL,
            TokenKind.NOT, TokenKind.NOTEQ,
        ]

    def test_logical_operators(self):
        assert kinds("&& ||") == [TokenKind.AND, TokenKind.OR]

    def test_two_character_forms_need_no_spaces(self):
        assert texts("a<=b==c") == ["a", "<=", "b", "==", "c"]

    def test_semicolon_text(self):
        assert scan(";")[0].text == ";"

    def test_triple_equals(self):
        assert kinds("===") == [TokenKind.EQUAL, TokenKind.ASSIGN]


# =============================================================================
# Line Tracking Tests
# =============================================================================

class TestLineTracking:
    """Test that each token records the line it starts on."""

    def test_lines(self):
        tokens = scan("a\nb\n\nc")
        assert [t.line for t in tokens] == [1, 2, 4]

    def test_line_after_n_newlines(self):
        for n in range(5):
            tokens = scan("\n" * n + "x")
            assert tokens[0].line == n + 1

    def test_lines_are_non_decreasing(self):
        source = "int a;\n/* c\n c */ double b[];\n\"s\nt\" 'c'\n"
        lines = [t.line for t in tokenize(source)]
        assert lines == sorted(lines)

    def test_end_token_takes_final_line(self):
        tokens = tokenize("x\n")
        assert tokens[-1].line == 2


# =============================================================================
# Unknown Character Tests
# =============================================================================

class TestUnknownCharacters:
    """Unknown characters are reported and skipped, never fatal."""

    def test_unknown_character_skipped(self):
        lexer = Lexer("int @x;", "<test>")
        tokens = list(lexer.tokenize())
        assert [t.kind for t in tokens] == [
            TokenKind.INT, TokenKind.ID, TokenKind.SEMICOLON, TokenKind.END,
        ]
        assert len(lexer.warnings) == 1
        assert lexer.warnings[0].char == "@"
        assert lexer.warnings[0].line == 1
        assert str(lexer.warnings[0]) == "Unknown character @"

    def test_each_unknown_character_reported(self):
        lexer = Lexer("#\n$ x\n`", "<test>")
        tokens = list(lexer.tokenize())
        assert [t.text for t in tokens] == ["x", "EOF"]
        assert [(w.char, w.line) for w in lexer.warnings] == [("#", 1), ("$", 2), ("`", 3)]

    def test_single_ampersand_and_pipe_are_unknown(self):
        lexer = Lexer("a & b | c", "<test>")
        tokens = list(lexer.tokenize())
        assert [t.text for t in tokens] == ["a", "b", "c", "EOF"]
        assert [w.char for w in lexer.warnings] == ["&", "|"]

    def test_non_ascii_letter_is_unknown(self):
        lexer = Lexer("é", "<test>")
        tokens = list(lexer.tokenize())
        assert [t.kind for t in tokens] == [TokenKind.END]
        assert lexer.warnings[0].char == "é"


# =============================================================================
# Round-Trip Tests
# =============================================================================

class TestRoundTrip:
    """Joining token texts recovers space-separated source."""

    def test_round_trip(self):
        source = "int x [ ] ; double f ( char c ) { x = 0x1F + 2.5e3 * - y ; }"
        tokens = scan(source)
        assert " ".join(t.text for t in tokens) == source
        assert isinstance(tokens[0], Token)

    def test_round_trip_with_literals(self):
        source = 'f ( "text" , \'c\' ) ;'
        tokens = scan(source)
        rebuilt = []
        for t in tokens:
            if t.kind == TokenKind.CT_STRING:
                rebuilt.append(f'"{t.text}"')
            elif t.kind == TokenKind.CT_CHAR:
                rebuilt.append(f"'{t.text}'")
            else:
                rebuilt.append(t.text)
        assert " ".join(rebuilt) == source
