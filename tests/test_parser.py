"""
Lune Parser Test Suite
======================

Tests for the recursive descent parser: declarations, operator
precedence and associativity, statement boundaries and the error paths.

Test Organization
-----------------
- TestDeclarations: var declarations and the statement loop
- TestPrecedence: precedence levels and associativity
- TestUnary: prefix operators
- TestParseErrors: typed errors for invalid input
"""

import pytest
from lune.lexer import Token, TokenKind, UnknownCharPolicy, scan
from lune.parser import Parser, parse, parse_source
from lune.types import TypeTag
from lune.ast import (
    ASTPrinter,
    BinaryOp,
    IntLiteral,
    Name,
    StringLiteral,
    UnaryOp,
    VarDeclaration,
)
from lune.errors import (
    InvalidCharacterError,
    InvalidTypeError,
    MissingTokenError,
    ParseError,
    UnimplementedError,
    UnterminatedStringError,
)


def sexpr(source: str) -> str:
    """Parse source and render it as S-expressions."""
    return ASTPrinter().print(parse_source(source))


def initializer(expression: str):
    """Parse an expression by wrapping it in a declaration."""
    return parse_source(f"var x:int={expression}")[0].initializer


# =============================================================================
# Declaration Tests
# =============================================================================

class TestDeclarations:
    """Tests for var declarations and the top-level statement loop."""

    def test_int_declaration(self):
        """var x:int=5 parses to a single declaration."""
        statements = parse(scan("var x:int=5"))
        assert statements == [
            VarDeclaration(Name("x"), TypeTag.INTEGER, IntLiteral(5)),
        ]

    def test_string_declaration(self):
        statements = parse_source('var greeting:str = "hello world"')
        assert statements == [
            VarDeclaration(Name("greeting"), TypeTag.STRING, StringLiteral("hello world")),
        ]

    def test_hex_initializer(self):
        assert parse_source("var aNumber:int=0x2000")[0].initializer == IntLiteral(8192)

    def test_multiple_statements(self):
        source = 'var aNumber:int=0x2000\n           var aString:str="hello world"'
        statements = parse_source(source)
        assert len(statements) == 2
        assert statements[0].name == Name("aNumber")
        assert statements[1].var_type == TypeTag.STRING

    def test_blank_lines_and_comments(self):
        source = "\n\n# first\nvar a:int=1\n\n\n# second\nvar b:int=2\n\n"
        assert sexpr(source) == "(var a int 1)\n(var b int 2)"

    def test_trailing_comment(self):
        assert sexpr("var a:int=1 # one\nvar b:int=2") == "(var a int 1)\n(var b int 2)"

    def test_statements_on_one_line(self):
        """Newlines are not required between statements."""
        assert len(parse_source("var a:int=1 var b:int=2")) == 2

    def test_continued_declaration(self):
        assert sexpr("var x:int=1\\\n+2") == "(var x int (+ 1 2))"

    def test_empty_program(self):
        assert parse_source("") == []

    def test_only_newlines(self):
        assert parse_source("\n\n\n") == []

    def test_only_eof_token(self):
        assert parse([Token(TokenKind.EOF)]) == []

    @pytest.mark.parametrize("tokens", [
        [],
        [Token(TokenKind.NEWLINE)],
        [Token(TokenKind.VAR), Token(TokenKind.IDENTIFIER, "x")],
    ])
    def test_token_stream_must_end_with_eof(self, tokens):
        with pytest.raises(ValueError, match="EOF"):
            Parser(tokens)

    def test_names_compare_by_text(self):
        first = parse_source("var x:int=1")[0]
        second = parse_source("\n\nvar   x : int = 2")[0]
        assert first.name == second.name


# =============================================================================
# Precedence and Associativity Tests
# =============================================================================

class TestPrecedence:
    """Tests for binary operator precedence and left associativity."""

    def test_multiplication_binds_tighter(self):
        """2 + 3 * 4 is 2 + (3 * 4)."""
        expr = initializer("2 + 3 * 4")
        assert isinstance(expr, BinaryOp)
        assert expr.operator.kind == TokenKind.PLUS
        assert expr.left == IntLiteral(2)
        assert isinstance(expr.right, BinaryOp)
        assert expr.right.operator.kind == TokenKind.STAR
        assert expr.right.left == IntLiteral(3)
        assert expr.right.right == IntLiteral(4)

    def test_subtraction_is_left_associative(self):
        """8 - 3 - 2 is (8 - 3) - 2."""
        expr = initializer("8 - 3 - 2")
        assert expr.operator.kind == TokenKind.MINUS
        assert expr.right == IntLiteral(2)
        assert isinstance(expr.left, BinaryOp)
        assert expr.left.left == IntLiteral(8)
        assert expr.left.right == IntLiteral(3)

    @pytest.mark.parametrize("source,expected", [
        ("2 + 3 * 4", "(+ 2 (* 3 4))"),
        ("2 * 3 + 4", "(+ (* 2 3) 4)"),
        ("8 - 3 - 2", "(- (- 8 3) 2)"),
        ("8 / 4 / 2", "(/ (/ 8 4) 2)"),
        ("1 / 2 * 3", "(* (/ 1 2) 3)"),
        ("1 + 2 < 3 * 4", "(< (+ 1 2) (* 3 4))"),
        ("1 < 2 == 3 >= 4", "(== (< 1 2) (>= 3 4))"),
        ("1 == 2 != 3", "(!= (== 1 2) 3)"),
        ("1 > 2 <= 3", "(<= (> 1 2) 3)"),
    ])
    def test_precedence_table(self, source, expected):
        assert sexpr(f"var x:int={source}") == f"(var x int {expected})"

    def test_string_operands(self):
        assert sexpr('var s:str="a" + "b"') == '(var s str (+ "a" "b"))'

    def test_operator_token_is_kept(self):
        expr = initializer("1 +\\\n 2")
        assert expr.operator.line == 1
        assert expr.operator.start == 12

    def test_newline_ends_expression(self):
        statements = parse_source("var a:int=1\nvar b:int=2")
        assert statements[0].initializer == IntLiteral(1)


# =============================================================================
# Unary Operator Tests
# =============================================================================

class TestUnary:
    """Tests for prefix operators."""

    def test_negation(self):
        expr = initializer("-5")
        assert isinstance(expr, UnaryOp)
        assert expr.operator.kind == TokenKind.MINUS
        assert expr.operand == IntLiteral(5)

    def test_stacked_negation(self):
        """--5 is -(-(5))."""
        expr = initializer("--5")
        assert isinstance(expr, UnaryOp)
        assert isinstance(expr.operand, UnaryOp)
        assert expr.operand.operand == IntLiteral(5)

    def test_logical_not(self):
        assert sexpr("var x:int=!0") == "(var x int (! 0))"

    def test_mixed_prefixes(self):
        assert sexpr("var x:int=!-1") == "(var x int (! (- 1)))"

    def test_unary_binds_tighter_than_binary(self):
        # The prefix applies to the nearest operand only, never to a whole product.
        assert sexpr("var x:int=-2 * 3") == "(var x int (* (- 2) 3))"
        assert sexpr("var x:int=1 - -2") == "(var x int (- 1 (- 2)))"
        assert sexpr("var x:int=!0 == 1") == "(var x int (== (! 0) 1))"


# =============================================================================
# Error Tests
# =============================================================================

class TestParseErrors:
    """Tests for typed parse errors."""

    def test_bare_literal_statement(self):
        """A statement that does not start with var is rejected."""
        with pytest.raises(ParseError) as exc_info:
            parse_source("5")
        error = exc_info.value
        assert error.message == "invalid statement type"
        assert error.position == 0
        assert error.token.kind == TokenKind.INT_LITERAL
        assert str(error).startswith(
            "ParseError: error at position 0, token Token(INT_LITERAL, 5, line 1): "
            "invalid statement type"
        )

    def test_bare_literal_from_tokens(self):
        tokens = [Token(TokenKind.INT_LITERAL, 5, 0, 1, 1), Token(TokenKind.EOF, None, 1, 1, 1)]
        with pytest.raises(ParseError, match="invalid statement type"):
            Parser(tokens).parse()

    def test_identifier_statement(self):
        with pytest.raises(ParseError, match="invalid statement type"):
            parse_source("x = 1")

    def test_error_on_later_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("var x:int=1\n-2")
        assert exc_info.value.token.kind == TokenKind.MINUS
        assert exc_info.value.line == 2
        assert exc_info.value.position == 7

    def test_missing_name(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("var :int=1")
        assert exc_info.value.expected == "variable name"

    def test_missing_colon(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("var x int=1")
        assert "':'" in exc_info.value.message
        assert exc_info.value.position == 2
        assert exc_info.value.token.kind == TokenKind.INT_TYPE

    def test_invalid_type(self):
        with pytest.raises(InvalidTypeError) as exc_info:
            parse_source("var x:bool=1")
        assert exc_info.value.message == "invalid type 'bool'"
        assert exc_info.value.hint == "expected 'int' or 'str'"

    def test_pointer_type_unimplemented(self):
        with pytest.raises(UnimplementedError, match="pointer types not implemented"):
            parse_source("var x:ptr=1")

    def test_missing_initializer(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("var x:int")
        assert exc_info.value.token.kind == TokenKind.EOF

    def test_missing_initializer_before_newline(self):
        with pytest.raises(MissingTokenError):
            parse_source("var x:int\nvar y:int=1")

    def test_empty_initializer(self):
        with pytest.raises(ParseError, match="invalid expression"):
            parse_source("var x:int=")

    def test_dangling_operator(self):
        with pytest.raises(ParseError, match="invalid expression") as exc_info:
            parse_source("var x:int=1 +")
        assert exc_info.value.token.kind == TokenKind.EOF

    def test_identifier_is_not_an_expression(self):
        with pytest.raises(ParseError, match="invalid expression"):
            parse_source("var x:int=y")

    @pytest.mark.parametrize("keyword", ["if", "else", "for", "while", "case", "proc", "ptr"])
    def test_reserved_keywords_unimplemented(self, keyword):
        with pytest.raises(UnimplementedError) as exc_info:
            parse_source(f"{keyword} x")
        assert "not implemented" in exc_info.value.message
        assert isinstance(exc_info.value, ParseError)

    def test_first_error_wins(self):
        """Parsing stops at the first bad statement."""
        with pytest.raises(ParseError) as exc_info:
            parse_source("var a:int=1\n5\nvar b:bool=2")
        assert exc_info.value.message == "invalid statement type"

    def test_lexer_errors_propagate(self):
        with pytest.raises(UnterminatedStringError):
            parse_source('var s:str="abc')

    def test_strict_lexing(self):
        with pytest.raises(InvalidCharacterError):
            parse_source("var x:int=1;", UnknownCharPolicy.ERROR)
