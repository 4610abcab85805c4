"""
Lune Recursive Descent Parser
=============================

This module implements a recursive descent parser for Lune. It takes
the token list produced by the lexer and builds a list of statements.

Grammar (EBNF)
--------------
program          ::= NEWLINE* (statement NEWLINE*)* EOF
statement        ::= var_declaration
var_declaration  ::= 'var' IDENTIFIER ':' type_tag '=' expression
type_tag         ::= 'int' | 'str'

Expression Precedence (lowest to highest)
-----------------------------------------
1. equality    == !=
2. comparison  > >= < <=
3. term        + -
4. factor      * /
5. unary       ! -        (prefix, right-recursive)
6. primary     INT_LITERAL, STRING_LITERAL

All binary levels are left-associative. A NEWLINE token ends an
expression because no rule accepts it.

Errors
------
Parsing stops at the first error; there is no recovery. Reserved
keywords (if, for, proc, ptr, ...) are rejected with UnimplementedError.

Example Usage
-------------
>>> from lune.parser import parse_source
>>> from lune.ast import ASTPrinter
>>> print(ASTPrinter().print(parse_source('var x:int=2+3*4')))
(var x int (+ 2 (* 3 4)))
"""

import logging
from typing import Callable, Optional

from lune.lexer import Token, TokenKind, UnknownCharPolicy, scan
from lune.types import TYPE_KEYWORDS
from lune.ast import (
    Expr,
    Stmt,
    Name,
    IntLiteral,
    StringLiteral,
    UnaryOp,
    BinaryOp,
    VarDeclaration,
)
from lune.errors import (
    ParseError,
    MissingTokenError,
    InvalidTypeError,
    UnimplementedError,
)

logger = logging.getLogger(__name__)

# Statement-leading keywords that are reserved but have no grammar yet
UNIMPLEMENTED_STATEMENTS: dict[TokenKind, str] = {
    TokenKind.IF: "'if' statements",
    TokenKind.ELSE: "'else' clauses",
    TokenKind.FOR: "'for' loops",
    TokenKind.WHILE: "'while' loops",
    TokenKind.CASE: "'case' statements",
    TokenKind.PROC: "procedure definitions",
    TokenKind.PTR: "pointer types",
}


class Parser:
    """
    Recursive descent parser for Lune.

    The token list must end with an EOF token, as every list produced
    by the lexer does.

    Attributes:
        tokens: List of tokens to parse
    """

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token stream must end with an EOF token")
        self.tokens = tokens

        # Current position in token stream
        self._pos = 0

    def parse(self) -> list[Stmt]:
        """
        Parse the token stream into statements.

        Returns:
            Statements in source order

        Raises:
            ParseError: On the first statement that fails to parse
        """
        statements = []

        self._skip_newlines()
        while not self._at_end():
            statements.append(self._parse_statement())
            self._skip_newlines()

        logger.debug(
            f"Parsed {len(statements)} statements from {len(self.tokens)} tokens"
        )
        return statements

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().kind == TokenKind.EOF

    def _peek(self) -> Token:
        """Return the current token without consuming it."""
        if self._pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self._pos]

    def _previous(self) -> Token:
        """Return the most recently consumed token."""
        return self.tokens[self._pos - 1]

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never consumed."""
        if not self._at_end():
            self._pos += 1
            return self._previous()
        return self._peek()

    def _consume(self, kind: TokenKind) -> Optional[Token]:
        """Consume the current token only if it is of the given kind."""
        if self._peek().kind == kind:
            return self._advance()
        return None

    def _match(self, *kinds: TokenKind) -> bool:
        """Consume the current token if it is any of kinds."""
        if self._peek().kind in kinds:
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        """
        Consume a token of the given kind or fail.

        Raises:
            MissingTokenError: If the current token is of another kind
        """
        token = self._consume(kind)
        if token is None:
            raise MissingTokenError(expected, self._pos, self._peek())
        return token

    def _skip_newlines(self) -> None:
        while self._match(TokenKind.NEWLINE):
            pass

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Stmt:
        """Parse one statement, dispatching on its leading keyword."""
        token = self._peek()

        if token.kind == TokenKind.VAR:
            self._advance()
            return self._parse_var_declaration()

        if token.kind in UNIMPLEMENTED_STATEMENTS:
            raise UnimplementedError(
                UNIMPLEMENTED_STATEMENTS[token.kind], self._pos, token
            )

        raise ParseError(
            "invalid statement type",
            self._pos,
            token,
            hint="statements must start with 'var'",
        )

    def _parse_var_declaration(self) -> VarDeclaration:
        """Parse the remainder of ``var NAME : TYPE = EXPR``."""
        name_token = self._expect(TokenKind.IDENTIFIER, "variable name")
        self._expect(TokenKind.COLON, "':' after variable name")

        type_token = self._peek()
        if type_token.kind == TokenKind.PTR:
            raise UnimplementedError("pointer types", self._pos, type_token)
        if type_token.kind not in TYPE_KEYWORDS:
            raise InvalidTypeError(self._pos, type_token)
        self._advance()

        # Initializer is mandatory
        self._expect(TokenKind.EQUAL, "'=' and an initial value")
        initializer = self._parse_expression()

        return VarDeclaration(
            name=Name(name_token.value),
            var_type=TYPE_KEYWORDS[type_token.kind],
            initializer=initializer,
        )

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _parse_expression(self) -> Expr:
        return self._parse_equality()

    def _parse_equality(self) -> Expr:
        """Parse equality expression (== !=)."""
        return self._parse_binary(
            self._parse_comparison,
            TokenKind.BANG_EQUAL,
            TokenKind.EQUAL_EQUAL,
        )

    def _parse_comparison(self) -> Expr:
        """Parse comparison expression (> >= < <=)."""
        return self._parse_binary(
            self._parse_term,
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
        )

    def _parse_term(self) -> Expr:
        """Parse additive expression (+ -)."""
        return self._parse_binary(self._parse_factor, TokenKind.PLUS, TokenKind.MINUS)

    def _parse_factor(self) -> Expr:
        """Parse multiplicative expression (* /)."""
        return self._parse_binary(self._parse_unary, TokenKind.STAR, TokenKind.SLASH)

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expr],
        *operators: TokenKind,
    ) -> Expr:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Parser for the next-higher precedence level
            operators: Token kinds accepted as operators at this level
        """
        expr = operand_parser()

        while self._match(*operators):
            operator = self._previous()
            right = operand_parser()
            expr = BinaryOp(left=expr, operator=operator, right=right)

        return expr

    def _parse_unary(self) -> Expr:
        """Parse prefix expression (! -), right-recursive."""
        if self._match(TokenKind.BANG, TokenKind.MINUS):
            operator = self._previous()
            operand = self._parse_unary()
            return UnaryOp(operator=operator, operand=operand)

        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        """Parse a literal."""
        token = self._peek()

        if token.kind == TokenKind.INT_LITERAL:
            self._advance()
            return IntLiteral(token.value)

        if token.kind == TokenKind.STRING_LITERAL:
            self._advance()
            return StringLiteral(token.value)

        raise ParseError(
            "invalid expression",
            self._pos,
            token,
            hint="expected an integer or string literal",
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(tokens: list[Token]) -> list[Stmt]:
    """
    Parse a token list into statements.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens).parse()


def parse_source(
    source: str,
    unknown_char: UnknownCharPolicy = UnknownCharPolicy.SKIP,
) -> list[Stmt]:
    """
    Parse Lune source code into statements.

    This is a convenience function that combines lexing and parsing.

    Raises:
        LexerError: If the source cannot be tokenized
        ParseError: If parsing fails
    """
    return parse(scan(source, unknown_char))
