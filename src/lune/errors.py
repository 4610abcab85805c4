"""
Lune Front End Error Hierarchy
==============================

This module defines the exception hierarchy for the Lune front end.
All exceptions inherit from LuneError, allowing callers to catch every
lexing or parsing failure with a single except clause if desired.

Exception Hierarchy
-------------------
LuneError (base)
├── LexerError - errors raised while scanning source text
│   ├── UnterminatedStringError - missing closing quote
│   ├── InvalidNumberError - malformed or out-of-range integer literal
│   └── InvalidCharacterError - unknown character (strict mode only)
└── ParseError - errors raised while building the AST
    ├── MissingTokenError - a required token was not found
    ├── InvalidTypeError - unrecognised type in a declaration
    └── UnimplementedError - reserved construct with no grammar yet

Error Message Format
--------------------
Lexer errors are reported against the line and character offset where
they occurred:

    LexerError: error at line 3, position 41: unexpected end of string

Parse errors are reported against the token index in the stream and the
offending token:

    ParseError: error at position 4, token Token(IDENTIFIER, 'bool', line 1): invalid type 'bool'
    hint: expected 'int' or 'str'
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from lune.lexer import Token


# =============================================================================
# Base Exception Class
# =============================================================================

class LuneError(Exception):
    """
    Base exception for all Lune front end errors.

    Subclasses build their own human-readable message; this class only
    stores the bare description and optional hint.

        try:
            statements = parse_source(text)
        except LuneError as e:
            print(e)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"error: {self.message}"]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


# =============================================================================
# Lexer Errors
# =============================================================================

class LexerError(LuneError):
    """
    Error raised while converting source text into tokens.

    Attributes:
        message: The error description
        line: Line number where scanning failed (1-indexed)
        position: Character offset into the source buffer
        hint: A suggestion for fixing the error
    """

    def __init__(
        self,
        message: str,
        line: int,
        position: int,
        hint: Optional[str] = None,
    ):
        self.line = line
        self.position = position
        super().__init__(message, hint)

    def _format_message(self) -> str:
        parts = [
            f"LexerError: error at line {self.line}, "
            f"position {self.position}: {self.message}"
        ]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


class UnterminatedStringError(LexerError):
    """
    String literal reached the end of input before its closing quote.

    Example:
        var s:str="hello
    """

    def __init__(self, line: int, position: int):
        super().__init__(
            "unexpected end of string",
            line,
            position,
            hint="add closing '\"' to complete the string",
        )


class InvalidNumberError(LexerError):
    """
    Integer literal that cannot be decoded.

    Raised when a radix prefix (0x, 0b) has no digits after it, or when
    the decoded value does not fit in a 32-bit signed integer.
    """

    def __init__(
        self,
        text: str,
        reason: str,
        line: int,
        position: int,
        hint: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"invalid integer literal '{text}': {reason}",
            line,
            position,
            hint=hint,
        )


class InvalidCharacterError(LexerError):
    """
    Character that does not start any token.

    Only raised when the lexer runs with UnknownCharPolicy.ERROR; the
    default policy skips such characters silently.
    """

    def __init__(self, char: str, line: int, position: int):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            line,
            position,
        )


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(LuneError):
    """
    Error raised while building statements from the token stream.

    Attributes:
        message: The error description
        position: Index of the offending token in the token sequence
        token: The offending token
        hint: A suggestion for fixing the error
    """

    def __init__(
        self,
        message: str,
        position: int,
        token: "Token",
        hint: Optional[str] = None,
    ):
        self.position = position
        self.token = token
        super().__init__(message, hint)

    @property
    def line(self) -> int:
        """Source line of the offending token."""
        return self.token.line

    def _format_message(self) -> str:
        parts = [
            f"ParseError: error at position {self.position}, "
            f"token {self.token!r}: {self.message}"
        ]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


class MissingTokenError(ParseError):
    """
    Required token is missing.

    Raised when a declaration lacks its identifier, ':' or '='.
    """

    def __init__(self, expected: str, position: int, token: "Token"):
        self.expected = expected
        super().__init__(f"expected {expected}", position, token)


class InvalidTypeError(ParseError):
    """Type position holds something other than a primitive type keyword."""

    def __init__(self, position: int, token: "Token"):
        super().__init__(
            f"invalid type '{token.text}'",
            position,
            token,
            hint="expected 'int' or 'str'",
        )


class UnimplementedError(ParseError):
    """
    Reserved construct that the grammar does not cover yet.

    Control flow keywords (if, else, for, while, case), procedures and
    pointer types are lexed as keywords but have no grammar yet.
    """

    def __init__(self, feature: str, position: int, token: "Token"):
        self.feature = feature
        super().__init__(f"{feature} not implemented", position, token)
