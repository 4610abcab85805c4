"""
Lune Lexer (Tokenizer)
======================

This module implements the lexer for the Lune language. It converts
source text into a list of tokens for the parser in a single pass.

Token Categories
----------------
- Keywords: var, if, else, for, while, case, proc, ptr
- Type names: int, str
- Identifiers: variable names
- Integers: decimal, hexadecimal (0x), binary (0b)
- Strings: "double quoted" with escapes
- Operators: + - * / ! = < > += -= != == <= >=
- Delimiters: ( ) { } , . :
- Newlines: significant, they end expressions

Number Formats
--------------
| Format      | Prefix | Example | Value |
|-------------|--------|---------|-------|
| Decimal     | (none) | 123     | 123   |
| Hexadecimal | 0x     | 0x2000  | 8192  |
| Binary      | 0b     | 0b101   | 5     |

Integer values must fit in a 32-bit signed integer.

Comments and Continuations
--------------------------
- ``#`` skips to the end of the line, newline included
- A backslash at the end of a line joins it with the next one

Escape Sequences
----------------
\\n (newline), \\t (tab), \\r (return), \\\\ (backslash), \\" (quote).
Any other backslash pair is kept as written.

Example Usage
-------------
>>> from lune.lexer import scan
>>> for token in scan('var x:int=10'):
...     print(token)
Token(VAR, line 1)
Token(IDENTIFIER, 'x', line 1)
Token(COLON, line 1)
Token(INT_TYPE, line 1)
Token(EQUAL, line 1)
Token(INT_LITERAL, 10, line 1)
Token(EOF, line 1)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from lune.errors import (
    UnterminatedStringError,
    InvalidNumberError,
    InvalidCharacterError,
)

logger = logging.getLogger(__name__)

# Largest 32-bit signed value; literals are never negative, minus is a prefix operator
INT_MAX = 2 ** 31 - 1


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the Lune language.

    Keywords are distinguished from identifiers so the parser never has
    to compare identifier text. Only INT_LITERAL, STRING_LITERAL and
    IDENTIFIER carry a value.
    """

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    COMMA = auto()          # ,
    DOT = auto()            # .
    COLON = auto()          # :

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /

    # === Comparison and Logic ===
    BANG = auto()           # !
    BANG_EQUAL = auto()     # !=
    EQUAL_EQUAL = auto()    # ==
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=

    # === Assignment ===
    EQUAL = auto()          # =
    PLUS_EQUAL = auto()     # +=
    MINUS_EQUAL = auto()    # -=

    # === Reserved Keywords ===
    IF = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    CASE = auto()
    PROC = auto()
    PTR = auto()
    VAR = auto()

    # === Type Names ===
    INT_TYPE = auto()       # int
    STR_TYPE = auto()       # str

    # === Literals ===
    IDENTIFIER = auto()
    INT_LITERAL = auto()
    STRING_LITERAL = auto()

    # === Structural ===
    NEWLINE = auto()
    EOF = auto()


# =============================================================================
# Lookup Tables
# =============================================================================

# Read-only after import; shared by every Lexer instance
KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "while": TokenKind.WHILE,
    "case": TokenKind.CASE,
    "proc": TokenKind.PROC,
    "ptr": TokenKind.PTR,
    "var": TokenKind.VAR,
    "int": TokenKind.INT_TYPE,
    "str": TokenKind.STR_TYPE,
}

# Must be tried before SINGLE_CHAR_TOKENS
TWO_CHAR_TOKENS: dict[str, TokenKind] = {
    "+=": TokenKind.PLUS_EQUAL,
    "-=": TokenKind.MINUS_EQUAL,
    "!=": TokenKind.BANG_EQUAL,
    "==": TokenKind.EQUAL_EQUAL,
    "<=": TokenKind.LESS_EQUAL,
    ">=": TokenKind.GREATER_EQUAL,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    ":": TokenKind.COLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "!": TokenKind.BANG,
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS,
    ">": TokenKind.GREATER,
}

# Canonical source text for kinds without a payload
TOKEN_TEXT: dict[TokenKind, str] = {
    **{kind: text for text, kind in KEYWORDS.items()},
    **{kind: text for text, kind in TWO_CHAR_TOKENS.items()},
    **{kind: text for text, kind in SINGLE_CHAR_TOKENS.items()},
    TokenKind.NEWLINE: "\\n",
    TokenKind.EOF: "<eof>",
}


class UnknownCharPolicy(Enum):
    """What the lexer does with a character that starts no token."""

    SKIP = "skip"     # Drop it silently
    ERROR = "error"   # Raise InvalidCharacterError


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Lune source code.

    Attributes:
        kind: The TokenKind classification
        value: Payload for literals and identifiers, None otherwise
        start: Offset of the first character of the lexeme
        end: Offset one past the last character of the lexeme
        line: Line number in source (1-indexed)
    """
    kind: TokenKind
    value: int | str | None = None
    start: int = 0
    end: int = 0
    line: int = 1

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.kind.name}, {self.value!r}, line {self.line})"
        return f"Token({self.kind.name}, line {self.line})"

    @property
    def text(self) -> str:
        """Source-like text of the token, used in diagnostics and printing."""
        if self.value is not None:
            return str(self.value)
        return TOKEN_TEXT.get(self.kind, self.kind.name)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Lune source code.

    Scanning is a single forward pass with at most two characters of
    lookahead. The output always ends with exactly one EOF token.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.scan()

    Attributes:
        source: The source code being tokenized
        unknown_char: Policy for characters that start no token
        tokens: Tokens produced so far by the current scan
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    ESCAPE_SEQUENCES = {
        "n": "\n",
        "t": "\t",
        "r": "\r",
        "\\": "\\",
        '"': '"',
    }

    def __init__(
        self,
        source: str,
        unknown_char: UnknownCharPolicy = UnknownCharPolicy.SKIP,
    ):
        self.source = source
        self.unknown_char = unknown_char
        self.tokens: list[Token] = []

        # Scan window is source[_start:_pos]
        self._start = 0
        self._pos = 0
        self._line = 1

    def scan(self) -> list[Token]:
        """
        Convert the whole source into tokens.

        Returns:
            The token list, terminated by a single EOF token

        Raises:
            LexerError: On a malformed literal, or an unknown character
                when the policy is UnknownCharPolicy.ERROR
        """
        self.tokens = []
        self._start = 0
        self._pos = 0
        self._line = 1

        while not self._at_end():
            self._start = self._pos
            self._scan_token()

        self._start = self._pos
        self._emit(TokenKind.EOF, 0)

        logger.debug(f"Scanned {len(self.tokens)} tokens over {self._line} lines")
        return list(self.tokens)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> None:
        self._pos += 1

    def _emit(
        self,
        kind: TokenKind,
        width: int,
        value: int | str | None = None,
        line: Optional[int] = None,
    ) -> None:
        """
        Append a token covering the scan window extended by width characters.

        Sub-scanners that already moved the cursor past the lexeme pass a
        width of 0.
        """
        self._pos += width
        self.tokens.append(Token(
            kind=kind,
            value=value,
            start=self._start,
            end=self._pos,
            line=line or self._line,
        ))

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> None:
        """Scan whatever starts at the cursor, emitting at most one token."""
        char = self._peek()
        next_char = self._peek(1)

        if char + next_char in TWO_CHAR_TOKENS:
            self._emit(TWO_CHAR_TOKENS[char + next_char], 2)
            return

        if char in SINGLE_CHAR_TOKENS:
            self._emit(SINGLE_CHAR_TOKENS[char], 1)
            return

        if char == '"':
            self._scan_string()
            return

        if char in string.digits:
            self._scan_number()
            return

        if char in self.IDENT_START:
            self._scan_identifier()
            return

        if char == "\n":
            self._emit(TokenKind.NEWLINE, 1)
            self._line += 1
            return

        if char.isspace():
            self._advance()
            return

        if char == "#":
            self._skip_comment()
            return

        # Line continuation: backslash-newline (or backslash-CRLF)
        if char == "\\" and next_char == "\n":
            self._pos += 2
            self._line += 1
            return
        if char == "\\" and next_char == "\r" and self._peek(2) == "\n":
            self._pos += 3
            self._line += 1
            return

        self._unknown_character(char)

    def _skip_comment(self) -> None:
        """Skip a '#' comment together with the newline that ends it."""
        while not self._at_end() and self._peek() != "\n":
            self._advance()

        if self._peek() == "\n":
            self._advance()
            self._line += 1

    def _unknown_character(self, char: str) -> None:
        if self.unknown_char is UnknownCharPolicy.ERROR:
            raise InvalidCharacterError(char, self._line, self._pos)

        logger.debug(f"Skipping unknown character {char!r} at line {self._line}")
        self._advance()

    def _scan_identifier(self) -> None:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter or underscore and continue with
        letters, digits and underscores. Keywords are found by looking the
        text up in KEYWORDS.
        """
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[self._start:self._pos]

        if name in KEYWORDS:
            self._emit(KEYWORDS[name], 0)
        else:
            self._emit(TokenKind.IDENTIFIER, 0, name)

    def _scan_number(self) -> None:
        """
        Scan an integer literal.

        Handles:
        - Decimal: 123
        - Hexadecimal: 0x7F or 0X7F
        - Binary: 0b1010 or 0B1010
        """
        if self._peek() == "0":
            prefix = self._peek(1).lower()

            if prefix == "x":
                self._scan_radix_digits(string.hexdigits, 16, "hexadecimal")
                return

            if prefix == "b":
                self._scan_radix_digits("01", 2, "binary")
                return

        while self._peek() and self._peek() in string.digits:
            self._advance()

        self._emit_integer(self.source[self._start:self._pos], 10)

    def _scan_radix_digits(self, digits: str, base: int, name: str) -> None:
        """Scan the digit run that follows a 0x or 0b prefix."""
        self._pos += 2  # Skip prefix
        digits_start = self._pos

        while self._peek() and self._peek() in digits:
            self._advance()

        text = self.source[digits_start:self._pos]
        if not text:
            prefix = self.source[self._start:self._pos]
            raise InvalidNumberError(
                prefix,
                f"expected {name} digits after '{prefix}'",
                self._line,
                self._start,
            )

        self._emit_integer(text, base)

    def _emit_integer(self, digits: str, base: int) -> None:
        value = int(digits, base)

        if value > INT_MAX:
            raise InvalidNumberError(
                self.source[self._start:self._pos],
                "value does not fit in a 32-bit signed integer",
                self._line,
                self._start,
                hint=f"integer literals must not exceed {INT_MAX}",
            )

        self._emit(TokenKind.INT_LITERAL, 0, value)

    def _scan_string(self) -> None:
        """
        Scan a double-quoted string literal, decoding escape sequences.

        Raises:
            UnterminatedStringError: If input ends before the closing quote
        """
        start_line = self._line
        self._advance()  # consume opening "

        chars = []
        while not self._at_end():
            char = self._peek()

            if char == '"':
                self._advance()  # consume closing "
                self._emit(TokenKind.STRING_LITERAL, 0, "".join(chars), start_line)
                return

            if char == "\\" and self._peek(1) in self.ESCAPE_SEQUENCES:
                chars.append(self.ESCAPE_SEQUENCES[self._peek(1)])
                self._pos += 2
                continue

            if char == "\n":
                self._line += 1

            chars.append(char)
            self._advance()

        raise UnterminatedStringError(start_line, self._start)


# =============================================================================
# Convenience Functions
# =============================================================================

def scan(
    source: str,
    unknown_char: UnknownCharPolicy = UnknownCharPolicy.SKIP,
) -> list[Token]:
    """
    Tokenize Lune source code.

    Args:
        source: The source text
        unknown_char: Policy for characters that start no token

    Returns:
        The token list, always terminated by a single EOF token

    Raises:
        LexerError: If a literal cannot be decoded
    """
    return Lexer(source, unknown_char).scan()
