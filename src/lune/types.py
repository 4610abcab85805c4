"""
Lune Type Tags
==============

Primitive types that may annotate a variable declaration.

| Tag     | Keyword | Values                  |
|---------|---------|-------------------------|
| INTEGER | int     | 32-bit signed integers  |
| STRING  | str     | decoded text            |
| BOOLEAN | (none)  | reserved, not lexed yet |
"""

from enum import Enum

from lune.lexer import TokenKind


class TypeTag(Enum):
    """Primitive type attached to a declaration."""

    INTEGER = "int"
    STRING = "str"
    BOOLEAN = "bool"  # No keyword produces this yet

    def __str__(self) -> str:
        return self.value


# Type keyword tokens accepted in a declaration
TYPE_KEYWORDS: dict[TokenKind, TypeTag] = {
    TokenKind.INT_TYPE: TypeTag.INTEGER,
    TokenKind.STR_TYPE: TypeTag.STRING,
}
