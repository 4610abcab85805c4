"""
Lune - Front End for the Lune Language
======================================

This package turns Lune source text into an abstract syntax tree:

- A lexer converting source text into typed, positioned tokens
- A recursive descent parser building statements and expression trees
- An S-expression printer for inspecting the result

Pipeline
--------
    Source → Lexer → Tokens → Parser → Statements

Usage
-----
>>> from lune import ASTPrinter, scan, parse
>>> tokens = scan('var answer:int = 0x2A')
>>> statements = parse(tokens)
>>> print(ASTPrinter().print(statements))
(var answer int 42)

Or use the command-line tool:
    $ lunec program.lune

Language Subset
---------------
Supported:
- Declarations: var name:int = expr, var name:str = expr
- Integer literals in decimal, hex (0x) and binary (0b)
- String literals with \\n \\t \\r \\\\ \\" escapes
- Operators: == != > >= < <= + - * / and prefix - !

Reserved but not implemented:
- if, else, for, while, case, proc, ptr
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Imports
# =============================================================================

from lune.errors import (
    LuneError,
    LexerError,
    UnterminatedStringError,
    InvalidNumberError,
    InvalidCharacterError,
    ParseError,
    MissingTokenError,
    InvalidTypeError,
    UnimplementedError,
)
from lune.lexer import Lexer, Token, TokenKind, UnknownCharPolicy, KEYWORDS, scan
from lune.types import TypeTag
from lune.parser import Parser, parse, parse_source
from lune.ast import (
    ASTNode,
    Expr,
    Stmt,
    Name,
    IntLiteral,
    StringLiteral,
    UnaryOp,
    BinaryOp,
    ExpressionStatement,
    VarDeclaration,
    Assignment,
    ASTVisitor,
    ASTPrinter,
)
from lune.frontend import Frontend, FrontendOptions, FrontendResult

__all__ = [
    # Version
    "__version__",
    # Errors
    "LuneError",
    "LexerError",
    "UnterminatedStringError",
    "InvalidNumberError",
    "InvalidCharacterError",
    "ParseError",
    "MissingTokenError",
    "InvalidTypeError",
    "UnimplementedError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "UnknownCharPolicy",
    "KEYWORDS",
    "scan",
    # Types
    "TypeTag",
    # Parser
    "Parser",
    "parse",
    "parse_source",
    # AST
    "ASTNode",
    "Expr",
    "Stmt",
    "Name",
    "IntLiteral",
    "StringLiteral",
    "UnaryOp",
    "BinaryOp",
    "ExpressionStatement",
    "VarDeclaration",
    "Assignment",
    "ASTVisitor",
    "ASTPrinter",
    # Driver
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
]
