"""
Lune Front End Driver
=====================

This module ties the lexer and parser together:

    Source → Lexer → Tokens → Parser → Statements

Usage
-----
Command line:
    $ lunec program.lune

Programmatic:
    >>> from lune.frontend import Frontend
    >>> result = Frontend().process_source('var x:int=1')
    >>> result.statements
    [VarDeclaration(name=Name(value='x'), var_type=<TypeTag.INTEGER: 'int'>, initializer=IntLiteral(value=1))]

Error Handling
--------------
Errors are not collected: the first LexerError or ParseError
propagates to the caller unchanged.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from lune.lexer import Lexer, Token, TokenKind, UnknownCharPolicy
from lune.parser import Parser
from lune.ast import Stmt

logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front end configuration options.

    Attributes:
        unknown_char: What the lexer does with characters that start no
                      token. SKIP drops them, ERROR raises
                      InvalidCharacterError.
        keep_newlines: If False, NEWLINE tokens are left out of
                       FrontendResult.tokens. The parser always sees them.
    """
    unknown_char: UnknownCharPolicy = UnknownCharPolicy.SKIP
    keep_newlines: bool = True


@dataclass
class FrontendResult:
    """
    Output of one front end pass.

    Attributes:
        filename: Name of the processed source
        tokens: Tokens produced by the lexer
        statements: Statements produced by the parser
    """
    filename: str
    tokens: list[Token] = field(default_factory=list)
    statements: list[Stmt] = field(default_factory=list)

    @property
    def token_count(self) -> int:
        return len(self.tokens)


class Frontend:
    """
    Runs the lexer and parser over a source with shared options.

    Example:
        frontend = Frontend(FrontendOptions(unknown_char=UnknownCharPolicy.ERROR))
        result = frontend.process_file("program.lune")
        for stmt in result.statements:
            print(stmt)
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def process_source(self, source: str, filename: str = "<input>") -> FrontendResult:
        """
        Tokenize and parse source text.

        Raises:
            LexerError: If the source cannot be tokenized
            ParseError: If parsing fails
        """
        logger.debug(f"Scanning {filename} ({len(source)} characters)")
        tokens = Lexer(source, self.options.unknown_char).scan()

        logger.debug(f"Parsing {filename}")
        statements = Parser(tokens).parse()

        if not self.options.keep_newlines:
            tokens = [t for t in tokens if t.kind != TokenKind.NEWLINE]

        logger.info(f"{filename}: {len(statements)} statements")
        return FrontendResult(filename=filename, tokens=tokens, statements=statements)

    def process_file(self, filepath: str | Path) -> FrontendResult:
        """
        Tokenize and parse a source file.

        Raises:
            FileNotFoundError: If the source file does not exist
            LexerError: If the source cannot be tokenized
            ParseError: If parsing fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.process_source(source, str(path))
