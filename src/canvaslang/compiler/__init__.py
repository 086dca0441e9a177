"""
canvas-lang Compiler Package.

This package contains the front end:
- Lexer: Tokenizes canvas-lang source code
- Parser: Produces a Canvas AST from tokens
- AST: Node definitions for the syntax tree
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from canvaslang.compiler.ast_nodes import Canvas
from canvaslang.compiler.lexer import Lexer, tokenize
from canvaslang.compiler.parser import Parser, parse_tokens
from canvaslang.compiler.tokens import Token, TokenType


def parse_source(source: str, filename: Optional[str] = None) -> Canvas:
    """
    Lex and parse canvas-lang source code.

    Args:
        source: The program text
        filename: Optional filename for error locations

    Returns:
        The root Canvas node.

    Raises:
        LexError: On a character no token pattern accepts
        ParseError: On the first grammar mismatch
    """
    tokens = Lexer(source, filename).tokenize()
    return Parser(tokens, source, filename or "<input>").parse()


def parse_file(path: Path | str) -> Canvas:
    """Read and parse a ``.canvas`` file."""
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    return parse_source(source, str(path))


__all__ = [
    "Canvas",
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "parse_file",
    "parse_source",
    "parse_tokens",
    "tokenize",
]
