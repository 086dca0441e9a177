"""
Token definitions for the canvas-lang lexer.

The token set is deliberately small: the language has no operators and no
reserved words, command names are plain identifiers matched by the parser.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from canvaslang.utils.errors import SourceLocation


class TokenType(Enum):
    """Enumeration of all token types in canvas-lang."""

    # Literals
    NUMBER = auto()
    STRING = auto()

    # Identifiers (command names and positional marker words)
    IDENTIFIER = auto()

    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]

    # Punctuation
    SEMICOLON = auto()     # ;
    COMMA = auto()         # ,
    ASSIGN = auto()        # =
    ARROW = auto()         # ->

    # Recognized by the lexer but never emitted
    WHITESPACE = auto()
    COMMENT = auto()

    # End of input, synthesized by the parser
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The type of this token
        value: The raw lexeme (STRING values keep their quotes)
        location: Source location of this token
    """

    type: TokenType
    value: str
    location: Optional[SourceLocation] = None

    def __repr__(self) -> str:
        if self.location is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.location})"
        return f"Token({self.type.name}, {self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Token):
            return self.type == other.type and self.value == other.value
        if isinstance(other, TokenType):
            return self.type == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.type, self.value))


# Patterns tried in order at every cursor position; the first match wins.
TOKEN_PATTERNS: tuple[tuple[TokenType, re.Pattern[str]], ...] = (
    (TokenType.NUMBER, re.compile(r"[0-9]+(\.[0-9]+)?")),
    (TokenType.STRING, re.compile(r'"([^"]*)"')),
    (TokenType.IDENTIFIER, re.compile(r"[a-zA-Z][a-zA-Z0-9_]*")),
    (TokenType.LPAREN, re.compile(r"\(")),
    (TokenType.RPAREN, re.compile(r"\)")),
    (TokenType.LBRACE, re.compile(r"\{")),
    (TokenType.RBRACE, re.compile(r"\}")),
    (TokenType.LBRACKET, re.compile(r"\[")),
    (TokenType.RBRACKET, re.compile(r"\]")),
    (TokenType.SEMICOLON, re.compile(r";")),
    (TokenType.COMMA, re.compile(r",")),
    (TokenType.ASSIGN, re.compile(r"=")),
    (TokenType.WHITESPACE, re.compile(r"\s+")),
    (TokenType.COMMENT, re.compile(r"//.*")),
    (TokenType.ARROW, re.compile(r"->")),
)

SKIPPED_TOKENS = frozenset({TokenType.WHITESPACE, TokenType.COMMENT})
