"""
canvas-lang Lexer (Tokenizer).

Transforms canvas-lang source code into a list of tokens by trying a fixed,
ordered table of patterns at the cursor.
"""

import logging
from typing import Iterator, Optional

from canvaslang.compiler.tokens import SKIPPED_TOKENS, TOKEN_PATTERNS, Token
from canvaslang.utils.errors import LexError, SourceLocation

logger = logging.getLogger(__name__)


class Lexer:
    """
    Tokenizer for canvas-lang source code.

    The lexer supports:
    - Unsigned integer and decimal literals (``12``, ``3.5``)
    - Double-quoted strings without escapes
    - Identifiers, braces, brackets, parentheses and ``; , = ->``
    - ``//`` line comments

    The returned list carries no EOF token; the parser supplies one.

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
        # or iterate: for token in lexer: ...
    """

    def __init__(self, source: str, filename: Optional[str] = None) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: The canvas-lang source code to tokenize
            filename: Optional filename for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

        # Track the start of the current line for error reporting
        self._line_start = 0

    def _location(self) -> SourceLocation:
        """Create a SourceLocation for the current position."""
        return SourceLocation(
            line=self.line,
            column=self.column,
            offset=self.pos,
            filename=self.filename,
        )

    def _current_line_text(self) -> str:
        """Extract the current line of source for error messages."""
        end = self.source.find("\n", self._line_start)
        if end == -1:
            end = len(self.source)
        return self.source[self._line_start:end]

    def _consume(self, text: str) -> None:
        """Move the cursor past ``text``, keeping line and column in step."""
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self._line_start = self.pos + text.rindex("\n") + 1
            self.column = self.pos + len(text) - self._line_start + 1
        else:
            self.column += len(text)
        self.pos += len(text)

    def _next_token(self) -> Optional[Token]:
        """
        Match one pattern at the cursor.

        Returns:
            The matched token, or None when the match was whitespace or a
            comment.

        Raises:
            LexError: If no pattern matches at the cursor.
        """
        for token_type, pattern in TOKEN_PATTERNS:
            match = pattern.match(self.source, self.pos)
            if match is None:
                continue
            lexeme = match.group(0)
            token = Token(token_type, lexeme, self._location())
            self._consume(lexeme)
            if token_type in SKIPPED_TOKENS:
                return None
            return token

        raise LexError(
            self.source[self.pos],
            self._location(),
            self._current_line_text(),
        )

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens in source order.

        Raises:
            LexError: At the first character no pattern accepts.
        """
        tokens: list[Token] = []
        while self.pos < len(self.source):
            token = self._next_token()
            if token is not None:
                tokens.append(token)

        self.tokens = tokens
        logger.debug("Lexed %d tokens from %s", len(tokens), self.filename or "<input>")
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens."""
        return iter(self.tokenize())


def tokenize(source: str, filename: Optional[str] = None) -> list[Token]:
    """Tokenize ``source`` in one call."""
    return Lexer(source, filename).tokenize()
