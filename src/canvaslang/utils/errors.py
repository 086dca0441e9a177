"""
Error types and source location tracking for the canvas-lang front end.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
        offset: 0-indexed character offset from start of source
        filename: Optional filename for error reporting
    """

    line: int
    column: int
    offset: int = 0
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


class CanvasLangError(Exception):
    """Base exception for all canvas-lang errors."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        self.message = message
        self.location = location
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []

        if self.location:
            parts.append(f"[{self.location}]")

        parts.append(self.message)

        if self.source_line and self.location:
            parts.append(f"\n    {self.source_line}")
            # Add caret pointing to the error column
            padding = " " * (4 + self.location.column - 1)
            parts.append(f"\n{padding}^")

        return " ".join(parts) if not self.source_line else parts[0] + " " + "".join(parts[1:])


class LexError(CanvasLangError):
    """Raised when the lexer meets a character no token pattern accepts."""

    def __init__(
        self,
        character: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        self.character = character
        super().__init__(f"Unexpected character: {character!r}", location, source_line)


class ParseError(CanvasLangError):
    """
    Raised when the parser meets a token it did not expect.

    Attributes:
        expected: Name of the expected token type (or a description such as
            "command"), None for errors that are not a simple mismatch
        found: The token actually encountered (a synthetic EOF token at the end)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        expected: Optional[str] = None,
        found: Any = None,
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(message, location)
