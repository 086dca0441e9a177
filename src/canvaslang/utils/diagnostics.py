"""
Caret-style diagnostics for canvas-lang.

Turns lexer and parser errors into a readable report with the offending
source line and a marker under the failing column.

Example output:
    error[E0201]: Expected SEMICOLON, got RBRACE
      --> scene.canvas:3:12
       |
     3 |   wait 100 }
       |            ^
       |
       = help: every command except frame and animate ends with ';'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from canvaslang.utils.errors import CanvasLangError, LexError, ParseError


class ErrorCode:
    """
    Error codes for canvas-lang diagnostics.

    - E01xx: Lexical errors
    - E02xx: Syntax errors
    """

    E0101 = "E0101"  # unexpected character
    E0201 = "E0201"  # unexpected token
    E0202 = "E0202"  # unexpected end of file
    E0203 = "E0203"  # unknown command


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0101: "unexpected character",
    ErrorCode.E0201: "unexpected token",
    ErrorCode.E0202: "unexpected end of file",
    ErrorCode.E0203: "unknown command",
}


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
            DiagnosticLevel.WARNING: "\033[93m",  # Yellow
        }
        return colors.get(self, "")


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """
    A single-line span of source code.

    Attributes:
        line: 1-indexed line number
        start_col: 1-indexed starting column
        end_col: 1-indexed ending column (exclusive)
        filename: Filename for display
    """

    line: int
    start_col: int
    end_col: int
    filename: str = "<input>"

    @classmethod
    def from_location(
        cls, line: int, col: int, length: int = 1, filename: str = "<input>"
    ) -> "SourceSpan":
        """Create a span from a single location with a given length."""
        return cls(line=line, start_col=col, end_col=col + length, filename=filename)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.start_col}"

    @property
    def length(self) -> int:
        return max(1, self.end_col - self.start_col)


@dataclass
class Diagnostic:
    """
    A diagnostic message with source context.

    Attributes:
        code: Error code (e.g., "E0201")
        level: Severity level
        message: The main diagnostic message
        span: Where the problem is, if known
        helps: Help messages shown under the source excerpt
    """

    code: str
    level: DiagnosticLevel
    message: str
    span: Optional[SourceSpan] = None
    helps: list[str] = field(default_factory=list)

    def render(self, source_code: str, use_color: bool = True) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            source_code: The original source code for context
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []
        source_lines = source_code.splitlines()

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""

        code_desc = ERROR_DESCRIPTIONS.get(self.code, "")
        if code_desc:
            header = (
                f"{level_color}{bold}{self.level.value}[{self.code}]{reset}: "
                f"{bold}{self.message}{reset}"
            )
        else:
            header = f"{level_color}{bold}{self.level.value}{reset}: {bold}{self.message}{reset}"
        lines.append(header)

        if self.span is not None:
            lines.append(f"  {blue}-->{reset} {self.span}")

            if 1 <= self.span.line <= len(source_lines):
                source_line = source_lines[self.span.line - 1]
                padding = " " * (self.span.start_col - 1)
                lines.append(f"   {blue}|{reset}")
                lines.append(f"{blue}{self.span.line:3} |{reset} {source_line}")
                lines.append(
                    f"   {blue}|{reset} {padding}{level_color}{'^' * self.span.length}{reset}"
                )
                lines.append(f"   {blue}|{reset}")

        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)

    def to_simple_message(self) -> str:
        """Get a simple one-line error message."""
        return f"[{self.code}] {self.message}"


def _found_eof(error: ParseError) -> bool:
    token_type = getattr(error.found, "type", None)
    return token_type is None or token_type.name == "EOF"


def diagnostic_from_error(error: CanvasLangError, filename: str = "<input>") -> Diagnostic:
    """Build a diagnostic for a lexer or parser error."""
    span = None
    if error.location is not None:
        length = 1
        if isinstance(error, ParseError) and not _found_eof(error):
            length = len(str(getattr(error.found, "value", ""))) or 1
        span = SourceSpan.from_location(
            error.location.line,
            error.location.column,
            length,
            error.location.filename or filename,
        )

    if isinstance(error, LexError):
        return Diagnostic(
            ErrorCode.E0101,
            DiagnosticLevel.ERROR,
            error.message,
            span,
            helps=["negative numbers and escape sequences are not supported"],
        )

    if isinstance(error, ParseError):
        helps: list[str] = []
        code = ErrorCode.E0201
        if error.message.startswith("Unknown command"):
            code = ErrorCode.E0203
            helps.append(
                "commands are: background, circle, rect, text, line, var, "
                "rainbow, wait, frame, animate"
            )
        elif _found_eof(error):
            code = ErrorCode.E0202
        elif error.expected == "SEMICOLON":
            helps.append("every command except frame and animate ends with ';'")
        return Diagnostic(code, DiagnosticLevel.ERROR, error.message, span, helps)

    return Diagnostic(ErrorCode.E0201, DiagnosticLevel.ERROR, error.message, span)


__all__ = [
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "Diagnostic",
    "diagnostic_from_error",
]
