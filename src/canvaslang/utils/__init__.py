"""
canvas-lang Utilities Package.

Error types, source locations, and diagnostics rendering.
"""

from canvaslang.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticLevel,
    ErrorCode,
    SourceSpan,
    diagnostic_from_error,
)
from canvaslang.utils.errors import (
    CanvasLangError,
    LexError,
    ParseError,
    SourceLocation,
)

__all__ = [
    # Errors
    "CanvasLangError",
    "LexError",
    "ParseError",
    "SourceLocation",
    # Diagnostics
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "Diagnostic",
    "diagnostic_from_error",
]
