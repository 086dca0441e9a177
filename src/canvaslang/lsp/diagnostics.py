"""
Diagnostic generation for the canvas-lang language server.

Converts lexer and parser errors into LSP diagnostics, and adds warnings for
constructs that parse but have no visible effect.
"""

from __future__ import annotations

from lsprotocol import types

from canvaslang.compiler.ast_nodes import (
    Animate,
    ASTNode,
    Background,
    Canvas,
    Circle,
    Frame,
    Line,
    NODE_KEYWORDS,
    Rect,
    Text,
)
from canvaslang.compiler.lexer import Lexer
from canvaslang.compiler.parser import Parser
from canvaslang.render.colors import COLOR_MAP
from canvaslang.utils.diagnostics import diagnostic_from_error
from canvaslang.utils.errors import CanvasLangError

SOURCE_NAME = "canvaslang"

_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def _is_known_color(color: str) -> bool:
    """True for palette names and 3 or 6 digit hex literals."""
    color = color.replace('"', "")
    if color.lower() in COLOR_MAP:
        return True
    digits = color[1:] if color.startswith("#") else color
    return len(digits) in (3, 6) and all(c in _HEX_CHARS for c in digits)


def _color_of(node: ASTNode) -> str | None:
    if isinstance(node, Background):
        return node.color
    if isinstance(node, (Circle, Rect)):
        return node.fill
    if isinstance(node, (Text, Line)):
        return node.color
    return None


class DiagnosticProvider:
    """
    Generates LSP diagnostics from canvas-lang source code.

    Runs the lexer and parser; when both succeed, walks the tree for
    warnings.
    """

    def __init__(self, source: str, uri: str) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The canvas-lang source code to analyze
            uri: The document URI for location information
        """
        self.source = source
        self.uri = uri
        self._diagnostics: list[types.Diagnostic] = []

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects
        """
        self._diagnostics = []

        try:
            tokens = Lexer(self.source, filename=self.uri).tokenize()
            ast = Parser(tokens, source=self.source, filename=self.uri).parse()
        except CanvasLangError as e:
            self._add_error(e)
            return self._diagnostics

        self._check_commands(ast)
        return self._diagnostics

    def _add_error(self, error: CanvasLangError) -> None:
        diagnostic = diagnostic_from_error(error, self.uri)
        line = 0
        character = 0
        length = 1

        if diagnostic.span is not None:
            line = max(0, diagnostic.span.line - 1)  # Convert to 0-indexed
            character = max(0, diagnostic.span.start_col - 1)
            length = diagnostic.span.length

        message = error.message
        if diagnostic.helps:
            message += "\n" + "\n".join(f"help: {h}" for h in diagnostic.helps)

        self._diagnostics.append(
            types.Diagnostic(
                range=types.Range(
                    start=types.Position(line=line, character=character),
                    end=types.Position(line=line, character=character + length),
                ),
                message=message,
                severity=types.DiagnosticSeverity.Error,
                code=diagnostic.code,
                source=SOURCE_NAME,
            )
        )

    def _add_warning(self, node: ASTNode, message: str, length: int) -> None:
        if node.location is None:
            return
        line = node.location.line - 1
        character = node.location.column - 1
        self._diagnostics.append(
            types.Diagnostic(
                range=types.Range(
                    start=types.Position(line=line, character=character),
                    end=types.Position(line=line, character=character + length),
                ),
                message=message,
                severity=types.DiagnosticSeverity.Warning,
                source=SOURCE_NAME,
            )
        )

    def _check_commands(self, node: Canvas | Frame | Animate) -> None:
        children = node.frames if isinstance(node, Animate) else node.commands
        for child in children:
            if isinstance(node, Animate) and not isinstance(child, Frame):
                self._add_warning(
                    child,
                    "Only frame blocks are played inside animate; this command is ignored",
                    len(NODE_KEYWORDS[type(child)]),
                )

            color = _color_of(child)
            if color is not None and not _is_known_color(color):
                self._add_warning(
                    child,
                    f"Unknown color {color}; expected a palette name or a hex value",
                    len(NODE_KEYWORDS[type(child)]),
                )

            if isinstance(child, (Frame, Animate)):
                self._check_commands(child)


def get_diagnostics_for_document(source: str, uri: str) -> list[types.Diagnostic]:
    """Convenience wrapper around ``DiagnosticProvider``."""
    return DiagnosticProvider(source, uri).get_diagnostics()
