"""
Document outline for the canvas-lang language server.

Symbols come from the parsed tree; each command's range runs from its keyword
to the token that closes it, found by scanning the token list.
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
    Rainbow,
    Rect,
    Text,
    Variable,
    Wait,
)
from canvaslang.compiler.lexer import Lexer
from canvaslang.compiler.parser import Parser
from canvaslang.compiler.tokens import Token, TokenType
from canvaslang.utils.errors import CanvasLangError

SYMBOL_KINDS: dict[type[ASTNode], types.SymbolKind] = {
    Background: types.SymbolKind.Property,
    Circle: types.SymbolKind.Object,
    Rect: types.SymbolKind.Object,
    Text: types.SymbolKind.String,
    Line: types.SymbolKind.Object,
    Variable: types.SymbolKind.Variable,
    Rainbow: types.SymbolKind.String,
    Wait: types.SymbolKind.Event,
    Frame: types.SymbolKind.Namespace,
    Animate: types.SymbolKind.Event,
}


def _fmt(value: float) -> str:
    return f"{value:g}"


def _detail(node: ASTNode) -> str:
    """Short one-line summary shown next to the symbol name."""
    if isinstance(node, Background):
        return node.color.replace('"', "")
    if isinstance(node, Circle):
        return f"({_fmt(node.x)}, {_fmt(node.y)}) r={_fmt(node.radius)}"
    if isinstance(node, Rect):
        return f"({_fmt(node.x)}, {_fmt(node.y)}) {_fmt(node.width)}x{_fmt(node.height)}"
    if isinstance(node, (Text, Rainbow)):
        return repr(node.text)
    if isinstance(node, Line):
        return (
            f"({_fmt(node.x1)}, {_fmt(node.y1)}) -> ({_fmt(node.x2)}, {_fmt(node.y2)})"
        )
    if isinstance(node, Variable):
        return _fmt(node.value)
    if isinstance(node, (Wait, Animate)):
        return f"{node.duration} ms"
    if isinstance(node, Frame):
        return f"{len(node.commands)} command(s)"
    return ""


def _name(node: ASTNode) -> str:
    if isinstance(node, Variable):
        return f"var {node.name}"
    return NODE_KEYWORDS[type(node)]


def _start(token: Token) -> types.Position:
    assert token.location is not None
    return types.Position(line=token.location.line - 1, character=token.location.column - 1)


def _end(token: Token) -> types.Position:
    assert token.location is not None
    newlines = token.value.count("\n")
    if newlines:
        tail = token.value.rsplit("\n", 1)[1]
        return types.Position(line=token.location.line - 1 + newlines, character=len(tail))
    return types.Position(
        line=token.location.line - 1,
        character=token.location.column - 1 + len(token.value),
    )


class DocumentSymbolProvider:
    """
    Builds a nested outline of a canvas-lang document.

    Frame and animate blocks hold their commands as children. A document that
    fails to parse has no outline.
    """

    def __init__(self, source: str, uri: str = "<input>") -> None:
        self.source = source
        self.uri = uri
        self._tokens: list[Token] = []
        self._index_by_offset: dict[int, int] = {}

    def get_document_symbols(self) -> list[types.DocumentSymbol]:
        try:
            self._tokens = Lexer(self.source, filename=self.uri).tokenize()
            canvas = Parser(self._tokens, source=self.source, filename=self.uri).parse()
        except CanvasLangError:
            return []

        self._index_by_offset = {
            token.location.offset: index
            for index, token in enumerate(self._tokens)
            if token.location is not None
        }
        return [self._canvas_symbol(canvas)]

    def _canvas_symbol(self, canvas: Canvas) -> types.DocumentSymbol:
        first = self._tokens[0]
        closing = self._closing_index(0, stop_at_brace=True)
        range_ = types.Range(start=_start(first), end=_end(self._tokens[closing]))
        return types.DocumentSymbol(
            name=first.value,
            kind=types.SymbolKind.Module,
            range=range_,
            selection_range=types.Range(start=_start(first), end=_end(first)),
            children=[self._command_symbol(c) for c in canvas.commands],
        )

    def _command_symbol(self, node: ASTNode) -> types.DocumentSymbol:
        assert node.location is not None
        index = self._index_by_offset[node.location.offset]
        keyword = self._tokens[index]
        closing = self._closing_index(index, stop_at_brace=isinstance(node, Frame))

        children: list[types.DocumentSymbol] | None = None
        if isinstance(node, Frame):
            children = [self._command_symbol(c) for c in node.commands]
        elif isinstance(node, Animate):
            children = [self._command_symbol(c) for c in node.frames]

        return types.DocumentSymbol(
            name=_name(node),
            detail=_detail(node),
            kind=SYMBOL_KINDS[type(node)],
            range=types.Range(start=_start(keyword), end=_end(self._tokens[closing])),
            selection_range=types.Range(start=_start(keyword), end=_end(keyword)),
            children=children,
        )

    def _closing_index(self, start: int, stop_at_brace: bool) -> int:
        """
        Index of the token that ends the construct starting at ``start``.

        Block constructs end at the brace that returns to depth zero; every
        other command ends at the first semicolon outside braces.
        """
        depth = 0
        for index in range(start, len(self._tokens)):
            token_type = self._tokens[index].type
            if token_type == TokenType.LBRACE:
                depth += 1
            elif token_type == TokenType.RBRACE:
                depth -= 1
                if depth == 0 and stop_at_brace:
                    return index
            elif token_type == TokenType.SEMICOLON and depth == 0 and not stop_at_brace:
                return index
        return len(self._tokens) - 1


def get_document_symbols(source: str, uri: str = "<input>") -> list[types.DocumentSymbol]:
    """Convenience wrapper around ``DocumentSymbolProvider``."""
    return DocumentSymbolProvider(source, uri).get_document_symbols()
