"""
canvas-lang Language Server Protocol (LSP) Server.

This module implements an LSP server for canvas-lang using pygls. It provides:

- Document synchronization (open, change, save, close)
- Diagnostics (syntax errors, ignored commands, unknown colors)
- Command and color completion
- Hover documentation for commands and colors
- Document symbols (outline)

Usage:
    # Start the server in stdio mode (for IDE integration)
    canvaslang-lsp

    # Start in TCP mode (for debugging)
    canvaslang-lsp --tcp --port 2088
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from canvaslang import __version__
from canvaslang.lsp.completions import CompletionProvider
from canvaslang.lsp.diagnostics import get_diagnostics_for_document
from canvaslang.lsp.symbols import get_document_symbols

logger = logging.getLogger("canvaslang-lsp")

TRIGGER_CHARACTERS = ['"', " "]


class CanvasLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for canvas-lang.

    Documents are re-checked on every change; the workspace keeps the text,
    so the server holds no per-document state of its own.
    """

    def __init__(self) -> None:
        super().__init__(name="canvaslang-lsp", version=f"v{__version__}")
        self._completions = CompletionProvider()
        self._register_handlers()

    def _register_handlers(self) -> None:
        """
        Register all LSP request and notification handlers.

        pygls tags each handler with attributes, which bound methods do not
        accept, so every feature gets a plain function delegating to a method.
        """

        # Document synchronization
        @self.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def did_open(params: types.DidOpenTextDocumentParams) -> None:
            self._on_did_open(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(params: types.DidChangeTextDocumentParams) -> None:
            self._on_did_change(params)

        @self.feature(types.TEXT_DOCUMENT_DID_SAVE)
        def did_save(params: types.DidSaveTextDocumentParams) -> None:
            self._on_did_save(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(params: types.DidCloseTextDocumentParams) -> None:
            self._on_did_close(params)

        @self.feature(
            types.TEXT_DOCUMENT_COMPLETION,
            types.CompletionOptions(
                trigger_characters=TRIGGER_CHARACTERS,
                resolve_provider=False,
            ),
        )
        def completion(params: types.CompletionParams) -> Optional[types.CompletionList]:
            return self._on_completion(params)

        @self.feature(types.TEXT_DOCUMENT_HOVER)
        def hover(params: types.HoverParams) -> Optional[types.Hover]:
            return self._on_hover(params)

        @self.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
        def document_symbol(
            params: types.DocumentSymbolParams,
        ) -> Optional[list[types.DocumentSymbol]]:
            return self._on_document_symbol(params)

    def _source(self, uri: str) -> Optional[str]:
        document = self.workspace.get_text_document(uri)
        if document is None:
            return None
        return document.source

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    def _check_document(self, uri: str, source: str) -> None:
        diagnostics = get_diagnostics_for_document(source, uri)
        logger.debug("Publishing %d diagnostic(s) for %s", len(diagnostics), uri)
        self._publish_diagnostics(uri, diagnostics)

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        document = params.text_document
        logger.info("Document opened: %s", document.uri)
        self._check_document(document.uri, document.text)

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        uri = params.text_document.uri
        source = self._source(uri)
        if source is None:
            return
        logger.debug("Document changed: %s", uri)
        self._check_document(uri, source)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        uri = params.text_document.uri
        logger.info("Document saved: %s", uri)
        source = params.text if params.text is not None else self._source(uri)
        if source is not None:
            self._check_document(uri, source)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        logger.info("Document closed: %s", uri)
        self._publish_diagnostics(uri, [])

    # =========================================================================
    # Language Features
    # =========================================================================

    def _on_completion(self, params: types.CompletionParams) -> Optional[types.CompletionList]:
        source = self._source(params.text_document.uri)
        if source is None:
            return None
        position = params.position
        items = self._completions.get_completions(source, position.line, position.character)
        return types.CompletionList(is_incomplete=False, items=items)

    def _on_hover(self, params: types.HoverParams) -> Optional[types.Hover]:
        source = self._source(params.text_document.uri)
        if source is None:
            return None
        position = params.position
        return self._completions.get_hover(source, position.line, position.character)

    def _on_document_symbol(
        self, params: types.DocumentSymbolParams
    ) -> Optional[list[types.DocumentSymbol]]:
        uri = params.text_document.uri
        source = self._source(uri)
        if source is None:
            return None
        return get_document_symbols(source, uri)


# =============================================================================
# Server Creation and Main Entry Point
# =============================================================================


def create_server() -> CanvasLanguageServer:
    """Create and configure a canvas-lang language server instance."""
    server = CanvasLanguageServer()

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        logger.info("canvas-lang Language Server initialized")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(
        params: None,  # noqa: ARG001
    ) -> None:
        logger.info("Shutting down canvas-lang Language Server")

    return server


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the canvas-lang language server.

    Starts the server in stdio mode unless ``--tcp`` is given.
    """
    parser = argparse.ArgumentParser(
        description="canvas-lang Language Server",
        prog="canvaslang-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2088,
        help="Port to listen on in TCP mode (default: 2088)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )

    args = parser.parse_args(argv)

    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    server = create_server()

    if args.tcp:
        logger.info("Starting canvas-lang LSP in TCP mode on %s:%s", args.host, args.port)
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting canvas-lang LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
