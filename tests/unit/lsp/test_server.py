"""Tests for the canvas-lang language server handlers."""

import pytest
from lsprotocol import types

from canvaslang.lsp.server import CanvasLanguageServer, create_server

URI = "file:///tmp/scene.canvas"


@pytest.fixture
def server():
    server = CanvasLanguageServer()
    server.published = []
    server.text_document_publish_diagnostics = server.published.append
    return server


def open_params(text: str) -> types.DidOpenTextDocumentParams:
    return types.DidOpenTextDocumentParams(
        text_document=types.TextDocumentItem(
            uri=URI, language_id="canvas", version=1, text=text
        )
    )


class TestDocumentSync:
    def test_open_publishes_errors(self, server) -> None:
        server._on_did_open(open_params("canvas { @ }"))

        assert len(server.published) == 1
        params = server.published[0]
        assert params.uri == URI
        assert params.diagnostics[0].code == "E0101"

    def test_open_valid_document(self, server) -> None:
        server._on_did_open(open_params("canvas { wait 1; }"))
        assert server.published[0].diagnostics == []

    def test_save_with_text(self, server) -> None:
        server._on_did_save(
            types.DidSaveTextDocumentParams(
                text_document=types.TextDocumentIdentifier(uri=URI),
                text="canvas { wait 1 }",
            )
        )
        assert server.published[0].diagnostics[0].severity == types.DiagnosticSeverity.Error

    def test_close_clears(self, server) -> None:
        server._on_did_close(
            types.DidCloseTextDocumentParams(text_document=types.TextDocumentIdentifier(uri=URI))
        )
        assert server.published[0].diagnostics == []


def test_create_server() -> None:
    assert isinstance(create_server(), CanvasLanguageServer)


class TestRegistration:
    def test_features_registered(self, server) -> None:
        features = server.protocol.fm.features
        for method in (
            types.TEXT_DOCUMENT_DID_OPEN,
            types.TEXT_DOCUMENT_DID_CHANGE,
            types.TEXT_DOCUMENT_DID_SAVE,
            types.TEXT_DOCUMENT_DID_CLOSE,
            types.TEXT_DOCUMENT_COMPLETION,
            types.TEXT_DOCUMENT_HOVER,
            types.TEXT_DOCUMENT_DOCUMENT_SYMBOL,
        ):
            assert method in features

    def test_registered_handler_delegates(self, server) -> None:
        handler = server.protocol.fm.features[types.TEXT_DOCUMENT_DID_OPEN]
        handler(open_params("canvas { @ }"))
        assert server.published[0].diagnostics[0].code == "E0101"

    def test_lifecycle_handlers(self) -> None:
        features = create_server().protocol.fm.features
        assert types.INITIALIZED in features
        assert types.SHUTDOWN in features
