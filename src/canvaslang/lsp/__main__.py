"""
Entry point for running the canvas-lang LSP server as a module.

Usage:
    python -m canvaslang.lsp
    python -m canvaslang.lsp --tcp --port 2088
"""

from canvaslang.lsp.server import main

if __name__ == "__main__":
    main()
