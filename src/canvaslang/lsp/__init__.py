"""Language server for canvas-lang (diagnostics, completion, hover, outline)."""
