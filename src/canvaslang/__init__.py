"""
canvas-lang - A small language for static and animated ASCII-art scenes.

Programs describe shapes, big-glyph text, colors and timed frames inside a
``canvas { ... }`` block; the interpreter renders them to a terminal.
"""

from canvaslang.compiler import parse_file, parse_source
from canvaslang.compiler.lexer import Lexer
from canvaslang.compiler.parser import Parser
from canvaslang.runtime.interpreter import Interpreter, evaluate
from canvaslang.runtime.player import run

__version__ = "0.2.0"
__all__ = [
    "parse_source",
    "parse_file",
    "Lexer",
    "Parser",
    "Interpreter",
    "evaluate",
    "run",
]
