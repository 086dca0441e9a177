"""
canvas-lang Render Package.

Color lookup and ANSI styling, shape rasterization, figlet text, and the
``Renderer`` facade the interpreter draws through.
"""

from canvaslang.render.colors import (
    COLOR_MAP,
    bg_color,
    hex_to_rgb,
    process_color,
    rainbow_color,
    text_color,
)
from canvaslang.render.renderer import Renderer
from canvaslang.render.shapes import draw_circle, draw_line, draw_rect, draw_text

__all__ = [
    "COLOR_MAP",
    "Renderer",
    "bg_color",
    "draw_circle",
    "draw_line",
    "draw_rect",
    "draw_text",
    "hex_to_rgb",
    "process_color",
    "rainbow_color",
    "text_color",
]
