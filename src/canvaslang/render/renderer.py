"""
Renderer facade used by the interpreter.

Binds the drawing and color functions to one ``RuntimeConfig`` so callers
never pass color or font settings around.
"""

from __future__ import annotations

from typing import Optional

from canvaslang.config import RuntimeConfig
from canvaslang.render import colors, shapes


class Renderer:
    """Turns shape, text and color parameters into displayable strings."""

    def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
        self.config = config or RuntimeConfig()

    @property
    def color_enabled(self) -> bool:
        return self.config.color

    def circle(self, radius: float, color: str) -> str:
        return shapes.draw_circle(radius, color, self.color_enabled)

    def rect(self, width: float, height: float, color: str) -> str:
        return shapes.draw_rect(width, height, color, self.color_enabled)

    def line(self, x1: float, y1: float, x2: float, y2: float, color: str) -> str:
        return shapes.draw_line(x1, y1, x2, y2, color, self.color_enabled)

    def text(self, text: str, color: str, size: int) -> str:
        return shapes.draw_text(
            text,
            color,
            size,
            font=self.config.font,
            small_font=self.config.small_font,
            small_size=self.config.small_size,
            enabled=self.color_enabled,
        )

    def rainbow(self, text: str, offset: int) -> str:
        return colors.rainbow_color(text, offset, self.color_enabled)

    def compose(self, background: str, content: str) -> str:
        """Paint ``content`` over ``background`` for display."""
        return colors.bg_color(background, self.color_enabled)(content)
