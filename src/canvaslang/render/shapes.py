"""
Shape drawing functions for the canvas-lang renderer.

Shapes are rasterized into boolean numpy grids and then turned into text,
one row per line. Shapes are stacked in command order rather than placed:
``at`` coordinates are not used, and a line only uses its endpoints relative
to each other.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pyfiglet

from canvaslang.render.colors import text_color

logger = logging.getLogger(__name__)

DOT = "●"
BLOCK = "█"

# Margin around a line's bounding box, in cells.
LINE_PADDING = 2


def grid_to_text(mask: np.ndarray, glyph: str, color: str, enabled: bool = True) -> str:
    """
    Turn a boolean grid into text.

    Filled cells become ``glyph`` painted in ``color``; empty cells become
    spaces. Every row, the last included, ends with a newline.
    """
    paint = text_color(color, enabled)
    filled = paint(glyph)
    rows = ("".join(filled if cell else " " for cell in row) for row in mask)
    return "".join(f"{row}\n" for row in rows)


def _axis(radius: float) -> np.ndarray:
    """Offsets ``-r, -r + 1, ...`` up to and including ``r`` where reachable."""
    count = int(math.floor(2 * radius)) + 1 if radius >= 0 else 0
    return -radius + np.arange(count, dtype=float)


def circle_mask(radius: float) -> np.ndarray:
    """Cells whose distance from the center is strictly less than ``radius``."""
    axis = _axis(radius)
    ys, xs = np.meshgrid(axis, axis, indexing="ij")
    return np.hypot(xs, ys) < radius


def rect_mask(width: float, height: float) -> np.ndarray:
    rows = max(0, math.ceil(height))
    cols = max(0, math.ceil(width))
    return np.ones((rows, cols), dtype=bool)


def line_mask(x1: int, y1: int, x2: int, y2: int) -> np.ndarray:
    """
    Rasterize a line with Bresenham's algorithm.

    The grid spans the line's bounding box plus ``LINE_PADDING`` cells on
    every side.
    """
    min_x, max_x = min(x1, x2), max(x1, x2)
    min_y, max_y = min(y1, y2), max(y1, y2)
    width = max_x - min_x + 2 * LINE_PADDING + 1
    height = max_y - min_y + 2 * LINE_PADDING + 1
    grid = np.zeros((height, width), dtype=bool)

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    while True:
        grid[y - min_y + LINE_PADDING, x - min_x + LINE_PADDING] = True
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy

    return grid


def draw_circle(radius: float, color: str, enabled: bool = True) -> str:
    """Draw a filled circle of ``radius`` cells."""
    return grid_to_text(circle_mask(radius), DOT, color, enabled)


def draw_rect(width: float, height: float, color: str, enabled: bool = True) -> str:
    """Draw a filled rectangle."""
    return grid_to_text(rect_mask(width, height), BLOCK, color, enabled)


def draw_line(
    x1: float, y1: float, x2: float, y2: float, color: str, enabled: bool = True
) -> str:
    """Draw a line between two points; coordinates are truncated to cells."""
    mask = line_mask(int(x1), int(y1), int(x2), int(y2))
    return grid_to_text(mask, DOT, color, enabled)


def draw_text(
    text: str,
    color: str,
    size: int = 30,
    font: str = "doom",
    small_font: str = "doom",
    small_size: int = 15,
    enabled: bool = True,
) -> str:
    """
    Render ``text`` as large figlet glyphs.

    ``size`` above ``small_size`` selects ``font``, otherwise ``small_font``.
    If the glyph rendering fails the plain text is returned, still colored.
    """
    paint = text_color(color, enabled)
    chosen = font if size > small_size else small_font
    try:
        rendered = pyfiglet.figlet_format(text, font=chosen)
    except (pyfiglet.FigletError, OSError, UnicodeError) as e:
        logger.warning("Error rendering ASCII text with font %r: %s", chosen, e)
        return paint(text)
    return paint(rendered)
