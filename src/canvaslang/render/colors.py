"""
Color handling for the canvas-lang renderer.

Named colors resolve through a fixed palette; anything else is treated as a
hex literal. Styling uses 24-bit ANSI escape codes and is reapplied on every
line so multi-line art keeps its color.
"""

from __future__ import annotations

import colorsys
import re
from typing import Callable

COLOR_MAP: dict[str, str] = {
    "black": "#000000",
    "red": "#ff0000",
    "green": "#00ff00",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "magenta": "#ff00ff",
    "cyan": "#00ffff",
    "white": "#ffffff",
    "gray": "#808080",
    "orange": "#ffa500",
    "purple": "#800080",
    "pink": "#ffc0cb",
    "brown": "#a52a2a",
    "lime": "#00ff00",
    "navy": "#000080",
    "teal": "#008080",
}

FG_CLOSE = "\033[39m"
BG_CLOSE = "\033[49m"

_HEX_DIGITS = re.compile(r"[a-f\d]{6}|[a-f\d]{3}", re.IGNORECASE)

Style = Callable[[str], str]


def process_color(color: str) -> str:
    """
    Resolve a color name or hex literal to a ``#``-prefixed hex string.

    Quotes left over from string literals are removed first.

    Examples:
        process_color('"red"')  -> "#ff0000"
        process_color("ABCDEF") -> "#ABCDEF"
        process_color("#123456") -> "#123456"
    """
    color = color.replace('"', "")

    named = COLOR_MAP.get(color.lower())
    if named:
        return named

    return color if color.startswith("#") else f"#{color}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Convert a hex string to an RGB triple.

    The first run of six (or three) hex digits is used; strings without one
    map to black.
    """
    match = _HEX_DIGITS.search(hex_color)
    if match is None:
        return (0, 0, 0)

    digits = match.group(0)
    if len(digits) == 3:
        digits = "".join(c + c for c in digits)

    value = int(digits, 16)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (degrees, percent, percent) to a hex string."""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360, lightness / 100, saturation / 100)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


def _encase(text: str, open_code: str, close_code: str) -> str:
    """Wrap ``text`` in escape codes, closing and reopening around newlines."""
    if not text:
        return text
    body = text.replace("\n", f"{close_code}\n{open_code}")
    return f"{open_code}{body}{close_code}"


def text_color(color: str, enabled: bool = True) -> Style:
    """Return a function that paints text in ``color``."""
    if not enabled:
        return lambda text: text
    r, g, b = hex_to_rgb(process_color(color))
    open_code = f"\033[38;2;{r};{g};{b}m"
    return lambda text: _encase(text, open_code, FG_CLOSE)


def bg_color(color: str, enabled: bool = True) -> Style:
    """Return a function that paints the background of text in ``color``."""
    if not enabled:
        return lambda text: text
    r, g, b = hex_to_rgb(process_color(color))
    open_code = f"\033[48;2;{r};{g};{b}m"
    return lambda text: _encase(text, open_code, BG_CLOSE)


def _is_printable(character: str) -> bool:
    return "!" <= character <= "~"


def rainbow_color(text: str, offset: int, enabled: bool = True) -> str:
    """
    Color each visible character with a hue that rotates across the string.

    Characters outside ``!``..``~`` are emitted unchanged and do not advance
    the hue. The starting hue is ``offset % 360``.
    """
    if not text:
        return text

    visible = sum(1 for character in text if _is_printable(character))
    if visible == 0 or not enabled:
        return text

    hue_step = 360 / visible
    hue = offset % 360
    characters: list[str] = []

    for character in text:
        if not _is_printable(character):
            characters.append(character)
            continue
        characters.append(text_color(hsl_to_hex(hue, 100, 50))(character))
        hue = (hue + hue_step) % 360

    return "".join(characters)
