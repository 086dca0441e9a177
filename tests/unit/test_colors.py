"""
Unit tests for color lookup and ANSI styling.
"""

import pytest

from canvaslang.render.colors import (
    BG_CLOSE,
    COLOR_MAP,
    FG_CLOSE,
    bg_color,
    hex_to_rgb,
    hsl_to_hex,
    process_color,
    rainbow_color,
    text_color,
)


class TestProcessColor:
    """Named colors and hex fallback."""

    @pytest.mark.parametrize(
        "color,expected",
        [
            ("red", "#ff0000"),
            ('"red"', "#ff0000"),
            ("RED", "#ff0000"),
            ("navy", "#000080"),
            ("ABCDEF", "#ABCDEF"),
            ("#123456", "#123456"),
            ('"#00aaff"', "#00aaff"),
            ("", "#"),
        ],
    )
    def test_process_color(self, color, expected):
        assert process_color(color) == expected

    def test_palette_is_complete(self):
        assert set(COLOR_MAP) == {
            "black", "red", "green", "blue", "yellow", "magenta", "cyan", "white",
            "gray", "orange", "purple", "pink", "brown", "lime", "navy", "teal",
        }


class TestHexConversion:
    """Hex parsing and HSL conversion."""

    def test_six_digits(self):
        assert hex_to_rgb("#ff8000") == (255, 128, 0)

    def test_three_digits(self):
        assert hex_to_rgb("#f80") == (255, 136, 0)

    def test_invalid_is_black(self):
        assert hex_to_rgb("#zzz") == (0, 0, 0)

    def test_hsl_primary_hues(self):
        assert hsl_to_hex(0, 100, 50) == "#ff0000"
        assert hsl_to_hex(120, 100, 50) == "#00ff00"
        assert hsl_to_hex(240, 100, 50) == "#0000ff"

    def test_hsl_wraps(self):
        assert hsl_to_hex(360, 100, 50) == hsl_to_hex(0, 100, 50)


class TestStyling:
    """Foreground and background wrappers."""

    def test_text_color_codes(self):
        assert text_color("red")("x") == f"\033[38;2;255;0;0mx{FG_CLOSE}"

    def test_bg_color_codes(self):
        assert bg_color('"blue"')("x") == f"\033[48;2;0;0;255mx{BG_CLOSE}"

    def test_multiline_reopens_per_line(self):
        styled = text_color("red")("a\nb")
        assert styled == (
            f"\033[38;2;255;0;0ma{FG_CLOSE}\n\033[38;2;255;0;0mb{FG_CLOSE}"
        )

    def test_empty_text_unchanged(self):
        assert text_color("red")("") == ""

    def test_disabled_is_identity(self):
        assert text_color("red", enabled=False)("a\nb") == "a\nb"
        assert bg_color("red", enabled=False)("a") == "a"

    def test_unknown_name_is_black(self):
        assert text_color("chartreuse")("x").startswith("\033[38;2;0;0;0m")


class TestRainbow:
    """Hue-rotating colorizer."""

    def test_disabled_returns_text(self):
        assert rainbow_color("Hi there", 3, enabled=False) == "Hi there"

    def test_empty(self):
        assert rainbow_color("", 0) == ""

    def test_whitespace_only_unchanged(self):
        assert rainbow_color("  \n", 5) == "  \n"

    def test_spaces_pass_through_uncolored(self):
        result = rainbow_color("a b", 0)
        assert " " in result
        assert result.count("\033[38;2;") == 2

    def test_first_character_uses_offset_hue(self):
        assert rainbow_color("ab", 0).startswith("\033[38;2;255;0;0ma")
        assert rainbow_color("ab", 360).startswith("\033[38;2;255;0;0ma")

    def test_hue_advances_by_visible_count(self):
        """Two visible characters split the wheel in half."""
        result = rainbow_color("a b", 0)
        assert "\033[38;2;0;255;255mb" in result

    def test_offsets_differ(self):
        assert rainbow_color("abc", 0) != rainbow_color("abc", 1)
