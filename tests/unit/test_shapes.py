"""
Unit tests for shape rasterization and figlet text.
"""

import logging

import numpy as np
import pyfiglet

from canvaslang.render.shapes import (
    BLOCK,
    DOT,
    circle_mask,
    draw_circle,
    draw_line,
    draw_rect,
    draw_text,
    grid_to_text,
    line_mask,
    rect_mask,
)


def rows(text: str) -> list[str]:
    assert text.endswith("\n")
    return text[:-1].split("\n")


class TestCircle:
    """Euclidean distance threshold."""

    def test_radius_one_is_center_only(self):
        grid = rows(draw_circle(1, "red", enabled=False))
        assert grid == ["   ", f" {DOT} ", "   "]

    def test_radius_two(self):
        mask = circle_mask(2)
        assert mask.shape == (5, 5)
        assert mask[2, 2]
        assert mask[1, 1]
        assert not mask[0, 0]
        assert not mask[0, 2]

    def test_fractional_radius(self):
        mask = circle_mask(1.5)
        assert mask.shape == (4, 4)
        assert mask[1:3, 1:3].all()
        assert mask.sum() == 4

    def test_zero_radius(self):
        assert draw_circle(0, "red", enabled=False) == " \n"

    def test_symmetry(self):
        mask = circle_mask(5)
        assert np.array_equal(mask, mask.T)
        assert np.array_equal(mask, mask[::-1])


class TestRect:
    """Filled blocks."""

    def test_dimensions(self):
        grid = rows(draw_rect(4, 2, "blue", enabled=False))
        assert grid == [BLOCK * 4, BLOCK * 4]

    def test_fractional_sizes_round_up(self):
        assert rect_mask(2.1, 1.5).shape == (2, 3)

    def test_zero_size_is_empty(self):
        assert draw_rect(0, 3, "blue", enabled=False) == "\n\n\n"
        assert draw_rect(3, 0, "blue", enabled=False) == ""


class TestLine:
    """Bresenham on a padded grid."""

    def test_grid_extent(self):
        mask = line_mask(0, 0, 3, 1)
        assert mask.shape == (6, 8)

    def test_horizontal(self):
        mask = line_mask(0, 0, 3, 0)
        assert mask[2].tolist() == [False, False, True, True, True, True, False, False]
        assert mask.sum() == 4

    def test_diagonal(self):
        mask = line_mask(0, 0, 2, 2)
        assert [(int(y), int(x)) for y, x in zip(*np.nonzero(mask))] == [
            (2, 2),
            (3, 3),
            (4, 4),
        ]

    def test_endpoints_always_drawn(self):
        mask = line_mask(5, 2, 0, 0)
        assert mask[2, 2]
        assert mask[4, 7]

    def test_single_point(self):
        mask = line_mask(4, 4, 4, 4)
        assert mask.shape == (5, 5)
        assert mask.sum() == 1
        assert mask[2, 2]

    def test_coordinates_truncated(self):
        assert draw_line(0, 0, 3.9, 0.5, "red", enabled=False) == draw_line(
            0, 0, 3, 0, "red", enabled=False
        )

    def test_draw_uses_dots(self):
        text = draw_line(0, 0, 1, 0, "red", enabled=False)
        assert text.count(DOT) == 2


class TestGridToText:
    def test_colored_cells(self):
        mask = np.array([[True, False]])
        assert grid_to_text(mask, "#", "red") == "\033[38;2;255;0;0m#\033[39m \n"


class TestText:
    """Figlet rendering and fallback."""

    def test_renders_figlet(self):
        expected = pyfiglet.figlet_format("Hi", font="doom")
        assert draw_text("Hi", "red", 20, enabled=False) == expected

    def test_small_size_uses_small_font(self):
        expected = pyfiglet.figlet_format("Hi", font="standard")
        result = draw_text("Hi", "red", 10, font="doom", small_font="standard", enabled=False)
        assert result == expected

    def test_size_at_threshold_uses_small_font(self):
        expected = pyfiglet.figlet_format("Hi", font="standard")
        result = draw_text("Hi", "red", 15, font="doom", small_font="standard", enabled=False)
        assert result == expected

    def test_unknown_font_falls_back_to_plain_text(self, caplog):
        with caplog.at_level(logging.WARNING, logger="canvaslang.render.shapes"):
            result = draw_text("Hi", "red", 20, font="no-such-font-xyz", enabled=False)
        assert result == "Hi"
        assert "Error rendering ASCII text" in caplog.text

    def test_fallback_is_still_colored(self):
        result = draw_text("Hi", "red", 20, font="no-such-font-xyz")
        assert result == "\033[38;2;255;0;0mHi\033[39m"
