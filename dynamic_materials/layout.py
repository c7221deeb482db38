"""Layout constants, coordinate conversions and simple geometry records."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "GRID_GAP",
    "PADDING",
    "BUTTON_GAP",
    "FONT_SIZE_TITLE",
    "FONT_SIZE_BUTTON",
    "BUTTON_HEIGHT",
    "MATERIAL_BUTTON_HEIGHT",
    "Position",
    "Size",
    "calculate_sidebar_width",
    "calculate_button_width",
    "grid_to_screen",
    "screen_to_grid",
]

GRID_GAP = 20
PADDING = 15
BUTTON_GAP = 10

FONT_SIZE_TITLE = 20
FONT_SIZE_BUTTON = 20

BUTTON_HEIGHT = 32
MATERIAL_BUTTON_HEIGHT = 36

_SIDEBAR_MIN = 200
_SIDEBAR_MAX = 300


@dataclass(frozen=True)
class Position:
    """A 2D integer position."""

    x: int
    y: int


@dataclass(frozen=True)
class Size:
    """A 2D integer size."""

    width: int
    height: int


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def calculate_sidebar_width(screen_width: int) -> int:
    """Sidebar width: a fifth of the screen, kept between 200 and 300 pixels."""
    return min(max(_div(screen_width, 5), _SIDEBAR_MIN), _SIDEBAR_MAX)


def calculate_button_width(sidebar_width: int) -> int:
    """Width of one of two side-by-side buttons in the sidebar."""
    return _div(sidebar_width - PADDING * 2 - BUTTON_GAP, 2)


def grid_to_screen(grid_x: int, grid_y: int, cell_size: int) -> tuple[int, int]:
    """Top-left screen pixel of a grid cell."""
    return GRID_GAP + grid_x * cell_size, GRID_GAP + grid_y * cell_size


def screen_to_grid(screen_x: int, screen_y: int, cell_size: int) -> tuple[int, int]:
    """Grid cell under a screen pixel."""
    return _div(screen_x - GRID_GAP, cell_size), _div(screen_y - GRID_GAP, cell_size)