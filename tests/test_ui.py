import pygame
import pytest

from dynamic_materials import ui
from dynamic_materials.color import lighten, parse_hex
from dynamic_materials.config import Button, RenderingOptions
from dynamic_materials.layout import (
    BUTTON_GAP,
    BUTTON_HEIGHT,
    GRID_GAP,
    PADDING,
    calculate_button_width,
    grid_to_screen,
)
from dynamic_materials.materials import Behavior, Material, MaterialRegistry
from dynamic_materials.state import AppState

SIDEBAR_X = 800
SIDEBAR_W = 250
SCREEN_W = SIDEBAR_X + SIDEBAR_W
SCREEN_H = 600


@pytest.fixture(scope="module")
def font():
    pygame.font.init()
    return pygame.font.Font(None, 20)


@pytest.fixture
def surface():
    surf = pygame.Surface((SCREEN_W, SCREEN_H), 0, 32)
    surf.fill((255, 255, 255))
    return surf


@pytest.fixture
def buttons():
    return [
        Button(id="play", label="Play", action="toggle_simulation", color="#3498db"),
        Button(id="clear", label="Clear", action="clear_world", color="#e74c3c"),
    ]


@pytest.fixture
def registry():
    reg = MaterialRegistry()
    reg.register(Material(1, "Sand", "#806040", Behavior.GRANULAR, 1.5))
    reg.register(Material(2, "Water", "#406080", Behavior.LIQUID, 1.0))
    reg.register(Material(3, "Stone", "#606060", Behavior.STATIC, 2.5))
    return reg


def pixel(surf, x, y):
    return tuple(surf.get_at((x, y)))


def sweep(fn, y):
    found = []
    for x in range(SIDEBAR_X, SIDEBAR_X + SIDEBAR_W):
        hit = fn(x, y)
        if hit is not None and (not found or found[-1] != hit):
            found.append(hit)
    return found


def first_x(fn, y, value):
    return next(x for x in range(SIDEBAR_X, SIDEBAR_X + SIDEBAR_W) if fn(x, y) == value)


# Action buttons


def test_action_button_edges(buttons):
    y = PADDING
    left = SIDEBAR_X + PADDING
    assert ui.action_button_at(left, y, SIDEBAR_X, SIDEBAR_W, y, buttons) == "toggle_simulation"
    assert ui.action_button_at(left - 1, y, SIDEBAR_X, SIDEBAR_W, y, buttons) is None
    assert ui.action_button_at(left, y + BUTTON_HEIGHT, SIDEBAR_X, SIDEBAR_W, y, buttons) is None
    assert ui.action_button_at(left, y - 1, SIDEBAR_X, SIDEBAR_W, y, buttons) is None


def test_second_action_button_after_gap(buttons):
    y = PADDING
    second = SIDEBAR_X + PADDING + calculate_button_width(SIDEBAR_W) + BUTTON_GAP
    assert ui.action_button_at(second, y, SIDEBAR_X, SIDEBAR_W, y, buttons) == "clear_world"
    assert ui.action_button_at(second - 1, y, SIDEBAR_X, SIDEBAR_W, y, buttons) is None


def test_action_buttons_sweep_in_order(buttons):
    y = PADDING
    found = sweep(lambda x, yy: ui.action_button_at(x, yy, SIDEBAR_X, SIDEBAR_W, y, buttons), y)
    assert found == ["toggle_simulation", "clear_world"]


def test_no_action_buttons(buttons):
    assert ui.action_button_at(SIDEBAR_X + PADDING, PADDING, SIDEBAR_X, SIDEBAR_W, PADDING, []) is None


# Brush sizes


def test_brush_sizes_values():
    y = 200
    found = sweep(lambda x, yy: ui.brush_size_at(x, yy, SIDEBAR_X, SIDEBAR_W, y), y)
    assert found == [1, 4, 7, 10]
    assert tuple(ui.BRUSH_SIZES) == (1, 4, 7, 10)


def test_brush_sizes_sweep_in_order():
    y = 200
    found = sweep(lambda x, yy: ui.brush_size_at(x, yy, SIDEBAR_X, SIDEBAR_W, y), y)
    assert found == list(ui.BRUSH_SIZES)


def test_brush_size_vertical_bounds():
    y = 200
    x = SIDEBAR_X + PADDING
    assert ui.brush_size_at(x, y, SIDEBAR_X, SIDEBAR_W, y) == 1
    assert ui.brush_size_at(x, y + ui.BRUSH_BUTTON_HEIGHT - 1, SIDEBAR_X, SIDEBAR_W, y) == 1
    assert ui.brush_size_at(x, y + ui.BRUSH_BUTTON_HEIGHT, SIDEBAR_X, SIDEBAR_W, y) is None
    assert ui.brush_size_at(x - 1, y, SIDEBAR_X, SIDEBAR_W, y) is None


# Materials


def test_material_button_height(registry):
    y = 100
    x = SIDEBAR_X + PADDING
    assert ui.material_at(x, y + 31, SIDEBAR_X, SIDEBAR_W, y, registry) == 1
    assert ui.material_at(x, y + 32, SIDEBAR_X, SIDEBAR_W, y, registry) is None


def test_materials_two_columns(registry):
    y = 100
    row0 = sweep(lambda x, yy: ui.material_at(x, yy, SIDEBAR_X, SIDEBAR_W, y, registry), y)
    row1_y = y + ui.MATERIAL_BUTTON_HEIGHT + BUTTON_GAP
    row1 = sweep(lambda x, yy: ui.material_at(x, yy, SIDEBAR_X, SIDEBAR_W, y, registry), row1_y)
    assert row0 == [1, 2]
    assert row1 == [3]


def test_material_row_gap_is_empty(registry):
    y = 100
    gap_y = y + ui.MATERIAL_BUTTON_HEIGHT
    assert sweep(lambda x, yy: ui.material_at(x, yy, SIDEBAR_X, SIDEBAR_W, y, registry), gap_y) == []


def test_material_at_empty_registry():
    assert ui.material_at(SIDEBAR_X + PADDING, 100, SIDEBAR_X, SIDEBAR_W, 100, MaterialRegistry()) is None


# Grid hit test


@pytest.mark.parametrize(
    "mx, my, expected",
    [
        (GRID_GAP, GRID_GAP, True),
        (GRID_GAP - 1, GRID_GAP, False),
        (GRID_GAP, GRID_GAP - 1, False),
        (500 - GRID_GAP - 1, 300, True),
        (500 - GRID_GAP, 300, False),
    ],
)
def test_is_over_grid(mx, my, expected):
    assert ui.is_over_grid(mx, my, 500) is expected


# Drawing


def test_draw_separator(surface):
    y = 100
    assert ui.draw_separator(surface, SIDEBAR_X, SIDEBAR_W, y) == y + 15
    assert pixel(surface, SIDEBAR_X + PADDING, y) == tuple(ui.COLOR_SEPARATOR)
    assert pixel(surface, SIDEBAR_X + PADDING, y + 1) == (255, 255, 255, 255)


def test_draw_action_buttons_colors(surface, font, buttons):
    state = AppState(1, 10, 10)
    state.hovered_action = "clear_world"
    y = PADDING
    result = ui.draw_action_buttons(surface, font, SIDEBAR_X, SIDEBAR_W, y, state, buttons)
    assert result == y + BUTTON_HEIGHT + 15
    first = SIDEBAR_X + PADDING
    second = first + calculate_button_width(SIDEBAR_W) + BUTTON_GAP
    assert pixel(surface, first + 4, y + 4) == tuple(parse_hex("#3498db"))
    assert pixel(surface, second + 4, y + 4) == tuple(lighten(parse_hex("#e74c3c"), 30))
    assert pixel(surface, second, y) == tuple(ui.COLOR_TEXT)


def test_draw_materials_return_matches_layout(surface, font, registry):
    state = AppState(0, 10, 10)
    y = 100
    end = ui.draw_materials(surface, font, SIDEBAR_X, SIDEBAR_W, y, state, registry)
    x = SIDEBAR_X + PADDING
    assert ui.material_at(x, end - PADDING - 1, SIDEBAR_X, SIDEBAR_W, y, registry) == 3
    assert ui.material_at(x, end - PADDING, SIDEBAR_X, SIDEBAR_W, y, registry) is None


def test_draw_materials_colors(surface, font, registry):
    state = AppState(1, 10, 10)
    state.hovered_material = 2
    y = 100
    ui.draw_materials(surface, font, SIDEBAR_X, SIDEBAR_W, y, state, registry)
    fn = lambda x, yy: ui.material_at(x, yy, SIDEBAR_X, SIDEBAR_W, y, registry)  # noqa: E731
    x1 = first_x(fn, y, 1)
    x2 = first_x(fn, y, 2)
    y3 = y + ui.MATERIAL_BUTTON_HEIGHT + BUTTON_GAP
    x3 = first_x(fn, y3, 3)
    assert pixel(surface, x1 + 4, y + 4) == tuple(lighten(parse_hex("#806040"), 20))
    assert pixel(surface, x2 + 4, y + 4) == tuple(lighten(parse_hex("#406080"), 40))
    assert pixel(surface, x3 + 4, y3 + 4) == tuple(parse_hex("#606060"))
    assert pixel(surface, x1, y) == tuple(ui.COLOR_MATERIAL_SELECTED)


def test_draw_brush_sizes_selected_and_hovered(surface, font):
    state = AppState(1, 10, 10)
    state.set_brush_size(4)
    y = 200
    fn = lambda x, yy: ui.brush_size_at(x, yy, SIDEBAR_X, SIDEBAR_W, y)  # noqa: E731
    x7 = first_x(fn, y, 7)
    state.mouse_pos = (x7 + 2, y + 2)
    ui.draw_brush_sizes(surface, font, SIDEBAR_X, SIDEBAR_W, y, state)
    assert pixel(surface, first_x(fn, y, 4) + 4, y + 4) == tuple(ui.COLOR_BRUSH_SELECTED)
    assert pixel(surface, first_x(fn, y, 1) + 4, y + 4) == tuple(ui.COLOR_BRUSH_BG)
    assert pixel(surface, x7 + 4, y + 4) == tuple(ui.COLOR_BRUSH_HOVER)
    assert pixel(surface, x7, y) == tuple(ui.COLOR_BRUSH_HOVER_BORDER)


def test_draw_grid_cells_and_background(surface):
    registry = MaterialRegistry()
    registry.register(Material(1, "Red", "#FF0000", Behavior.STATIC, 1.0))
    state = AppState(1, 20, 20)
    state.world.set_cell(2, 3, 1)
    state.mouse_pos = (SIDEBAR_X + 10, 10)
    ui.draw_grid(surface, SIDEBAR_X, state, 10, registry)
    cx, cy = grid_to_screen(2, 3, 10)
    ex, ey = grid_to_screen(5, 5, 10)
    assert pixel(surface, cx + 5, cy + 5) == (255, 0, 0, 255)
    assert pixel(surface, ex + 5, ey + 5) == tuple(ui.COLOR_GRID_BG)
    assert pixel(surface, GRID_GAP, GRID_GAP) == tuple(ui.COLOR_GRID_BORDER)


def test_draw_grid_brush_preview_blends(surface):
    state = AppState(1, 20, 20)
    px, py = grid_to_screen(4, 4, 10)
    state.mouse_pos = (px + 5, py + 5)
    ui.draw_grid(surface, SIDEBAR_X, state, 10, MaterialRegistry())
    r, g, b, _ = pixel(surface, px + 5, py + 5)
    assert r < ui.COLOR_GRID_BG.r
    assert b > r
    far_x, far_y = grid_to_screen(10, 10, 10)
    assert pixel(surface, far_x + 5, far_y + 5) == tuple(ui.COLOR_GRID_BG)


@pytest.mark.parametrize("show_fps", [True, False])
def test_draw_sidebar(surface, font, buttons, registry, show_fps):
    state = AppState(1, 10, 10)
    state.mouse_pos = (0, 0)
    rendering = RenderingOptions(background_color="#FFFFFF", show_grid=False, show_fps=show_fps)
    ui.draw_sidebar(surface, font, SIDEBAR_X, SIDEBAR_W, state, registry, buttons, rendering, 60)
    assert pixel(surface, SIDEBAR_X + 2, SCREEN_H - 2) == tuple(ui.COLOR_SIDEBAR)
    assert pixel(surface, SIDEBAR_X + PADDING + 4, PADDING + 4) == tuple(parse_hex("#3498db"))
    separator_pixel = pixel(surface, SIDEBAR_X + PADDING, SCREEN_H - 50)
    expected = ui.COLOR_SEPARATOR if show_fps else ui.COLOR_SIDEBAR
    assert separator_pixel == tuple(expected)
    assert pixel(surface, SIDEBAR_X - 1, 5) == (255, 255, 255, 255)