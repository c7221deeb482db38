"""Sidebar and grid drawing, and hit testing for the sidebar controls."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import pygame

from dynamic_materials.color import Color, lighten, parse_hex
from dynamic_materials.config import Button, RenderingOptions
from dynamic_materials.layout import (
    BUTTON_GAP,
    BUTTON_HEIGHT,
    FONT_SIZE_BUTTON,
    GRID_GAP,
    PADDING,
)
from dynamic_materials.materials import MaterialRegistry
from dynamic_materials.state import AppState

__all__ = [
    "BRUSH_SIZES",
    "MATERIAL_BUTTON_HEIGHT",
    "BRUSH_BUTTON_HEIGHT",
    "COLOR_TEXT",
    "COLOR_TEXT_HOVER",
    "COLOR_BRUSH_BG",
    "COLOR_BRUSH_SELECTED",
    "COLOR_BRUSH_HOVER",
    "COLOR_BRUSH_HOVER_BORDER",
    "COLOR_MATERIAL_SELECTED",
    "COLOR_MATERIAL_HOVER_BORDER",
    "COLOR_GRID_BG",
    "COLOR_GRID_BORDER",
    "COLOR_BRUSH_PREVIEW",
    "COLOR_BRUSH_BORDER",
    "COLOR_SIDEBAR",
    "COLOR_SEPARATOR",
    "COLOR_FPS",
    "action_button_at",
    "draw_action_buttons",
    "brush_size_at",
    "draw_brush_sizes",
    "material_at",
    "draw_materials",
    "is_over_grid",
    "draw_grid",
    "draw_separator",
    "draw_sidebar",
]

BRUSH_SIZES: tuple[int, ...] = (1, 4, 7, 10)
MATERIAL_BUTTON_HEIGHT = 32
BRUSH_BUTTON_HEIGHT = 32

COLOR_TEXT = Color(50, 50, 60, 255)
COLOR_TEXT_HOVER = Color(30, 30, 40, 255)

COLOR_BRUSH_BG = Color(235, 235, 240, 255)
COLOR_BRUSH_SELECTED = Color(80, 80, 90, 255)
COLOR_BRUSH_HOVER = Color(200, 200, 210, 255)
COLOR_BRUSH_HOVER_BORDER = Color(150, 150, 160, 255)
_COLOR_WHITE = Color(255, 255, 255, 255)

COLOR_MATERIAL_SELECTED = Color(80, 80, 90, 255)
COLOR_MATERIAL_HOVER_BORDER = Color(80, 80, 90, 255)

COLOR_GRID_BG = Color(250, 250, 252, 255)
COLOR_GRID_BORDER = Color(200, 200, 210, 255)
COLOR_BRUSH_PREVIEW = Color(100, 150, 255, 80)
COLOR_BRUSH_BORDER = Color(100, 150, 255, 200)

COLOR_SIDEBAR = Color(245, 245, 250, 255)
COLOR_SEPARATOR = Color(220, 220, 230, 255)
COLOR_FPS = Color(50, 50, 60, 200)

_SECTION_SPACING = 15
_FPS_FONT_SIZE = 20
_FPS_BOTTOM_OFFSET = 35

Rect = tuple[int, int, int, int]


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _contains(rect: Rect, px: int, py: int) -> bool:
    x, y, w, h = rect
    return x <= px < x + w and y <= py < y + h


def _fill(surface: pygame.Surface, color: Color, rect: Rect) -> None:
    x, y, w, h = rect
    if w <= 0 or h <= 0:
        return
    if color[3] >= 255:
        surface.fill(tuple(color[:3]), pygame.Rect(rect))
        return
    overlay = pygame.Surface((w, h), pygame.SRCALPHA)
    overlay.fill(tuple(color))
    surface.blit(overlay, (x, y))


def _outline(surface: pygame.Surface, color: Color, rect: Rect, thickness: int) -> None:
    x, y, w, h = rect
    if w <= 0 or h <= 0:
        return
    overlay = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.rect(overlay, tuple(color), overlay.get_rect(), thickness)
    surface.blit(overlay, (x, y))


def _text(surface: pygame.Surface, font: pygame.font.Font, text: str, x: int, y: int, color: Color) -> None:
    image = font.render(text, True, tuple(color[:3]))
    if color[3] < 255:
        image.set_alpha(color[3])
    surface.blit(image, (x, y))


def _centered_text(
    surface: pygame.Surface, font: pygame.font.Font, text: str, rect: Rect, color: Color
) -> None:
    x, y, w, h = rect
    text_width = font.size(text)[0]
    _text(
        surface,
        font,
        text,
        x + _div(w - text_width, 2),
        y + _div(h - FONT_SIZE_BUTTON, 2),
        color,
    )


# Action buttons


def _action_rects(sidebar_x: int, sidebar_width: int, y_start: int, count: int) -> Iterator[Rect]:
    width = _div(sidebar_width - PADDING * 2 - BUTTON_GAP, 2)
    left = sidebar_x + PADDING
    for column in range(count):
        yield (left + column * (width + BUTTON_GAP), y_start, width, BUTTON_HEIGHT)


def action_button_at(
    mouse_x: int,
    mouse_y: int,
    sidebar_x: int,
    sidebar_width: int,
    y_start: int,
    buttons: Sequence[Button],
) -> str | None:
    """Action of the button under the mouse, or None."""
    for button, rect in zip(buttons, _action_rects(sidebar_x, sidebar_width, y_start, len(buttons))):
        if _contains(rect, mouse_x, mouse_y):
            return button.action
    return None


def draw_action_buttons(
    surface: pygame.Surface,
    font: pygame.font.Font,
    sidebar_x: int,
    sidebar_width: int,
    y_start: int,
    state: AppState,
    buttons: Sequence[Button],
) -> int:
    """Draw the action buttons in a row; return the y position below them."""
    for button, rect in zip(buttons, _action_rects(sidebar_x, sidebar_width, y_start, len(buttons))):
        hovered = state.hovered_action == button.action
        base = parse_hex(button.color)
        _fill(surface, lighten(base, 30) if hovered else base, rect)
        if hovered:
            _outline(surface, COLOR_TEXT, rect, 2)
        _centered_text(surface, font, button.label, rect, COLOR_TEXT_HOVER if hovered else COLOR_TEXT)
    return y_start + BUTTON_HEIGHT + _SECTION_SPACING


# Brush sizes


def _brush_rects(sidebar_x: int, sidebar_width: int, y_start: int) -> Iterator[tuple[int, Rect]]:
    count = len(BRUSH_SIZES)
    total_gap = (count - 1) * BUTTON_GAP
    width = _div(sidebar_width - PADDING * 2 - total_gap, count)
    left = sidebar_x + PADDING
    for column, size in enumerate(BRUSH_SIZES):
        yield size, (left + column * (width + BUTTON_GAP), y_start, width, BRUSH_BUTTON_HEIGHT)


def brush_size_at(
    mouse_x: int, mouse_y: int, sidebar_x: int, sidebar_width: int, y_start: int
) -> int | None:
    """Brush size of the button under the mouse, or None."""
    for size, rect in _brush_rects(sidebar_x, sidebar_width, y_start):
        if _contains(rect, mouse_x, mouse_y):
            return size
    return None


def draw_brush_sizes(
    surface: pygame.Surface,
    font: pygame.font.Font,
    sidebar_x: int,
    sidebar_width: int,
    y_start: int,
    state: AppState,
) -> None:
    """Draw the brush size buttons in a row."""
    mouse_x, mouse_y = state.mouse_pos
    for size, rect in _brush_rects(sidebar_x, sidebar_width, y_start):
        selected = state.brush_size == size
        hovered = _contains(rect, mouse_x, mouse_y)
        if selected:
            color = COLOR_BRUSH_SELECTED
        elif hovered:
            color = COLOR_BRUSH_HOVER
        else:
            color = COLOR_BRUSH_BG
        _fill(surface, color, rect)
        if selected:
            _outline(surface, COLOR_BRUSH_SELECTED, rect, 2)
        elif hovered:
            _outline(surface, COLOR_BRUSH_HOVER_BORDER, rect, 1)
        _centered_text(surface, font, str(size), rect, _COLOR_WHITE if selected else COLOR_TEXT)


# Materials


def _material_rects(
    sidebar_x: int, sidebar_width: int, y_start: int, materials: MaterialRegistry
) -> Iterator[tuple[int, str, str, Rect]]:
    width = _div(sidebar_width - PADDING * 2 - BUTTON_GAP, 2)
    left = sidebar_x + PADDING
    for i, material in enumerate(materials):
        row, column = divmod(i, 2)
        rect = (
            left + column * (width + BUTTON_GAP),
            y_start + row * (MATERIAL_BUTTON_HEIGHT + BUTTON_GAP),
            width,
            MATERIAL_BUTTON_HEIGHT,
        )
        yield material.id, material.name, material.color, rect


def material_at(
    mouse_x: int,
    mouse_y: int,
    sidebar_x: int,
    sidebar_width: int,
    y_start: int,
    materials: MaterialRegistry,
) -> int | None:
    """Id of the material button under the mouse, or None."""
    for material_id, _name, _color, rect in _material_rects(sidebar_x, sidebar_width, y_start, materials):
        if _contains(rect, mouse_x, mouse_y):
            return material_id
    return None


def draw_materials(
    surface: pygame.Surface,
    font: pygame.font.Font,
    sidebar_x: int,
    sidebar_width: int,
    y_start: int,
    state: AppState,
    materials: MaterialRegistry,
) -> int:
    """Draw the material buttons in two columns; return the y position below them."""
    for material_id, name, color_text, rect in _material_rects(sidebar_x, sidebar_width, y_start, materials):
        base = parse_hex(color_text)
        hovered = state.hovered_material == material_id
        selected = state.selected_material == material_id
        if hovered:
            color = lighten(base, 40)
        elif selected:
            color = lighten(base, 20)
        else:
            color = base
        _fill(surface, color, rect)
        if selected:
            _outline(surface, COLOR_MATERIAL_SELECTED, rect, 3)
        elif hovered:
            _outline(surface, COLOR_MATERIAL_HOVER_BORDER, rect, 2)
        _centered_text(surface, font, name, rect, COLOR_TEXT_HOVER if hovered else COLOR_TEXT)

    rows = (len(materials) + 1) // 2
    return y_start + rows * (MATERIAL_BUTTON_HEIGHT + BUTTON_GAP) - BUTTON_GAP + PADDING


# Grid


def is_over_grid(mouse_x: int, mouse_y: int, sidebar_x: int) -> bool:
    """Whether the mouse is over the grid area left of the sidebar."""
    return GRID_GAP <= mouse_x < sidebar_x - GRID_GAP and mouse_y >= GRID_GAP


def draw_grid(
    surface: pygame.Surface,
    sidebar_x: int,
    state: AppState,
    cell_size: int,
    materials: MaterialRegistry,
) -> None:
    """Draw the grid background, its cells and the brush preview under the mouse."""
    area = (
        GRID_GAP,
        GRID_GAP,
        sidebar_x - GRID_GAP - GRID_GAP,
        surface.get_height() - GRID_GAP - GRID_GAP,
    )
    _fill(surface, COLOR_GRID_BG, area)
    _outline(surface, COLOR_GRID_BORDER, area, 2)

    for x, y, material_id in state.world.cells():
        material = materials.get(material_id)
        if material is None:
            continue
        rect = (GRID_GAP + x * cell_size, GRID_GAP + y * cell_size, cell_size, cell_size)
        _fill(surface, parse_hex(material.color), rect)

    _draw_brush_preview(surface, sidebar_x, state, cell_size)


def _draw_brush_preview(surface: pygame.Surface, sidebar_x: int, state: AppState, cell_size: int) -> None:
    mouse_x, mouse_y = state.mouse_pos
    if mouse_x >= sidebar_x - GRID_GAP:
        return
    grid_x = _div(mouse_x - GRID_GAP, cell_size)
    grid_y = _div(mouse_y - GRID_GAP, cell_size)
    if not (0 <= grid_x < state.world.width and 0 <= grid_y < state.world.height):
        return
    rect = (GRID_GAP + grid_x * cell_size, GRID_GAP + grid_y * cell_size, cell_size, cell_size)
    _fill(surface, COLOR_BRUSH_PREVIEW, rect)
    _outline(surface, COLOR_BRUSH_BORDER, rect, 1)


# Sidebar


def draw_separator(surface: pygame.Surface, sidebar_x: int, sidebar_width: int, y: int) -> int:
    """Draw a horizontal separator line; return the y position below it."""
    pygame.draw.line(
        surface,
        tuple(COLOR_SEPARATOR[:3]),
        (sidebar_x + PADDING, y),
        (sidebar_x + sidebar_width - PADDING, y),
    )
    return y + _SECTION_SPACING


def draw_sidebar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    sidebar_x: int,
    sidebar_width: int,
    state: AppState,
    materials: MaterialRegistry,
    buttons: Sequence[Button],
    rendering: RenderingOptions,
    fps: int,
) -> None:
    """Draw the whole sidebar: actions, materials, brush sizes and optionally the FPS."""
    screen_height = surface.get_height()
    _fill(surface, COLOR_SIDEBAR, (sidebar_x, 0, sidebar_width, screen_height))

    y = PADDING
    y = draw_action_buttons(surface, font, sidebar_x, sidebar_width, y, state, buttons)
    y = draw_separator(surface, sidebar_x, sidebar_width, y)
    y = draw_materials(surface, font, sidebar_x, sidebar_width, y, state, materials)
    y = draw_separator(surface, sidebar_x, sidebar_width, y)
    draw_brush_sizes(surface, font, sidebar_x, sidebar_width, y, state)

    if rendering.show_fps:
        fps_text = f"{fps} FPS"
        text_width = font.size(fps_text)[0]
        fps_y = screen_height - _FPS_BOTTOM_OFFSET
        draw_separator(surface, sidebar_x, sidebar_width, fps_y - _SECTION_SPACING)
        fps_x = sidebar_x + _div(sidebar_width - text_width, 2)
        _text(surface, font, fps_text, fps_x, fps_y, COLOR_FPS)