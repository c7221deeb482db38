"""Window, main loop and input handling for the simulation."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Sequence

import pygame

from dynamic_materials.color import Color
from dynamic_materials.config import Button, Config, ConfigError, load_all
from dynamic_materials.layout import (
    BUTTON_GAP,
    BUTTON_HEIGHT,
    FONT_SIZE_BUTTON,
    GRID_GAP,
    PADDING,
    calculate_sidebar_width,
)
from dynamic_materials.materials import MaterialRegistry
from dynamic_materials.state import AppState
from dynamic_materials.ui import (
    MATERIAL_BUTTON_HEIGHT,
    action_button_at,
    brush_size_at,
    draw_grid,
    draw_sidebar,
    is_over_grid,
    material_at,
)

__all__ = [
    "BRUSH_SIZE_ACTION",
    "brush_row_y",
    "update_hover_state",
    "handle_button_click",
    "handle_grid_click",
    "run",
    "main",
]

log = logging.getLogger(__name__)

TITLE = "Dynamic Materials"
WINDOW_SIZE = (1920, 1080)
COLOR_BACKGROUND = Color(248, 250, 252, 255)
BRUSH_SIZE_ACTION = "brush_size"

_SECTION_SPACING = 15
_DEFAULT_MATERIALS = "config/materials.toml"
_DEFAULT_MENU = "config/menu.toml"
_DEFAULT_OPTIONS = "config/options.toml"


def _materials_top() -> int:
    """Y position of the first row of material buttons."""
    return PADDING + BUTTON_HEIGHT + _SECTION_SPACING + _SECTION_SPACING


def brush_row_y(material_count: int) -> int:
    """Y position of the brush size row, given how many materials are listed."""
    rows = (material_count + 1) // 2
    materials_height = rows * (MATERIAL_BUTTON_HEIGHT + BUTTON_GAP) - BUTTON_GAP
    materials_end = _materials_top() + materials_height + PADDING
    return materials_end + _SECTION_SPACING


def update_hover_state(
    state: AppState,
    screen_width: int,
    sidebar_width: int,
    materials: MaterialRegistry,
    buttons: Sequence[Button],
) -> None:
    """Record which sidebar control, if any, is under the mouse."""
    mouse_x, mouse_y = state.mouse_pos
    sidebar_x = screen_width - sidebar_width

    action = action_button_at(mouse_x, mouse_y, sidebar_x, sidebar_width, PADDING, buttons)
    if action is not None:
        state.hovered_action = action
        state.hovered_material = None
        return

    material_id = material_at(
        mouse_x, mouse_y, sidebar_x, sidebar_width, _materials_top(), materials
    )
    if material_id is not None:
        state.hovered_material = material_id
        state.hovered_action = None
        return

    size = brush_size_at(
        mouse_x, mouse_y, sidebar_x, sidebar_width, brush_row_y(len(materials))
    )
    if size is not None:
        state.hovered_action = BRUSH_SIZE_ACTION
        state.hovered_material = None
        return

    state.hovered_material = None
    state.hovered_action = None


def handle_button_click(
    state: AppState,
    screen_width: int,
    sidebar_width: int,
    materials: MaterialRegistry,
) -> None:
    """Carry out the action of the hovered control."""
    action = state.hovered_action
    if action is not None:
        if action == BRUSH_SIZE_ACTION:
            mouse_x, mouse_y = state.mouse_pos
            size = brush_size_at(
                mouse_x,
                mouse_y,
                screen_width - sidebar_width,
                sidebar_width,
                brush_row_y(len(materials)),
            )
            if size is not None:
                state.set_brush_size(size)
            return
        if action == "toggle_simulation":
            state.toggle_pause()
        elif action == "clear_world":
            state.clear_grid()
        else:
            log.info("Unknown action: %s", action)
        return

    if state.hovered_material is not None:
        state.select_material(state.hovered_material)


def handle_grid_click(state: AppState, sidebar_x: int, cell_size: int) -> None:
    """Paint the selected material at the grid cell under the mouse."""
    mouse_x, mouse_y = state.mouse_pos
    if state.hovered_action is not None or not is_over_grid(mouse_x, mouse_y, sidebar_x):
        return
    grid_x = (mouse_x - GRID_GAP) // cell_size
    grid_y = (mouse_y - GRID_GAP) // cell_size
    if 0 <= grid_x < state.world.width and 0 <= grid_y < state.world.height:
        state.on_grid_click(grid_x, grid_y)


def _cursor_for(state: AppState, sidebar_x: int) -> int:
    if state.hovered_material is not None or state.hovered_action is not None:
        return pygame.SYSTEM_CURSOR_HAND
    if is_over_grid(state.mouse_pos[0], state.mouse_pos[1], sidebar_x):
        return pygame.SYSTEM_CURSOR_CROSSHAIR
    return pygame.SYSTEM_CURSOR_ARROW


def run(config: Config, state: AppState) -> None:
    """Open the window and run the input, simulation and drawing loop until closed."""
    cell_size = config.options.simulation.cell_size
    buttons = config.menu.buttons
    materials = config.materials

    pygame.init()
    try:
        pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        font = pygame.font.Font(None, FONT_SIZE_BUTTON)
        clock = pygame.time.Clock()

        last_size = (0, 0)
        last_time = time.perf_counter()
        cursor = None

        while True:
            now = time.perf_counter()
            frame_time = now - last_time
            last_time = now

            pressed = False
            quit_requested = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_requested = True
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    pressed = True
            if quit_requested:
                break

            surface = pygame.display.get_surface()
            screen_width, screen_height = surface.get_size()
            sidebar_width = calculate_sidebar_width(screen_width)
            sidebar_x = screen_width - sidebar_width

            if (screen_width, screen_height) != last_size:
                available_width = screen_width - sidebar_width - GRID_GAP - GRID_GAP
                available_height = screen_height - GRID_GAP - GRID_GAP
                if available_width > 0 and available_height > 0:
                    state.resize_world(available_width // cell_size, available_height // cell_size)
                last_size = (screen_width, screen_height)

            state.mouse_pos = tuple(pygame.mouse.get_pos())
            update_hover_state(state, screen_width, sidebar_width, materials, buttons)

            if pressed:
                handle_button_click(state, screen_width, sidebar_width, materials)
            if pygame.mouse.get_pressed()[0]:
                handle_grid_click(state, sidebar_x, cell_size)

            for _ in range(state.accumulate_ticks(frame_time)):
                state.world.update(materials)

            wanted = _cursor_for(state, sidebar_x)
            if wanted != cursor:
                pygame.mouse.set_cursor(wanted)
                cursor = wanted

            surface.fill(tuple(COLOR_BACKGROUND[:3]))
            draw_grid(surface, sidebar_x, state, cell_size, materials)
            draw_sidebar(
                surface,
                font,
                sidebar_x,
                sidebar_width,
                state,
                materials,
                buttons,
                config.options.rendering,
                round(clock.get_fps()),
            )
            pygame.display.flip()
            clock.tick()
    finally:
        pygame.quit()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dynamic-materials", description="Falling-sand material simulation.")
    parser.add_argument("--materials", default=_DEFAULT_MATERIALS, help="materials TOML file")
    parser.add_argument("--menu", default=_DEFAULT_MENU, help="menu buttons TOML file")
    parser.add_argument("--options", default=_DEFAULT_OPTIONS, help="options TOML file")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration and run the simulation window."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s %(name)s] %(message)s")

    try:
        config = load_all(args.materials, args.menu, args.options)
    except ConfigError as exc:
        log.error("%s", exc)
        return 1

    state = AppState(
        config.options.interaction.default_material,
        config.options.simulation.grid_width,
        config.options.simulation.grid_height,
    )
    run(config, state)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())