"""Runtime state shared by input handling, simulation and drawing."""

from __future__ import annotations

import logging

from dynamic_materials.world import World

__all__ = ["AppState", "MIN_BRUSH_SIZE", "MAX_BRUSH_SIZE"]

log = logging.getLogger(__name__)

MIN_BRUSH_SIZE = 1
MAX_BRUSH_SIZE = 10
_AIR = 0


class AppState:
    """Selected material, hover state, pause flag, brush and the world itself."""

    def __init__(self, default_material: int, grid_width: int, grid_height: int) -> None:
        self.selected_material = default_material
        self.paused = False
        self.mouse_pos: tuple[int, int] = (0, 0)
        self.hovered_material: int | None = None
        self.hovered_action: str | None = None
        self.world = World(grid_width, grid_height)
        self.update_accumulator = 0.0
        self.tick_duration = 1.0 / 60.0
        self.brush_size = MIN_BRUSH_SIZE

    def select_material(self, material_id: int) -> None:
        """Make ``material_id`` the one painted by the brush."""
        self.selected_material = material_id
        log.info("Selected material: %s", material_id)

    def clear_grid(self) -> None:
        """Empty the world."""
        self.world.clear()
        log.warning("Cleared the grid")

    def resize_world(self, width: int, height: int) -> None:
        """Resize the world grid."""
        self.world.resize(width, height)

    def toggle_pause(self) -> None:
        """Switch between paused and running."""
        self.paused = not self.paused
        log.info("Toggle pause callback: %s", self.paused)

    def on_grid_click(self, grid_x: int, grid_y: int) -> None:
        """Paint the selected material in a square brush centred on a cell.

        Only empty cells are filled, except that air (id 0) erases anything.
        """
        half = self.brush_size // 2
        world = self.world
        erasing = self.selected_material == _AIR
        for py in range(grid_y - half, grid_y + half + 1):
            for px in range(grid_x - half, grid_x + half + 1):
                if not (0 <= px < world.width and 0 <= py < world.height):
                    continue
                if erasing or world.get_cell(px, py) is None:
                    world.set_cell(px, py, self.selected_material)

    def set_brush_size(self, size: int) -> None:
        """Set the brush size, clamped to 1..10."""
        self.brush_size = min(max(size, MIN_BRUSH_SIZE), MAX_BRUSH_SIZE)
        log.info("Brush size set to: %s", self.brush_size)

    def accumulate_ticks(self, frame_time: float) -> int:
        """Add a frame's duration and return how many fixed-length ticks are due."""
        if self.paused:
            return 0
        self.update_accumulator += frame_time
        ticks = 0
        while self.update_accumulator >= self.tick_duration:
            self.update_accumulator -= self.tick_duration
            ticks += 1
        return ticks