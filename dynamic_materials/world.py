"""The simulation grid and its per-tick update."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from dynamic_materials.behaviors import BehaviorContext, dispatch
from dynamic_materials.materials import Behavior, MaterialRegistry

__all__ = ["World"]

log = logging.getLogger(__name__)

_TICK_MASK = 0xFFFFFFFF

_MOBILE = frozenset({Behavior.GRANULAR, Behavior.LIQUID, Behavior.HEAVY, Behavior.ACID})
_DISSOLVABLE = frozenset({Behavior.GRANULAR, Behavior.LIQUID, Behavior.HEAVY})


class World:
    """A width x height grid of material ids, where 0 means empty."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._cells: list[int] = [0] * (width * height)
        self._tick = 0

    @property
    def tick(self) -> int:
        """Number of updates run since creation or the last clear."""
        return self._tick

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        """Flat index of a grid position."""
        return y * self.width + x

    def set_cell(self, x: int, y: int, material_id: int) -> None:
        """Place a material at a position; out-of-bounds writes are logged and ignored."""
        if self._in_bounds(x, y):
            self._cells[self.index(x, y)] = material_id
        else:
            log.error("Attempted to set cell (%s, %s) out of bounds", x, y)

    def get_cell(self, x: int, y: int) -> int | None:
        """Material id at a position, or None when empty or out of bounds."""
        if not self._in_bounds(x, y):
            return None
        return self._cells[self.index(x, y)] or None

    def resize(self, width: int, height: int) -> None:
        """Change the grid size, keeping the overlapping top-left region."""
        if width == self.width and height == self.height:
            return
        new_cells = [0] * (width * height)
        copy_width = min(self.width, width)
        for y in range(min(self.height, height)):
            old_start = self.index(0, y)
            new_start = y * width
            new_cells[new_start:new_start + copy_width] = self._cells[old_start:old_start + copy_width]
        self.width = width
        self.height = height
        self._cells = new_cells

    def clear(self) -> None:
        """Empty every cell and reset the tick counter."""
        self._cells = [0] * len(self._cells)
        self._tick = 0

    def cells(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(x, y, material_id)`` for each occupied cell in row-major order."""
        for i, material_id in enumerate(self._cells):
            if material_id:
                y, x = divmod(i, self.width)
                yield x, y, material_id

    def update(self, materials: MaterialRegistry) -> None:
        """Advance the simulation by one tick."""
        new_cells = self._move(materials)
        self._settle_by_density(new_cells, materials)
        self._dissolve(new_cells, materials)
        self._cells = new_cells
        self._tick = (self._tick + 1) & _TICK_MASK

    def _move(self, materials: MaterialRegistry) -> list[int]:
        width, height = self.width, self.height
        cells = self._cells
        new_cells = [0] * len(cells)
        columns = range(width) if self._tick % 2 == 0 else range(width - 1, -1, -1)

        for y in reversed(range(height)):
            for x in columns:
                i = self.index(x, y)
                material_id = cells[i]
                if material_id == 0 or new_cells[i] != 0:
                    continue

                behavior = materials.behavior_of(material_id)
                target = None
                if behavior is not None:
                    ctx = BehaviorContext(
                        x=x,
                        y=y,
                        material_id=material_id,
                        tick=self._tick,
                        width=width,
                        height=height,
                        cells=cells,
                        new_cells=new_cells,
                        materials=materials,
                    )
                    target = dispatch(behavior, ctx)

                if target is None:
                    new_cells[i] = material_id
                    continue
                j = self.index(*target)
                if new_cells[j] == 0:
                    new_cells[j] = material_id
                else:
                    new_cells[i] = material_id
        return new_cells

    def _settle_by_density(self, new_cells: list[int], materials: MaterialRegistry) -> None:
        for y in reversed(range(self.height - 1)):
            for x in range(self.width):
                i = self.index(x, y)
                material_id = new_cells[i]
                if material_id == 0:
                    continue
                below = self.index(x, y + 1)
                below_id = new_cells[below]
                if below_id == 0 or below_id == material_id:
                    continue
                if (
                    materials.behavior_of(material_id) not in _MOBILE
                    or materials.behavior_of(below_id) not in _MOBILE
                ):
                    continue
                mine = materials.density_of(material_id)
                theirs = materials.density_of(below_id)
                if mine is None or theirs is None:
                    continue
                if mine > theirs:
                    new_cells[i], new_cells[below] = below_id, material_id

    def _dissolve(self, new_cells: list[int], materials: MaterialRegistry) -> None:
        for y in range(self.height):
            for x in range(self.width):
                i = self.index(x, y)
                material_id = new_cells[i]
                if material_id == 0 or materials.behavior_of(material_id) is not Behavior.ACID:
                    continue
                for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
                    if not self._in_bounds(nx, ny):
                        continue
                    n = self.index(nx, ny)
                    target_id = new_cells[n]
                    if target_id == 0 or target_id == material_id:
                        continue
                    if materials.behavior_of(target_id) in _DISSOLVABLE:
                        new_cells[n] = 0
                        new_cells[i] = 0
                        break