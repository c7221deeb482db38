"""Material definitions, behaviours and the material registry."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

__all__ = ["Behavior", "Material", "Cell", "MaterialRegistry"]


class Behavior(Enum):
    """How a material moves during a simulation step."""

    STATIC = "static"
    GRANULAR = "granular"
    LIQUID = "liquid"
    BURNING = "burning"
    SOLID = "solid"
    HEAVY = "heavy"
    ACID = "acid"

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass
class Material:
    """A kind of particle: identifier, display name, hex colour, behaviour, density."""

    id: int
    name: str
    color: str
    behavior: Behavior
    density: float


@dataclass
class Cell:
    """A grid position holding a material."""

    x: int
    y: int
    material_id: int


class MaterialRegistry:
    """Ordered store of materials, looked up by id."""

    def __init__(self) -> None:
        self._materials: list[Material] = []

    def register(self, material: Material) -> None:
        """Append a material."""
        self._materials.append(material)

    def get(self, material_id: int) -> Material | None:
        """Return the first material with this id, or None."""
        return next((m for m in self._materials if m.id == material_id), None)

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[Material]:
        return iter(self._materials)

    def behavior_of(self, material_id: int) -> Behavior | None:
        material = self.get(material_id)
        return material.behavior if material else None

    def color_of(self, material_id: int) -> str | None:
        material = self.get(material_id)
        return material.color if material else None

    def density_of(self, material_id: int) -> float | None:
        material = self.get(material_id)
        return material.density if material else None