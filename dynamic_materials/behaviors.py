"""Movement rules for each material behaviour."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from dynamic_materials.materials import Behavior, MaterialRegistry

__all__ = [
    "BehaviorContext",
    "MoveResult",
    "pseudo_random",
    "granular_position",
    "liquid_position",
    "acid_position",
    "heavy_position",
    "static_position",
    "dispatch",
]

MoveResult = tuple[int, int] | None

_MASK = 0xFFFFFFFF
_PX = 374761393
_PY = 668265263
_PS = 1274126177


@dataclass(frozen=True)
class BehaviorContext:
    """Everything a movement rule needs to pick a target for one particle."""

    x: int
    y: int
    material_id: int
    tick: int
    width: int
    height: int
    cells: Sequence[int]
    new_cells: Sequence[int]
    materials: MaterialRegistry

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


def pseudo_random(tick: int, x: int, y: int, seed: int = 0) -> int:
    """Deterministic 32-bit hash of a tick, a position and a seed."""
    n = (tick + x * _PX + y * _PY + seed * _PS) & _MASK
    n = ((n ^ (n >> 13)) * _PS) & _MASK
    n = ((n ^ (n >> 16)) * _PS) & _MASK
    return n


def _pick(options: list[tuple[int, int]], roll: int) -> MoveResult:
    return options[roll % len(options)] if options else None


def _is_empty(ctx: BehaviorContext, x: int, y: int) -> bool:
    if not ctx.in_bounds(x, y):
        return False
    i = ctx.index(x, y)
    return ctx.cells[i] == 0 and ctx.new_cells[i] == 0


def _can_displace(ctx: BehaviorContext, x: int, y: int) -> bool:
    if not ctx.in_bounds(x, y):
        return False
    i = ctx.index(x, y)
    target = ctx.new_cells[i] or ctx.cells[i]
    if target == 0:
        return True
    if target == ctx.material_id:
        return False
    moving = ctx.materials.density_of(ctx.material_id)
    other = ctx.materials.density_of(target)
    if moving is None or other is None:
        return False
    return moving > other


def granular_position(ctx: BehaviorContext) -> MoveResult:
    """Fall straight down, else slide diagonally into empty cells."""
    x, y = ctx.x, ctx.y
    if y + 1 >= ctx.height:
        return None
    if _is_empty(ctx, x, y + 1):
        return (x, y + 1)
    options = []
    if x > 0 and _is_empty(ctx, x - 1, y + 1):
        options.append((x - 1, y + 1))
    if x + 1 < ctx.width and _is_empty(ctx, x + 1, y + 1):
        options.append((x + 1, y + 1))
    return _pick(options, pseudo_random(ctx.tick, x, y))


def _fluid_position(ctx: BehaviorContext) -> MoveResult:
    x, y = ctx.x, ctx.y
    can_down = y + 1 < ctx.height
    can_left = x > 0
    can_right = x + 1 < ctx.width

    if can_down and _can_displace(ctx, x, y + 1):
        return (x, y + 1)

    below = []
    if can_down and can_left and _can_displace(ctx, x - 1, y + 1):
        below.append((x - 1, y + 1))
    if can_down and can_right and _can_displace(ctx, x + 1, y + 1):
        below.append((x + 1, y + 1))
    if below:
        return _pick(below, pseudo_random(ctx.tick, x, y, 0))

    side = []
    if can_left and _can_displace(ctx, x - 1, y):
        side.append((x - 1, y))
    if can_right and _can_displace(ctx, x + 1, y):
        side.append((x + 1, y))
    if not side or pseudo_random(ctx.tick, x, y, 1) % 4 == 0:
        return None
    return _pick(side, pseudo_random(ctx.tick, x, y, 2))


def liquid_position(ctx: BehaviorContext) -> MoveResult:
    """Fall, slide diagonally or spread sideways, sinking through lighter materials."""
    return _fluid_position(ctx)


def acid_position(ctx: BehaviorContext) -> MoveResult:
    """Acid flows like a liquid."""
    return _fluid_position(ctx)


def heavy_position(ctx: BehaviorContext) -> MoveResult:
    """Fall straight down into an empty cell only."""
    x, y = ctx.x, ctx.y
    if y + 1 >= ctx.height:
        return None
    return (x, y + 1) if _is_empty(ctx, x, y + 1) else None


def static_position(ctx: BehaviorContext) -> MoveResult:
    """Never move."""
    return None


_RULES: dict[Behavior, Callable[[BehaviorContext], MoveResult]] = {
    Behavior.GRANULAR: granular_position,
    Behavior.LIQUID: liquid_position,
    Behavior.HEAVY: heavy_position,
    Behavior.ACID: acid_position,
    Behavior.STATIC: static_position,
    Behavior.SOLID: static_position,
    Behavior.BURNING: static_position,
}


def dispatch(behavior: Behavior, ctx: BehaviorContext) -> MoveResult:
    """Apply the movement rule for ``behavior``."""
    return _RULES[behavior](ctx)