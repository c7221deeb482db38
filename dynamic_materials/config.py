"""Configuration records and their TOML loaders."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from dynamic_materials.materials import Behavior, Material, MaterialRegistry

__all__ = [
    "ConfigError",
    "SimulationOptions",
    "RenderingOptions",
    "InteractionOptions",
    "Options",
    "Button",
    "Menu",
    "Config",
    "load_materials",
    "load_menu",
    "load_options",
    "load_all",
]

log = logging.getLogger(__name__)

_U32_MAX = 0xFFFFFFFF

Path = str | PathLike[str]


class ConfigError(Exception):
    """A configuration file could not be read or did not have the expected shape."""


@dataclass(frozen=True)
class SimulationOptions:
    """Grid size, cell size in pixels and frame-rate limit."""

    grid_width: int
    grid_height: int
    cell_size: int
    fps_limit: int


@dataclass(frozen=True)
class RenderingOptions:
    """Display settings."""

    background_color: str
    show_grid: bool
    show_fps: bool


@dataclass(frozen=True)
class InteractionOptions:
    """Brush size and the material selected on startup."""

    brush_size: int
    default_material: int


@dataclass(frozen=True)
class Options:
    """All settings from the options file."""

    simulation: SimulationOptions
    rendering: RenderingOptions
    interaction: InteractionOptions


@dataclass(frozen=True)
class Button:
    """A sidebar action button."""

    id: str
    label: str
    action: str
    color: str


@dataclass(frozen=True)
class Menu:
    """The list of action buttons."""

    buttons: list[Button] = field(default_factory=list)


@dataclass
class Config:
    """Everything loaded at startup."""

    materials: MaterialRegistry
    menu: Menu
    options: Options


def _read(path: Path, what: str) -> dict[str, Any]:
    log.info("Parsing %s from: %s", what, path)
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Could not read {what} config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"TOML parse error in {path}: {exc}") from exc


def _value(table: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(table, Mapping):
        raise ConfigError(f"{where}: expected a table")
    if key not in table:
        raise ConfigError(f"{where}: missing field `{key}`")
    return table[key]


def _u32(table: Mapping[str, Any], key: str, where: str) -> int:
    value = _value(table, key, where)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise ConfigError(f"{where}: `{key}` must be an unsigned 32-bit integer")
    return value


def _str(table: Mapping[str, Any], key: str, where: str) -> str:
    value = _value(table, key, where)
    if not isinstance(value, str):
        raise ConfigError(f"{where}: `{key}` must be a string")
    return value


def _bool(table: Mapping[str, Any], key: str, where: str) -> bool:
    value = _value(table, key, where)
    if not isinstance(value, bool):
        raise ConfigError(f"{where}: `{key}` must be a boolean")
    return value


def _float(table: Mapping[str, Any], key: str, where: str) -> float:
    value = _value(table, key, where)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where}: `{key}` must be a number")
    return float(value)


def _array(table: Mapping[str, Any], key: str, where: str) -> list[Any]:
    value = _value(table, key, where)
    if not isinstance(value, list):
        raise ConfigError(f"{where}: `{key}` must be an array")
    return value


def _behavior(table: Mapping[str, Any], where: str) -> Behavior:
    name = _str(table, "behavior", where)
    try:
        return Behavior(name)
    except ValueError as exc:
        raise ConfigError(f"{where}: unknown behavior `{name}`") from exc


def _material(table: Mapping[str, Any], where: str) -> Material:
    return Material(
        id=_u32(table, "id", where),
        name=_str(table, "name", where),
        color=_str(table, "color", where),
        behavior=_behavior(table, where),
        density=_float(table, "density", where),
    )


def _button(table: Mapping[str, Any], where: str) -> Button:
    return Button(
        id=_str(table, "id", where),
        label=_str(table, "label", where),
        action=_str(table, "action", where),
        color=_str(table, "color", where),
    )


def load_materials(path: Path) -> MaterialRegistry:
    """Load the material registry from a TOML file of ``[[material]]`` tables."""
    data = _read(path, "materials")
    registry = MaterialRegistry()
    for n, entry in enumerate(_array(data, "material", str(path))):
        material = _material(entry, f"{path}: material[{n}]")
        log.debug(
            "  Parsed material: %s (id=%s, behavior=%s)",
            material.name,
            material.id,
            material.behavior,
        )
        registry.register(material)
    log.info("Loaded %d materials", len(registry))
    return registry


def load_menu(path: Path) -> Menu:
    """Load the action buttons from a TOML file of ``[[buttons]]`` tables."""
    data = _read(path, "menu")
    buttons = [
        _button(entry, f"{path}: buttons[{n}]")
        for n, entry in enumerate(_array(data, "buttons", str(path)))
    ]
    for button in buttons:
        log.debug("  Parsed button: %s (action=%s)", button.label, button.action)
    log.info("Loaded %d menu buttons", len(buttons))
    return Menu(buttons=buttons)


def load_options(path: Path) -> Options:
    """Load simulation, rendering and interaction settings."""
    data = _read(path, "options")
    where = str(path)
    sim = _value(data, "simulation", where)
    ren = _value(data, "rendering", where)
    act = _value(data, "interaction", where)
    sim_where, ren_where, act_where = (f"{where}: {s}" for s in ("simulation", "rendering", "interaction"))
    options = Options(
        simulation=SimulationOptions(
            grid_width=_u32(sim, "grid_width", sim_where),
            grid_height=_u32(sim, "grid_height", sim_where),
            cell_size=_u32(sim, "cell_size", sim_where),
            fps_limit=_u32(sim, "fps_limit", sim_where),
        ),
        rendering=RenderingOptions(
            background_color=_str(ren, "background_color", ren_where),
            show_grid=_bool(ren, "show_grid", ren_where),
            show_fps=_bool(ren, "show_fps", ren_where),
        ),
        interaction=InteractionOptions(
            brush_size=_u32(act, "brush_size", act_where),
            default_material=_u32(act, "default_material", act_where),
        ),
    )
    log.debug(
        "  Grid: %sx%s, cell_size: %s",
        options.simulation.grid_width,
        options.simulation.grid_height,
        options.simulation.cell_size,
    )
    log.debug(
        "  FPS limit: %s, show_grid: %s, show_fps: %s",
        options.simulation.fps_limit,
        options.rendering.show_grid,
        options.rendering.show_fps,
    )
    log.debug(
        "  Brush size: %s, default material: %s",
        options.interaction.brush_size,
        options.interaction.default_material,
    )
    log.info("Loaded options config")
    return options


def load_all(materials_path: Path, menu_path: Path, options_path: Path) -> Config:
    """Load every configuration file."""
    return Config(
        materials=load_materials(materials_path),
        menu=load_menu(menu_path),
        options=load_options(options_path),
    )