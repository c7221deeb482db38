"""RGBA colours and helpers for parsing and adjusting them."""

from __future__ import annotations

from string import hexdigits
from typing import NamedTuple

__all__ = ["Color", "BLACK", "parse_hex", "lighten", "darken", "with_alpha", "lerp"]


class Color(NamedTuple):
    """An 8-bit-per-channel RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255


BLACK = Color(0, 0, 0, 255)


def _component(chunk: bytes) -> int:
    try:
        digits = chunk.decode("ascii")
    except UnicodeDecodeError:
        return 0
    if digits.startswith("+"):
        digits = digits[1:]
    if digits and all(ch in hexdigits for ch in digits):
        return int(digits, 16)
    return 0


def parse_hex(text: str) -> Color:
    """Parse ``#RRGGBB`` or ``RRGGBB`` into an opaque colour.

    A string of the wrong length gives black; an unreadable component gives 0.
    """
    raw = text.lstrip("#").encode("utf-8")
    if len(raw) != 6:
        return BLACK
    return Color(_component(raw[0:2]), _component(raw[2:4]), _component(raw[4:6]), 255)


def lighten(color: Color, amount: int) -> Color:
    """Add ``amount`` to each RGB channel, saturating at 255."""
    return Color(
        min(color.r + amount, 255),
        min(color.g + amount, 255),
        min(color.b + amount, 255),
        color.a,
    )


def darken(color: Color, amount: int) -> Color:
    """Subtract ``amount`` from each RGB channel, saturating at 0."""
    return Color(
        max(color.r - amount, 0),
        max(color.g - amount, 0),
        max(color.b - amount, 0),
        color.a,
    )


def with_alpha(color: Color, alpha: int) -> Color:
    """Return ``color`` with its alpha replaced."""
    return color._replace(a=alpha)


def lerp(a: Color, b: Color, t: float) -> Color:
    """Interpolate linearly from ``a`` (t=0) to ``b`` (t=1); ``t`` is clamped."""
    t = min(max(t, 0.0), 1.0)
    return Color(*(int(x + (y - x) * t) for x, y in zip(a, b)))