from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

from .errors import ThemeError
from .types import Rgb

ANSI_RESET = "\033[0m"
ANSI_BOLD = "\033[1m"


class NamedColor(Enum):
    DARK_MAGENTA = Rgb(139, 0, 139)
    MAGENTA = Rgb(255, 0, 255)
    DARK_PINK = Rgb(149, 119, 149)
    PINK = Rgb(227, 184, 227)
    DARK_CYAN = Rgb(10, 144, 144)
    CYAN = Rgb(20, 210, 210)
    DARK_BLUE = Rgb(70, 75, 185)
    BLUE = Rgb(90, 100, 240)
    DARK_GREEN = Rgb(70, 140, 10)
    GREEN = Rgb(110, 220, 10)
    DARK_YELLOW = Rgb(170, 128, 0)
    YELLOW = Rgb(255, 185, 0)
    DARK_ORANGE = Rgb(255, 128, 0)
    ORANGE = Rgb(250, 180, 110)
    DARK_RED = Rgb(200, 0, 10)
    RED = Rgb(255, 60, 10)

    @property
    def rgb(self) -> Rgb:
        return self.value


def fg_escape(color: Rgb) -> str:
    return f"\033[38;2;{color.r};{color.g};{color.b}m"


def _channel(start: int, end: int, t: float) -> int:
    value = math.floor(start + (end - start) * t + 0.5)
    return min(max(value, 0), 255)


def lerp(start: Rgb, end: Rgb, t: float) -> Rgb:
    """
    Linear interpolation between two colors.

    Args:
        start: Color returned at t=0.
        end: Color returned at t=1.
        t: Fractional position, clamped to [0, 1].
    """
    t = min(max(float(t), 0.0), 1.0)
    return Rgb(
        _channel(start.r, end.r, t),
        _channel(start.g, end.g, t),
        _channel(start.b, end.b, t),
    )


def palette_segment(palette_size: int, position: int, steps: int) -> tuple[int, float]:
    """Return the index of the active color pair and the local t within it."""
    if palette_size <= 1:
        return 0, 0.0
    steps = max(steps, 1)
    position = min(max(position, 0), steps)
    scaled = position / steps * (palette_size - 1)
    index = min(int(scaled), palette_size - 2)
    return index, scaled - index


def palette_color(palette: Sequence[Rgb], position: int, steps: int) -> Rgb:
    """
    Color at a cursor position on a walk across the whole palette.

    Position 0 is the first palette color and position `steps` the last one.
    """
    if not palette:
        raise ThemeError("Palette has no colors.")
    if len(palette) == 1:
        return palette[0]
    index, local_t = palette_segment(len(palette), position, steps)
    return lerp(palette[index], palette[index + 1], local_t)
