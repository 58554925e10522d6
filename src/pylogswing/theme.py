from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from .color import NamedColor
from .types import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_TRACE,
    LEVEL_WARN,
    LoggerLevel,
    Rgb,
)


class Theme(Protocol):
    def colors_for(self, level: LoggerLevel) -> Sequence[Rgb]:
        ...


class PaletteTheme:
    """
    Theme backed by a fixed palette per level.

    Args:
        name: Theme name, used in diagnostics.
        palettes: Ordered colors per level. Gradients walk them first to last.
        anchors: Optional solid color per level. Defaults to the first palette color.
    """

    def __init__(
        self,
        name: str,
        palettes: Mapping[LoggerLevel, Sequence[Rgb]],
        anchors: Mapping[LoggerLevel, Rgb] | None = None,
    ) -> None:
        self.name = name
        self._palettes: dict[LoggerLevel, tuple[Rgb, ...]] = {
            level: tuple(colors) for level, colors in palettes.items()
        }
        self._anchors: dict[LoggerLevel, Rgb] = dict(anchors or {})

    def colors_for(self, level: LoggerLevel) -> tuple[Rgb, ...]:
        return self._palettes.get(level, ())

    def anchor_for(self, level: LoggerLevel) -> Rgb | None:
        anchor = self._anchors.get(level)
        if anchor is not None:
            return anchor
        colors = self.colors_for(level)
        return colors[0] if colors else None

    def __repr__(self) -> str:
        return f"PaletteTheme(name={self.name!r})"


def _named(*colors: NamedColor) -> tuple[Rgb, ...]:
    return tuple(color.rgb for color in colors)


SPECTRAL = PaletteTheme(
    "spectral",
    {
        LEVEL_TRACE: _named(
            NamedColor.DARK_MAGENTA,
            NamedColor.MAGENTA,
            NamedColor.PINK,
            NamedColor.BLUE,
            NamedColor.DARK_BLUE,
        ),
        LEVEL_DEBUG: _named(
            NamedColor.DARK_CYAN,
            NamedColor.CYAN,
            NamedColor.BLUE,
            NamedColor.DARK_BLUE,
            NamedColor.DARK_MAGENTA,
        ),
        LEVEL_INFO: _named(
            NamedColor.DARK_GREEN,
            NamedColor.GREEN,
            NamedColor.CYAN,
            NamedColor.DARK_CYAN,
            NamedColor.BLUE,
        ),
        LEVEL_WARN: _named(
            NamedColor.DARK_YELLOW,
            NamedColor.YELLOW,
            NamedColor.ORANGE,
            NamedColor.DARK_ORANGE,
            NamedColor.RED,
        ),
        LEVEL_ERROR: _named(
            NamedColor.DARK_RED,
            NamedColor.RED,
            NamedColor.DARK_ORANGE,
            NamedColor.MAGENTA,
            NamedColor.DARK_MAGENTA,
        ),
    },
)

DUAL_TONE = PaletteTheme(
    "dual_tone",
    {
        LEVEL_TRACE: _named(NamedColor.DARK_PINK, NamedColor.PINK),
        LEVEL_DEBUG: _named(NamedColor.DARK_CYAN, NamedColor.CYAN),
        LEVEL_INFO: _named(NamedColor.DARK_GREEN, NamedColor.GREEN),
        LEVEL_WARN: _named(NamedColor.DARK_ORANGE, NamedColor.ORANGE),
        LEVEL_ERROR: _named(NamedColor.DARK_RED, NamedColor.RED),
    },
)

BUILTIN_THEMES: dict[str, PaletteTheme] = {
    SPECTRAL.name: SPECTRAL,
    DUAL_TONE.name: DUAL_TONE,
}
