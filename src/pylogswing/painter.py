from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from threading import Lock
from typing import Union

import regex

from .color import ANSI_BOLD, ANSI_RESET, fg_escape, palette_color
from .cursor import CursorTable, GradientCursor
from .formats import RecordFormatter
from .theme import Theme
from .types import EMPHASIZED_LEVELS, LoggerLevel, LogRecord, Rgb

_MESSAGE_PLACEHOLDER = "\ue000pylogswing-message\ue001"
_GRAPHEME_RE = regex.compile(r"\X")


def _validate_steps(steps: int) -> None:
    if isinstance(steps, bool) or not isinstance(steps, int) or steps <= 0:
        raise ValueError(f"Gradient steps must be a positive integer, got {steps!r}.")


@dataclass(frozen=True)
class NoColor:
    pass


@dataclass(frozen=True)
class Solid:
    pass


@dataclass(frozen=True)
class InlineGradient:
    steps: int

    def __post_init__(self) -> None:
        _validate_steps(self.steps)


@dataclass(frozen=True)
class MultiLineGradient:
    steps: int

    def __post_init__(self) -> None:
        _validate_steps(self.steps)


ColorFormat = Union[NoColor, Solid, InlineGradient, MultiLineGradient]

NO_COLOR = NoColor()
SOLID = Solid()


def is_control(char: str) -> bool:
    codepoint = ord(char)
    return (0x00 <= codepoint <= 0x1F) or (0x7F <= codepoint <= 0x9F)


def split_units(text: str) -> list[str]:
    """Split text into extended grapheme clusters for per-character coloring."""
    return _GRAPHEME_RE.findall(text)


class LogPainter:
    """
    Lays out a record and colors it with a theme.

    Args:
        theme: Palette source for every level.
        color_format: Coloring strategy; None disables color.
        record_format: Structural layout of the line.
        on_error: Receives configuration diagnostics (e.g. an empty palette).
    """

    def __init__(
        self,
        theme: Theme,
        color_format: ColorFormat | None,
        record_format: RecordFormatter,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self._theme = theme
        self._color_format: ColorFormat = NO_COLOR if color_format is None else color_format
        self._record_format = record_format
        self._on_error = on_error
        self._cursors: CursorTable | None = None
        if isinstance(self._color_format, MultiLineGradient):
            self._cursors = CursorTable(self._color_format.steps)
        self._reported_levels: set[LoggerLevel] = set()
        self._report_lock = Lock()

    @property
    def color_format(self) -> ColorFormat:
        return self._color_format

    @property
    def cursors(self) -> CursorTable | None:
        return self._cursors

    def paint(self, record: LogRecord) -> str:
        color_format = self._color_format
        if isinstance(color_format, InlineGradient):
            return self._paint_inline_gradient(record, color_format.steps)

        line = self._record_format.format(record)
        if isinstance(color_format, NoColor):
            return self._paint_plain(line, record.level)
        if isinstance(color_format, Solid):
            return self._paint_solid(line, record.level)
        if isinstance(color_format, MultiLineGradient):
            return self._paint_multi_line_gradient(line, record.level, color_format.steps)
        raise TypeError(f"Unsupported color format: {color_format!r}")

    @staticmethod
    def _paint_plain(line: str, level: LoggerLevel) -> str:
        if level in EMPHASIZED_LEVELS and line:
            return f"{ANSI_BOLD}{line}{ANSI_RESET}"
        return line

    @staticmethod
    def _style(level: LoggerLevel, color: Rgb) -> str:
        bold = ANSI_BOLD if level in EMPHASIZED_LEVELS else ""
        return f"{bold}{fg_escape(color)}"

    def _palette(self, level: LoggerLevel) -> tuple[Rgb, ...] | None:
        try:
            colors = tuple(self._theme.colors_for(level))
        except Exception as exc:
            self._report_theme_failure(level, f"failed to provide colors for level {level} ({exc!r})")
            return None
        if colors:
            return colors
        self._report_theme_failure(level, f"has no colors for level {level}")
        return None

    def _report_theme_failure(self, level: LoggerLevel, problem: str) -> None:
        with self._report_lock:
            if level in self._reported_levels:
                return
            self._reported_levels.add(level)
        if self._on_error is not None:
            theme_name = getattr(self._theme, "name", type(self._theme).__name__)
            self._on_error(f"Theme '{theme_name}' {problem}; rendering this level without color.")

    def _anchor(self, level: LoggerLevel, palette: tuple[Rgb, ...]) -> Rgb:
        anchor_for = getattr(self._theme, "anchor_for", None)
        if anchor_for is not None:
            anchor = anchor_for(level)
            if anchor is not None:
                return anchor
        return palette[0]

    def _paint_solid(self, line: str, level: LoggerLevel) -> str:
        palette = self._palette(level)
        if palette is None:
            return self._paint_plain(line, level)
        color = self._anchor(level, palette)
        return f"{self._style(level, color)}{line}{ANSI_RESET}"

    def _paint_multi_line_gradient(self, line: str, level: LoggerLevel, steps: int) -> str:
        palette = self._palette(level)
        if palette is None or self._cursors is None:
            return self._paint_plain(line, level)
        position = self._cursors.advance(level)
        color = palette_color(palette, position, steps)
        return f"{self._style(level, color)}{line}{ANSI_RESET}"

    def _paint_inline_gradient(self, record: LogRecord, steps: int) -> str:
        palette = self._palette(record.level)
        if palette is None:
            return self._paint_plain(self._record_format.format(record), record.level)

        layout = self._record_format.format(replace(record, message=_MESSAGE_PLACEHOLDER))
        if layout.count(_MESSAGE_PLACEHOLDER) != 1:
            # Custom layout rewrote the message; color the whole line instead.
            line = self._record_format.format(record)
            return self._gradient(line, record.level, palette, steps)

        escape_message = getattr(self._record_format, "escape_message", None)
        message = escape_message(record.message) if escape_message else record.message
        head, tail = layout.split(_MESSAGE_PLACEHOLDER)
        colored = self._gradient(message, record.level, palette, steps)
        return (
            f"{self._paint_plain(head, record.level)}"
            f"{colored}"
            f"{self._paint_plain(tail, record.level)}"
        )

    def _gradient(
        self, text: str, level: LoggerLevel, palette: tuple[Rgb, ...], steps: int
    ) -> str:
        cursor = GradientCursor(steps)
        rendered: list[str] = []
        for unit in split_units(text):
            if is_control(unit[0]):
                rendered.append(unit)
                continue
            color = palette_color(palette, cursor.advance(), steps)
            rendered.append(f"{self._style(level, color)}{unit}{ANSI_RESET}")
        return "".join(rendered)
