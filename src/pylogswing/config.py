from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ConfigValidationError
from .formats import JSON, SIMPLE, CustomFormat, RecordFormatter
from .painter import NO_COLOR, SOLID, ColorFormat, InlineGradient, MultiLineGradient, NoColor, Solid
from .theme import BUILTIN_THEMES, SPECTRAL, Theme
from .types import LEVEL_INFO, LEVEL_OFF, LEVEL_PRIORITY, LevelFilter, LoggerLevel

_LEVEL_ALIASES = {"WARNING": "WARN"}
_RECORD_FORMATS: dict[str, RecordFormatter] = {"simple": SIMPLE, "json": JSON}
_COLOR_FORMATS: dict[str, ColorFormat] = {"none": NO_COLOR, "solid": SOLID}


def validate_level(level: str) -> LevelFilter:
    normalized = str(level).strip().upper()
    normalized = _LEVEL_ALIASES.get(normalized, normalized)
    if normalized not in LEVEL_PRIORITY:
        raise ConfigValidationError(f"Unsupported logger level: {level}")
    return normalized  # type: ignore[return-value]


def validate_record_level(level: str) -> LoggerLevel:
    normalized = validate_level(level)
    if normalized == LEVEL_OFF:
        raise ConfigValidationError("OFF is a filter threshold and cannot be used as a record level.")
    return normalized  # type: ignore[return-value]


def validate_record_format(record_format: Any) -> RecordFormatter:
    if isinstance(record_format, str):
        normalized = record_format.strip().lower()
        if normalized not in _RECORD_FORMATS:
            raise ConfigValidationError(f"Unsupported record format: {record_format}")
        return _RECORD_FORMATS[normalized]
    if callable(getattr(record_format, "format", None)):
        return record_format
    if callable(record_format):
        return CustomFormat(record_format)
    raise ConfigValidationError(
        f"record_format must be 'simple', 'json', a formatter or a callable, got {record_format!r}"
    )


def validate_color_format(color_format: Any) -> ColorFormat:
    if color_format is None:
        return NO_COLOR
    if isinstance(color_format, str):
        normalized = color_format.strip().lower()
        if normalized not in _COLOR_FORMATS:
            raise ConfigValidationError(f"Unsupported color format: {color_format}")
        return _COLOR_FORMATS[normalized]
    if isinstance(color_format, (NoColor, Solid, InlineGradient, MultiLineGradient)):
        return color_format
    raise ConfigValidationError(f"Unsupported color format: {color_format!r}")


def validate_theme(theme: Any) -> Theme:
    if isinstance(theme, str):
        normalized = theme.strip().lower()
        if normalized not in BUILTIN_THEMES:
            raise ConfigValidationError(f"Unknown theme: {theme}")
        return BUILTIN_THEMES[normalized]
    if not callable(getattr(theme, "colors_for", None)):
        raise ConfigValidationError(f"Theme must provide colors_for(level), got {theme!r}")
    return theme


@dataclass(frozen=True)
class Config:
    """
    Render configuration, fixed for the lifetime of a logger.

    Args:
        level: Minimum level rendered ("OFF", "TRACE", "DEBUG", "INFO", "WARN", "ERROR").
        record_format: "simple", "json", a formatter object or a callable(record) -> str.
        color_format: None, "none", "solid", Solid(), InlineGradient(n) or MultiLineGradient(n).
        theme: Theme object or a built-in theme name ("spectral", "dual_tone").
        use_stderr: Route WARN/ERROR lines to stderr.
    """

    level: LevelFilter = LEVEL_INFO
    record_format: RecordFormatter = SIMPLE
    color_format: ColorFormat | None = SOLID
    theme: Theme = SPECTRAL
    use_stderr: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", validate_level(self.level))
        object.__setattr__(self, "record_format", validate_record_format(self.record_format))
        object.__setattr__(self, "color_format", validate_color_format(self.color_format))
        object.__setattr__(self, "theme", validate_theme(self.theme))
        object.__setattr__(self, "use_stderr", bool(self.use_stderr))
