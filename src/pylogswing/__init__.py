from .color import NamedColor, lerp, palette_color
from .config import Config
from .cursor import CursorTable, GradientCursor
from .errors import (
    ConfigValidationError,
    LoggerAlreadyInitializedError,
    RecordFormatError,
    SwingLogError,
    ThemeError,
)
from .formats import JSON, SIMPLE, CustomFormat, JsonFormat, RecordFormatter, SimpleFormat
from .logger import TRACE_LEVEL_NUM, SwingHandler, SwingLogger, get_logger
from .painter import (
    NO_COLOR,
    SOLID,
    ColorFormat,
    InlineGradient,
    LogPainter,
    MultiLineGradient,
    NoColor,
    Solid,
)
from .theme import DUAL_TONE, SPECTRAL, PaletteTheme, Theme
from .types import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_OFF,
    LEVEL_TRACE,
    LEVEL_WARN,
    LevelFilter,
    LoggerLevel,
    LogRecord,
    Rgb,
)
from .version import __version__
from .writer import LogWriter


def init_logger(config: Config | None = None, **overrides) -> SwingLogger:
    return SwingLogger(config, **overrides).init()


__all__ = [
    "SwingLogger",
    "SwingHandler",
    "get_logger",
    "init_logger",
    "Config",
    "LogRecord",
    "LoggerLevel",
    "LevelFilter",
    "Rgb",
    "NamedColor",
    "lerp",
    "palette_color",
    "Theme",
    "PaletteTheme",
    "SPECTRAL",
    "DUAL_TONE",
    "GradientCursor",
    "CursorTable",
    "RecordFormatter",
    "SimpleFormat",
    "JsonFormat",
    "CustomFormat",
    "SIMPLE",
    "JSON",
    "ColorFormat",
    "NoColor",
    "Solid",
    "InlineGradient",
    "MultiLineGradient",
    "NO_COLOR",
    "SOLID",
    "LogPainter",
    "LogWriter",
    "LEVEL_TRACE",
    "LEVEL_DEBUG",
    "LEVEL_INFO",
    "LEVEL_WARN",
    "LEVEL_ERROR",
    "LEVEL_OFF",
    "TRACE_LEVEL_NUM",
    "SwingLogError",
    "ConfigValidationError",
    "ThemeError",
    "RecordFormatError",
    "LoggerAlreadyInitializedError",
    "__version__",
]
