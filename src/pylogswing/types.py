from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

LoggerLevel = Literal["TRACE", "DEBUG", "INFO", "WARN", "ERROR"]
LevelFilter = Literal["OFF", "TRACE", "DEBUG", "INFO", "WARN", "ERROR"]
Direction = Literal["ASCENDING", "DESCENDING"]

LEVEL_TRACE: LoggerLevel = "TRACE"
LEVEL_DEBUG: LoggerLevel = "DEBUG"
LEVEL_INFO: LoggerLevel = "INFO"
LEVEL_WARN: LoggerLevel = "WARN"
LEVEL_ERROR: LoggerLevel = "ERROR"
LEVEL_OFF: LevelFilter = "OFF"

LEVELS: tuple[LoggerLevel, ...] = (
    LEVEL_TRACE,
    LEVEL_DEBUG,
    LEVEL_INFO,
    LEVEL_WARN,
    LEVEL_ERROR,
)

# OFF sits above every record level so nothing passes it.
LEVEL_PRIORITY: dict[LevelFilter, int] = {
    LEVEL_TRACE: 0,
    LEVEL_DEBUG: 1,
    LEVEL_INFO: 2,
    LEVEL_WARN: 3,
    LEVEL_ERROR: 4,
    LEVEL_OFF: 5,
}

EMPHASIZED_LEVELS: frozenset[LoggerLevel] = frozenset({LEVEL_WARN, LEVEL_ERROR})

ASCENDING: Direction = "ASCENDING"
DESCENDING: Direction = "DESCENDING"


@dataclass(frozen=True)
class Rgb:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"RGB channel out of range [0, 255]: {channel}")


@dataclass(frozen=True)
class LogRecord:
    timestamp_ns: int
    level: LoggerLevel
    target: str
    message: str

    @classmethod
    def now(cls, level: LoggerLevel, target: str, message: str) -> "LogRecord":
        return cls(timestamp_ns=time.time_ns(), level=level, target=target, message=message)

    @property
    def timestamp(self) -> datetime:
        seconds, nanos = divmod(self.timestamp_ns, 1_000_000_000)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=nanos // 1000)
