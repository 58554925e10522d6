from __future__ import annotations

import logging
import traceback
from dataclasses import replace
from threading import RLock
from typing import Any, TextIO

from .config import Config, validate_record_level
from .errors import ConfigValidationError, LoggerAlreadyInitializedError, RecordFormatError
from .painter import LogPainter
from .types import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_PRIORITY,
    LEVEL_TRACE,
    LEVEL_WARN,
    LoggerLevel,
    LogRecord,
)
from .writer import LogWriter

TRACE_LEVEL_NUM = 5
_DEFAULT_TARGET = "main"
_DIAGNOSTIC_PREFIX = "[pylogswing]"


class SwingLogger:
    LEVEL_TRACE = LEVEL_TRACE
    LEVEL_DEBUG = LEVEL_DEBUG
    LEVEL_INFO = LEVEL_INFO
    LEVEL_WARN = LEVEL_WARN
    LEVEL_ERROR = LEVEL_ERROR

    def __init__(
        self,
        config: Config | None = None,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        **overrides: Any,
    ) -> None:
        """
        Build a logger with its own painter (and gradient state) and writer.

        Args:
            config: Render configuration. Defaults to Config().
            stdout: Primary stream override, mostly for tests.
            stderr: Error stream override; also receives diagnostics.
            overrides: Config fields replacing those of `config`, e.g. level="DEBUG".
        """
        base = config if config is not None else Config()
        self._config = replace(base, **overrides) if overrides else base
        self._painter = LogPainter(
            theme=self._config.theme,
            color_format=self._config.color_format,
            record_format=self._config.record_format,
            on_error=self._console_diagnostic,
        )
        self._writer = LogWriter(
            use_stderr=self._config.use_stderr,
            stdout=stdout,
            stderr=stderr,
            on_error=self._console_diagnostic,
        )
        self._handler: SwingHandler | None = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def painter(self) -> LogPainter:
        return self._painter

    def enabled(self, level: str) -> bool:
        try:
            normalized = validate_record_level(level)
        except ConfigValidationError:
            return False
        return LEVEL_PRIORITY[normalized] >= LEVEL_PRIORITY[self._config.level]

    def trace(self, message: str, target: str = _DEFAULT_TARGET) -> bool:
        return self.log(message, LEVEL_TRACE, target)

    def debug(self, message: str, target: str = _DEFAULT_TARGET) -> bool:
        return self.log(message, LEVEL_DEBUG, target)

    def info(self, message: str, target: str = _DEFAULT_TARGET) -> bool:
        return self.log(message, LEVEL_INFO, target)

    def warn(self, message: str, target: str = _DEFAULT_TARGET) -> bool:
        return self.log(message, LEVEL_WARN, target)

    def error(self, message: str, target: str = _DEFAULT_TARGET) -> bool:
        return self.log(message, LEVEL_ERROR, target)

    def log(self, message: str, level: LoggerLevel, target: str = _DEFAULT_TARGET) -> bool:
        """Log at a level name such as "info" or "WARNING"; unknown names and OFF raise."""
        level = validate_record_level(level)
        if not self.enabled(level):
            return False
        return self.log_record(LogRecord.now(level=level, target=target, message=str(message)))

    def log_record(self, record: LogRecord) -> bool:
        """
        Render and write one record.

        Failures are isolated to this record: it is dropped, a diagnostic is
        written to stderr and False is returned.
        """
        level = validate_record_level(record.level)
        if level != record.level:
            record = replace(record, level=level)
        if not self.enabled(level):
            return False
        try:
            line = self._painter.paint(record)
        except RecordFormatError as exc:
            self._console_diagnostic(
                f"Dropped {record.level} record from '{record.target}': {exc}"
            )
            return False
        except Exception as exc:
            self._console_diagnostic(
                f"Failed to render {record.level} record from '{record.target}': {exc!r}"
            )
            return False
        return self._writer.write(record.level, line)

    def init(self) -> "SwingLogger":
        """
        Register this logger process-wide and route stdlib `logging` into it.

        Only one logger may be registered per process.
        """
        global _global_logger
        with _global_lock:
            if _global_logger is not None:
                raise LoggerAlreadyInitializedError(
                    "A pylogswing logger is already registered for this process."
                )
            _global_logger = self
            logging.addLevelName(TRACE_LEVEL_NUM, LEVEL_TRACE)
            self._handler = SwingHandler(self)
            root = logging.getLogger()
            root.addHandler(self._handler)
            # Level filtering happens in enabled(); let every record through.
            root.setLevel(TRACE_LEVEL_NUM)
        return self

    @property
    def handler(self) -> "SwingHandler | None":
        return self._handler

    def _console_diagnostic(self, message: str) -> None:
        self._writer.write_diagnostic(f"{_DIAGNOSTIC_PREFIX} {message}")


def level_from_stdlib(levelno: int) -> LoggerLevel:
    if levelno <= TRACE_LEVEL_NUM:
        return LEVEL_TRACE
    if levelno <= logging.DEBUG:
        return LEVEL_DEBUG
    if levelno <= logging.INFO:
        return LEVEL_INFO
    if levelno <= logging.WARNING:
        return LEVEL_WARN
    return LEVEL_ERROR


def record_from_stdlib(record: logging.LogRecord) -> LogRecord:
    message = record.getMessage()
    if record.exc_info and record.exc_info[0] is not None:
        exc_text = "".join(traceback.format_exception(*record.exc_info)).rstrip()
        message = f"{message}\n{exc_text}"
    if record.stack_info:
        message = f"{message}\n{record.stack_info.rstrip()}"
    return LogRecord(
        timestamp_ns=int(record.created * 1_000_000_000),
        level=level_from_stdlib(record.levelno),
        target=record.name,
        message=message,
    )


class SwingHandler(logging.Handler):
    """Feeds stdlib `logging` records into a SwingLogger."""

    def __init__(self, swing_logger: SwingLogger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.swing_logger = swing_logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            converted = record_from_stdlib(record)
        except Exception:
            self.handleError(record)
            return
        self.swing_logger.log_record(converted)


_global_logger: SwingLogger | None = None
_global_lock = RLock()


def get_logger() -> SwingLogger:
    with _global_lock:
        if _global_logger is None:
            SwingLogger().init()
        assert _global_logger is not None
        return _global_logger
