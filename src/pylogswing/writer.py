from __future__ import annotations

import sys
from collections.abc import Callable
from threading import Lock
from typing import TextIO

from .types import EMPHASIZED_LEVELS, LoggerLevel


class LogWriter:
    """
    Write rendered lines to stdout/stderr.

    Args:
        use_stderr: Send WARN/ERROR lines to stderr instead of stdout.
        stdout: Primary stream. Defaults to the current sys.stdout at write time.
        stderr: Error stream. Defaults to the current sys.stderr at write time.
        on_error: Receives a description of failed writes.
    """

    def __init__(
        self,
        use_stderr: bool,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.use_stderr = bool(use_stderr)
        self._stdout = stdout
        self._stderr = stderr
        self._on_error = on_error
        # One lock for both streams so stdout and stderr lines never interleave.
        self._write_lock = Lock()

    def stream_for(self, level: LoggerLevel) -> TextIO:
        if self.use_stderr and level in EMPHASIZED_LEVELS:
            return self._stderr if self._stderr is not None else sys.stderr
        return self._stdout if self._stdout is not None else sys.stdout

    def write(self, level: LoggerLevel, line: str) -> bool:
        stream = self.stream_for(level)
        try:
            with self._write_lock:
                stream.write(f"{line}\n")
                stream.flush()
        except Exception as exc:
            if self._on_error is not None:
                self._on_error(f"Failed to write {level} log line: {exc!r}")
            return False
        return True

    def write_diagnostic(self, message: str) -> None:
        """Write an internal diagnostic to stderr, serialized with log lines."""
        stream = self._stderr if self._stderr is not None else sys.stderr
        try:
            with self._write_lock:
                stream.write(f"{message}\n")
                stream.flush()
        except Exception:
            # Nowhere left to report to.
            return
