from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol

from .errors import RecordFormatError
from .types import LogRecord


class RecordFormatter(Protocol):
    def format(self, record: LogRecord) -> str:
        ...


def format_timestamp(timestamp_ns: int) -> str:
    """Render epoch nanoseconds as ISO-8601 UTC with nanosecond precision."""
    try:
        seconds, nanos = divmod(int(timestamp_ns), 1_000_000_000)
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError, TypeError) as exc:
        raise RecordFormatError(
            f"Unable to format timestamp {timestamp_ns!r}: {exc}"
        ) from exc
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{nanos:09d}Z"


class SimpleFormat:
    def format(self, record: LogRecord) -> str:
        return (
            f"{format_timestamp(record.timestamp_ns)} "
            f"[{record.target}] {record.level.upper()} - {record.message}"
        )

    @staticmethod
    def escape_message(message: str) -> str:
        return message

    def __repr__(self) -> str:
        return "SimpleFormat()"


class JsonFormat:
    def format(self, record: LogRecord) -> str:
        payload = {
            "time": format_timestamp(record.timestamp_ns),
            "level": str(record.level).upper(),
            "target": str(record.target),
            "message": str(record.message),
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def escape_message(message: str) -> str:
        return json.dumps(message, ensure_ascii=False)[1:-1]

    def __repr__(self) -> str:
        return "JsonFormat()"


class CustomFormat:
    """Caller-supplied layout. Exceptions raised by the function propagate."""

    def __init__(self, func: Callable[[LogRecord], str]) -> None:
        if not callable(func):
            raise TypeError("CustomFormat requires a callable.")
        self._func = func

    def format(self, record: LogRecord) -> str:
        return self._func(record)

    @staticmethod
    def escape_message(message: str) -> str:
        return message

    def __repr__(self) -> str:
        return f"CustomFormat({self._func!r})"


SIMPLE = SimpleFormat()
JSON = JsonFormat()
