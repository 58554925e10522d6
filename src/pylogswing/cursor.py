from __future__ import annotations

from threading import Lock

from .types import ASCENDING, DESCENDING, Direction, LoggerLevel


class GradientCursor:
    """
    Ping-pong position over [0, steps].

    Positions run 0, 1, ..., steps, steps - 1, ..., 0, 1, ... and the direction
    flips on arrival at an endpoint, so the waveform has period 2 * steps.
    Not thread-safe on its own; shared cursors live in a CursorTable.
    """

    def __init__(self, steps: int) -> None:
        if steps <= 0:
            raise ValueError("steps must be > 0.")
        self.steps = steps
        self.position = 0
        self.direction: Direction = ASCENDING

    @property
    def state(self) -> tuple[int, Direction]:
        return self.position, self.direction

    def advance(self) -> int:
        """Return the position to render with, then move one tick."""
        current = self.position
        if self.direction == ASCENDING:
            self.position += 1
            if self.position >= self.steps:
                self.position = self.steps
                self.direction = DESCENDING
        else:
            self.position -= 1
            if self.position <= 0:
                self.position = 0
                self.direction = ASCENDING
        return current


class CursorTable:
    def __init__(self, steps: int) -> None:
        self._steps = steps
        self._cursors: dict[LoggerLevel, GradientCursor] = {}
        self._lock = Lock()

    @property
    def steps(self) -> int:
        return self._steps

    def advance(self, level: LoggerLevel) -> int:
        with self._lock:
            cursor = self._cursors.get(level)
            if cursor is None:
                cursor = GradientCursor(self._steps)
                self._cursors[level] = cursor
            return cursor.advance()

    def state(self, level: LoggerLevel) -> tuple[int, Direction]:
        with self._lock:
            cursor = self._cursors.get(level)
            if cursor is None:
                return 0, ASCENDING
            return cursor.state
