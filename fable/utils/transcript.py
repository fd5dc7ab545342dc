"""Thread-safe narration transcript exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NarrationLine:
    """One line of narration shown to the player."""

    turn: int
    source: str   # "init", "history", or the command that produced it
    text: str


class Transcript:
    """Bounded narration buffer. Writers append; readers snapshot a slice.

    The oldest lines fall off once *limit* is reached. A session restart
    clears it via ``clear()``.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, limit: int = 500) -> None:
        self._buffer: deque[NarrationLine] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def append_many(self, turn: int, source: str, texts: list[str]) -> None:
        with self._lock:
            self._buffer.extend(NarrationLine(turn, source, t) for t in texts)

    def since_turn(self, turn: int) -> list[NarrationLine]:
        """Return all lines with turn >= *turn*."""
        with self._lock:
            return [line for line in self._buffer if line.turn >= turn]

    def latest(self, count: int = 50) -> list[NarrationLine]:
        """Return the *count* most recent lines."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
