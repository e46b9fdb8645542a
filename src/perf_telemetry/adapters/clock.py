"""
Clock Adapters.

    - MonotonicClock: process-relative monotonic milliseconds
    - ManualClock: explicitly advanced time for tests and replays
"""

from __future__ import annotations

import threading
import time

_PROCESS_START = time.monotonic()


class MonotonicClock:
    """Milliseconds since this module was first imported."""

    def now_ms(self) -> float:
        return (time.monotonic() - _PROCESS_START) * 1000.0


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._lock = threading.Lock()

    def now_ms(self) -> float:
        with self._lock:
            return self._now

    def set(self, now_ms: float) -> None:
        with self._lock:
            if now_ms < self._now:
                raise ValueError(
                    f"Clock cannot move backwards ({now_ms} < {self._now})"
                )
            self._now = now_ms

    def advance(self, delta_ms: float) -> float:
        """Move forward by delta_ms and return the new time."""
        with self._lock:
            if delta_ms < 0:
                raise ValueError(f"delta_ms must be >= 0, got {delta_ms}")
            self._now += delta_ms
            return self._now
