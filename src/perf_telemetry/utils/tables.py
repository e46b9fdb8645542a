"""
Timer and Counter Tables.

Named stopwatches and named counters. Neither table ever raises on lookup:
ending an unknown timer yields 0 and reading an unknown counter yields 0.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, Tuple

from perf_telemetry.interfaces.scheduling import Clock


class TimerTable:
    """Pending start timestamps keyed by timer name."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._starts: Dict[str, float] = {}
        self._lock = threading.Lock()

    def start(self, name: str) -> float:
        """
        Record the current time under name.

        An unfinished timer with the same name is overwritten.

        Returns:
            The recorded start time (ms)
        """
        now = self._clock.now_ms()
        with self._lock:
            self._starts[name] = now
        return now

    def finish(self, name: str) -> Optional[Tuple[float, float]]:
        """
        Stop a timer.

        Returns:
            (start_ms, elapsed_ms), or None if no timer with that name is pending
        """
        with self._lock:
            started = self._starts.pop(name, None)
        if started is None:
            return None
        return started, self._clock.now_ms() - started

    def end(self, name: str) -> float:
        """
        Stop a timer.

        Returns:
            Elapsed milliseconds, or 0 if no timer with that name is pending
        """
        finished = self.finish(name)
        return finished[1] if finished else 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._starts)

    def clear(self) -> None:
        with self._lock:
            self._starts.clear()


class CounterTable:
    """Monotonic integer counters keyed by name."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, name: str) -> int:
        """Add one to a counter and return the new value."""
        with self._lock:
            value = self._counts.get(name, 0) + 1
            self._counts[name] = value
            return value

    def get(self, name: str) -> int:
        with self._lock:
            return self._counts.get(name, 0)

    def reset(self, name: str) -> None:
        """Set a counter to zero. The name stays known."""
        with self._lock:
            self._counts[name] = 0

    def as_dict(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()
