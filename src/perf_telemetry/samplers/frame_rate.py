"""
Frame-Rate Sampler - Continuous Frame Counter.

Counts frame ticks and, once at least one window (default 1000 ms) of
wall-clock time has elapsed, stores ``round(frames * 1000 / elapsed)`` as an
FpsSample and starts a new window. The frame subscription is cancelled by
stop(); no further tick is processed afterwards.
"""

from __future__ import annotations

import threading
from typing import Optional

from perf_telemetry.domain.records import FpsSample
from perf_telemetry.interfaces.scheduling import Clock
from perf_telemetry.interfaces.sources import NotificationSource, Unsubscribe
from perf_telemetry.samplers.base import RecordSink, Sampler
from perf_telemetry.utils.rounding import round_int

DEFAULT_WINDOW_MS = 1000


class FrameRateSampler(Sampler):
    """Computes frames per second from frame ticks."""

    name = "fps"

    def __init__(
        self,
        sink: RecordSink,
        clock: Clock,
        source: NotificationSource[float],
        window_ms: float = DEFAULT_WINDOW_MS,
    ) -> None:
        super().__init__(sink, clock)
        self._source = source
        self.window_ms = window_ms
        self._frames = 0
        self._window_start = 0.0
        self._lock = threading.Lock()
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def available(self) -> bool:
        return self._source.available

    def _activate(self) -> None:
        self.reset_window()
        self._unsubscribe = self._source.subscribe(self.on_frame)

    def _deactivate(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def reset_window(self, now_ms: Optional[float] = None) -> None:
        with self._lock:
            self._frames = 0
            self._window_start = self._clock.now_ms() if now_ms is None else now_ms

    def on_frame(self, now_ms: Optional[float] = None) -> Optional[FpsSample]:
        """
        Count one frame.

        Args:
            now_ms: Frame timestamp (clock time if omitted)

        Returns:
            The FpsSample stored when this frame closed a window, else None
        """
        if not self._running:
            return None
        now = self._clock.now_ms() if now_ms is None else now_ms

        with self._lock:
            self._frames += 1
            elapsed = now - self._window_start
            if elapsed < self.window_ms:
                return None
            fps = round_int(self._frames * 1000 / elapsed)
            self._frames = 0
            self._window_start = now

        sample = FpsSample(value=fps, timestamp=now)
        return sample if self.emit(sample) else None

    @property
    def frames_in_window(self) -> int:
        with self._lock:
            return self._frames
