"""
Summarizer - Windowed Aggregates over the Metric Store.

Computes per-signal summaries over a trailing window ending at the clock's
current time. Only records with ``timestamp > now - window`` are included.
Every sub-summary is safe on empty input: it returns None (or zero counts)
instead of raising.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from perf_telemetry.domain.records import (
    ErrorKind,
    ErrorSample,
    FpsSample,
    MemorySample,
    RenderSample,
    SignalKind,
)
from perf_telemetry.domain.summaries import (
    ErrorSummary,
    FpsSummary,
    MemorySummary,
    MetricsSummary,
    RenderSummary,
)
from perf_telemetry.interfaces.scheduling import Clock
from perf_telemetry.store.metric_store import MetricStore
from perf_telemetry.utils.rounding import round_half_up, round_int, to_mb

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MS = 5 * 60 * 1000


class Summarizer:
    """Reads the store on demand; never writes to it."""

    def __init__(
        self,
        store: MetricStore,
        clock: Clock,
        window_ms: float = DEFAULT_WINDOW_MS,
    ) -> None:
        self._store = store
        self._clock = clock
        self.window_ms = window_ms

    def window_start(self, now_ms: Optional[float] = None) -> float:
        """Exclusive lower bound of the current window."""
        now = self._clock.now_ms() if now_ms is None else now_ms
        return now - self.window_ms

    def get_summary(self, now_ms: Optional[float] = None) -> MetricsSummary:
        """All sub-summaries over the same window."""
        since = self.window_start(now_ms)
        return MetricsSummary(
            memory=self.get_memory_summary(since),
            performance=self.get_render_summary(since),
            errors=self.get_error_summary(since),
            fps=self.get_fps_summary(since),
        )

    def get_memory_summary(self, since: float) -> Optional[MemorySummary]:
        samples: List[MemorySample] = self._store.since(SignalKind.MEMORY, since)
        if not samples:
            return None

        latest = samples[-1]
        average = sum(s.used for s in samples) / len(samples)
        return MemorySummary(
            current_mb=to_mb(latest.used),
            average_mb=to_mb(average),
            percentage=round_int(latest.usage_ratio * 100),
        )

    def get_render_summary(self, since: float) -> Optional[RenderSummary]:
        samples: List[RenderSample] = self._store.since(SignalKind.RENDER_TIMES, since)
        if not samples:
            return None

        durations = [s.duration for s in samples]
        return RenderSummary(
            average_render_time=round_half_up(sum(durations) / len(durations), 2),
            max_render_time=round_half_up(max(durations), 2),
            render_count=len(durations),
        )

    def get_error_summary(self, since: float) -> ErrorSummary:
        samples: List[ErrorSample] = self._store.since(SignalKind.ERRORS, since)
        runtime = sum(1 for s in samples if s.error_kind == ErrorKind.RUNTIME)
        rejections = sum(
            1 for s in samples if s.error_kind == ErrorKind.UNHANDLED_REJECTION
        )
        return ErrorSummary(
            total=len(samples),
            runtime=runtime,
            unhandled_rejection=rejections,
        )

    def get_fps_summary(self, since: float) -> Optional[FpsSummary]:
        samples: List[FpsSample] = self._store.since(SignalKind.FPS, since)
        if not samples:
            return None

        values = [s.value for s in samples]
        return FpsSummary(
            average=round_int(sum(values) / len(values)),
            minimum=min(values),
            samples=len(values),
        )
