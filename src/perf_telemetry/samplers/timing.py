"""
Performance Entry Sampler - Render, Network and Paint Timings.

Consumes timing entries from the host's performance-notification channel:
    - measure  -> RenderSample
    - resource -> NetworkSample (missing transfer size counts as 0)
    - paint    -> logged only, no record is retained
    - navigation entries are ignored
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from perf_telemetry.domain.records import (
    EntryType,
    NetworkSample,
    PerformanceEntry,
    RenderSample,
)
from perf_telemetry.interfaces.scheduling import Clock
from perf_telemetry.interfaces.sources import NotificationSource, Unsubscribe
from perf_telemetry.samplers.base import RecordSink, Sampler

logger = logging.getLogger(__name__)


class PerformanceEntrySampler(Sampler):
    """Turns performance-timing entries into render and network records."""

    name = "performance"

    def __init__(
        self,
        sink: RecordSink,
        clock: Clock,
        source: NotificationSource[PerformanceEntry],
        event_log: Optional[Any] = None,
    ) -> None:
        """
        Args:
            sink: Monitor ingestion callable
            clock: Time source
            source: Channel delivering PerformanceEntry notifications
            event_log: EventLog for paint metrics (optional)
        """
        super().__init__(sink, clock)
        self._source = source
        self._event_log = event_log
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def available(self) -> bool:
        return self._source.available

    def _activate(self) -> None:
        self._unsubscribe = self._source.subscribe(self.handle_entry)

    def _deactivate(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle_entry(self, entry: PerformanceEntry) -> bool:
        """
        Process one timing entry.

        Returns:
            True if a record was stored
        """
        if entry.entry_type == EntryType.MEASURE:
            return self.emit(
                RenderSample(
                    name=entry.name,
                    duration=entry.duration,
                    timestamp=entry.start_time,
                )
            )

        if entry.entry_type == EntryType.RESOURCE:
            return self.emit(
                NetworkSample(
                    name=entry.name,
                    duration=entry.duration,
                    transfer_size=entry.transfer_size or 0,
                    timestamp=entry.start_time,
                )
            )

        if entry.entry_type == EntryType.PAINT:
            self._record_paint(entry)

        return False

    def _record_paint(self, entry: PerformanceEntry) -> None:
        """Paint timings are reported through the log only."""
        if self._event_log:
            self._event_log.log_event(
                "paint_metric",
                {"name": entry.name, "start_time": entry.start_time},
            )
        else:
            logger.info(f"Paint metric: {entry.name} - {entry.start_time}ms")
