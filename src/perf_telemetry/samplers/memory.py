"""
Memory Sampler - Periodic Heap Snapshots.

Every sampling interval reads the memory probe and stores a MemorySample.
Threshold evaluation of the sample happens in the monitor's ingestion path.
"""

from __future__ import annotations

from typing import Optional

from perf_telemetry.domain.records import MemorySample
from perf_telemetry.interfaces.probes import MemoryProbe
from perf_telemetry.interfaces.scheduling import Clock, Scheduler, TaskHandle
from perf_telemetry.samplers.base import RecordSink, Sampler

DEFAULT_INTERVAL_MS = 30_000


class MemorySampler(Sampler):
    """Polls heap usage on a fixed interval."""

    name = "memory"

    def __init__(
        self,
        sink: RecordSink,
        clock: Clock,
        scheduler: Scheduler,
        probe: MemoryProbe,
        interval_ms: float = DEFAULT_INTERVAL_MS,
    ) -> None:
        super().__init__(sink, clock)
        self._scheduler = scheduler
        self._probe = probe
        self.interval_ms = interval_ms
        self._task: Optional[TaskHandle] = None

    @property
    def available(self) -> bool:
        return self._probe.available

    def _activate(self) -> None:
        self._task = self._scheduler.call_every(self.interval_ms, self._tick)

    def _deactivate(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _tick(self) -> None:
        self.sample_now()

    def sample_now(self) -> Optional[MemorySample]:
        """
        Take one memory sample immediately.

        Returns:
            The sample if it was stored, else None
        """
        reading = self._probe.read()
        if reading is None:
            return None
        sample = MemorySample(
            used=reading.used,
            total=reading.total,
            limit=reading.limit,
            timestamp=self._clock.now_ms(),
        )
        return sample if self.emit(sample) else None
