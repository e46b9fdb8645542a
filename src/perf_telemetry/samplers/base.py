"""
Sampler Base - Lifecycle shared by all samplers.

A sampler turns an external notification or a timer tick into a metric
record and hands it to a sink. The sink belongs to the monitor and decides
whether the record is accepted (it refuses records once monitoring stopped).

Design Notes:
    - start() is skipped when the needed capability is unavailable
    - start() and stop() are idempotent
    - Samplers never touch each other or the store directly
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from perf_telemetry.domain.records import MetricRecord
from perf_telemetry.interfaces.scheduling import Clock

logger = logging.getLogger(__name__)

RecordSink = Callable[[MetricRecord], bool]


class Sampler(ABC):
    """Base class for samplers."""

    name: str = "sampler"

    def __init__(self, sink: RecordSink, clock: Clock) -> None:
        self._sink = sink
        self._clock = clock
        self._running = False

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether the capabilities this sampler needs are present."""

    @abstractmethod
    def _activate(self) -> None:
        """Attach to notification sources or schedule ticks."""

    @abstractmethod
    def _deactivate(self) -> None:
        """Detach everything attached by _activate."""

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """
        Activate the sampler.

        Returns:
            True if the sampler is running afterwards
        """
        if self._running:
            return True
        if not self.available:
            logger.debug(f"Sampler {self.name} unavailable, not activated")
            return False
        self._activate()
        self._running = True
        logger.debug(f"Sampler {self.name} started")
        return True

    def stop(self) -> None:
        """Deactivate the sampler. Safe when already stopped."""
        if not self._running:
            return
        self._running = False
        self._deactivate()
        logger.debug(f"Sampler {self.name} stopped")

    def emit(self, record: MetricRecord) -> bool:
        """Hand a record to the sink; True if it was accepted."""
        return self._sink(record)
