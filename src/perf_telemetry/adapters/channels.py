"""
Notification Channel Adapters.

    - CallbackChannel: in-process channel the host publishes notifications into
    - NullSource: stands in for a notification feature the platform lacks
    - IntervalFrameSource: frame ticks generated from a scheduler task
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, TypeVar

from perf_telemetry.interfaces.scheduling import Clock, Scheduler
from perf_telemetry.interfaces.sources import Unsubscribe

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CallbackChannel(Generic[T]):
    """
    Fan-out channel for host notifications.

    Example:
        entries = CallbackChannel()
        entries.publish(PerformanceEntry(entry_type="measure", ...))
    """

    def __init__(self, name: str = "channel") -> None:
        self.name = name
        self._callbacks: List[Callable[[T], None]] = []
        self._lock = threading.Lock()

    @property
    def available(self) -> bool:
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def publish(self, notification: T) -> int:
        """
        Deliver a notification to every subscriber.

        Returns:
            Number of subscribers notified
        """
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(notification)
        return len(callbacks)

    def publish_many(self, notifications: List[T]) -> None:
        for notification in notifications:
            self.publish(notification)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)


class NullSource(Generic[T]):
    """Source for an unsupported feature: unavailable, never notifies."""

    @property
    def available(self) -> bool:
        return False

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        return lambda: None


class IntervalFrameSource:
    """Frame ticks at a fixed rate, timestamped with the clock."""

    def __init__(
        self,
        scheduler: Scheduler,
        clock: Clock,
        interval_ms: float = 1000 / 60,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self.interval_ms = interval_ms

    @property
    def available(self) -> bool:
        return True

    def subscribe(self, callback: Callable[[float], None]) -> Unsubscribe:
        task = self._scheduler.call_every(
            self.interval_ms, lambda: callback(self._clock.now_ms())
        )
        return task.cancel
