"""
Scheduler Adapters.

    - ThreadingScheduler: each repeating task runs on its own daemon thread
    - ManualScheduler: tasks fire only when a ManualClock is advanced

Design Notes:
    - cancel() only signals the task; it never joins the thread, so it is
      safe to call while holding locks the task may be waiting on
    - A failing callback is logged and the task keeps running
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from perf_telemetry.adapters.clock import ManualClock

logger = logging.getLogger(__name__)


class _RepeatingTask(threading.Thread):
    """Daemon thread invoking a callback every interval."""

    def __init__(self, interval_ms: float, callback: Callable[[], None]) -> None:
        super().__init__(daemon=True, name=f"perf-telemetry-task-{id(callback):x}")
        self._interval_s = interval_ms / 1000.0
        self._callback = callback
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self._interval_s):
            try:
                self._callback()
            except Exception as e:
                logger.error(f"Scheduled task {self.name} failed: {e}", exc_info=True)

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()


class ThreadingScheduler:
    """Runs repeating tasks on daemon threads."""

    def __init__(self) -> None:
        self._tasks: List[_RepeatingTask] = []
        self._lock = threading.Lock()

    def call_every(
        self,
        interval_ms: float,
        callback: Callable[[], None],
    ) -> _RepeatingTask:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        task = _RepeatingTask(interval_ms, callback)
        with self._lock:
            self._tasks = [t for t in self._tasks if not t.cancelled]
            self._tasks.append(task)
        task.start()
        return task

    def shutdown(self) -> None:
        """Cancel every task started by this scheduler."""
        with self._lock:
            tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()


@dataclass
class _ManualTask:
    interval_ms: float
    callback: Callable[[], None]
    next_due: float
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler driven by a ManualClock.

    Example:
        clock = ManualClock()
        scheduler = ManualScheduler(clock)
        scheduler.call_every(1000, tick)
        scheduler.advance(3000)  # tick runs three times
    """

    def __init__(self, clock: Optional[ManualClock] = None) -> None:
        self.clock = clock or ManualClock()
        self._tasks: List[_ManualTask] = []

    def call_every(
        self,
        interval_ms: float,
        callback: Callable[[], None],
    ) -> _ManualTask:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        task = _ManualTask(
            interval_ms=interval_ms,
            callback=callback,
            next_due=self.clock.now_ms() + interval_ms,
        )
        self._tasks.append(task)
        return task

    def advance(self, delta_ms: float) -> int:
        """
        Move the clock forward, firing due tasks in time order.

        Returns:
            Number of callbacks invoked
        """
        target = self.clock.now_ms() + delta_ms
        fired = 0
        while True:
            due = [t for t in self._tasks if not t.cancelled and t.next_due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.next_due)
            self.clock.set(task.next_due)
            task.next_due += task.interval_ms
            task.callback()
            fired += 1
        self.clock.set(target)
        self._tasks = [t for t in self._tasks if not t.cancelled]
        return fired

    @property
    def active_tasks(self) -> int:
        return sum(1 for t in self._tasks if not t.cancelled)
