"""
Clock and Scheduler Protocols.

Defines the time sources the monitor depends on. Polling samplers never
sleep or spawn threads themselves; they ask a Scheduler for a repeating
task and read time from a Clock.

Design Notes:
    - Clock returns monotonic milliseconds since process start
    - Repeating tasks are cancelled through the returned handle
    - Cancellation is idempotent
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Monotonic time source."""

    def now_ms(self) -> float:
        """Milliseconds since process start."""
        ...


@runtime_checkable
class TaskHandle(Protocol):
    """Handle of a scheduled repeating task."""

    def cancel(self) -> None:
        """Stop the task. Safe to call more than once."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Periodic task primitive."""

    def call_every(
        self,
        interval_ms: float,
        callback: Callable[[], None],
    ) -> TaskHandle:
        """
        Run callback every interval_ms until the handle is cancelled.

        Args:
            interval_ms: Period between invocations
            callback: Zero-argument callable

        Returns:
            TaskHandle used to cancel the task
        """
        ...
