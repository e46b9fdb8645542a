"""
Notification Source Protocols.

Event-driven samplers subscribe to sources that push notifications at them:
performance-timing entries, DOM mutation batches, frame ticks and uncaught
errors. Subscribing returns a zero-argument callable that detaches the
subscription.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

Unsubscribe = Callable[[], None]

RuntimeErrorCallback = Callable[[str, Optional[str], Optional[int], Optional[int]], None]
RejectionCallback = Callable[[Any], None]


@runtime_checkable
class NotificationSource(Protocol[T]):
    """Pushes notifications of one type to a subscriber."""

    @property
    def available(self) -> bool:
        ...

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """
        Register callback for every future notification.

        Args:
            callback: Called once per notification

        Returns:
            Callable that detaches the subscription (idempotent)
        """
        ...


@runtime_checkable
class ErrorSource(Protocol):
    """Reports uncaught runtime errors and unhandled async rejections."""

    @property
    def available(self) -> bool:
        ...

    def subscribe(
        self,
        on_runtime_error: RuntimeErrorCallback,
        on_rejection: RejectionCallback,
    ) -> Unsubscribe:
        """
        Register error callbacks.

        Args:
            on_runtime_error: Called with (message, filename, line, column)
            on_rejection: Called with the rejection reason

        Returns:
            Callable that detaches both callbacks (idempotent)
        """
        ...
