"""
Advisory Dispatcher - Typed Outbound Channels.

The presentation layer subscribes per AdvisoryKind and is called for every
advisory of that kind. Delivery is fire-and-forget: a subscriber that raises
is logged and skipped, the remaining subscribers still receive the advisory,
and nothing is retried.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from perf_telemetry.domain.records import Advisory, AdvisoryKind

logger = logging.getLogger(__name__)

AdvisoryCallback = Callable[[Advisory], None]


class AdvisoryDispatcher:
    """Per-kind subscriber lists for advisories."""

    def __init__(self) -> None:
        self._subscribers: Dict[AdvisoryKind, List[AdvisoryCallback]] = {
            kind: [] for kind in AdvisoryKind
        }
        self._dispatched: Dict[AdvisoryKind, int] = {kind: 0 for kind in AdvisoryKind}
        self._lock = threading.Lock()

    def subscribe(
        self,
        kind: AdvisoryKind,
        callback: AdvisoryCallback,
    ) -> Callable[[], None]:
        """
        Register a callback for one advisory kind.

        Args:
            kind: Advisory kind to receive
            callback: Called with each Advisory

        Returns:
            Callable that removes the subscription
        """
        with self._lock:
            self._subscribers[kind].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers[kind]:
                    self._subscribers[kind].remove(callback)

        return unsubscribe

    def subscribe_all(self, callback: AdvisoryCallback) -> Callable[[], None]:
        """Register one callback for every advisory kind."""
        removers = [self.subscribe(kind, callback) for kind in AdvisoryKind]

        def unsubscribe() -> None:
            for remove in removers:
                remove()

        return unsubscribe

    def dispatch(self, advisory: Advisory) -> int:
        """
        Deliver an advisory to its subscribers.

        Returns:
            Number of subscribers that accepted it without raising
        """
        with self._lock:
            callbacks = list(self._subscribers[advisory.kind])
            self._dispatched[advisory.kind] += 1

        delivered = 0
        for callback in callbacks:
            try:
                callback(advisory)
                delivered += 1
            except Exception as e:
                logger.warning(
                    f"Advisory subscriber {callback!r} failed for "
                    f"{advisory.kind.value}: {e}"
                )
        return delivered

    def dispatched_count(self, kind: Optional[AdvisoryKind] = None) -> int:
        """Advisories dispatched so far, for one kind or all."""
        with self._lock:
            if kind is None:
                return sum(self._dispatched.values())
            return self._dispatched[kind]

    def subscriber_count(self, kind: AdvisoryKind) -> int:
        with self._lock:
            return len(self._subscribers[kind])
