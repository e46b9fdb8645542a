"""
Metric Store - Bounded Per-Signal Buffers.

Holds one ordered sequence per SignalKind. Every insertion appends and then
prunes the sequence back to ``max_entries`` inside the same critical
section, so ``len(sequence) <= max_entries`` holds after every call.

Design Notes:
    - Single mutation point (append)
    - Oldest-evicted-first once the cap is exceeded
    - One lock guards the whole store
    - Insert/evict statistics per signal
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional

from perf_telemetry.domain.records import MetricRecord, SignalKind, signal_of

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000


@dataclass
class StoreStats:
    """Store statistics."""

    inserted: Dict[SignalKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in SignalKind}
    )
    evicted: Dict[SignalKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in SignalKind}
    )

    @property
    def total_evicted(self) -> int:
        return sum(self.evicted.values())


class MetricStore:
    """
    Bounded FIFO buffers, one per signal kind.

    Example:
        store = MetricStore(max_entries=2)
        store.append(FpsSample(value=60, timestamp=1.0))
        store.get(SignalKind.FPS)
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._sequences: Dict[SignalKind, Deque[MetricRecord]] = {
            kind: deque() for kind in SignalKind
        }
        self._stats = StoreStats()
        self._lock = threading.RLock()

    def append(self, record: MetricRecord) -> SignalKind:
        """
        Append a record and prune its sequence.

        Args:
            record: Any metric record

        Returns:
            The signal kind the record was stored under
        """
        kind = signal_of(record)
        with self._lock:
            sequence = self._sequences[kind]
            sequence.append(record)
            self._stats.inserted[kind] += 1
            self._prune(kind, sequence)
        return kind

    def _prune(self, kind: SignalKind, sequence: Deque[MetricRecord]) -> None:
        """Drop from the front until the cap holds. Caller holds the lock."""
        overflow = len(sequence) - self.max_entries
        if overflow <= 0:
            return
        for _ in range(overflow):
            sequence.popleft()
        self._stats.evicted[kind] += overflow
        logger.debug(f"Pruned {overflow} {kind.value} record(s)")

    def get(self, kind: SignalKind) -> List[MetricRecord]:
        """Copy of one sequence, oldest first."""
        with self._lock:
            return list(self._sequences[kind])

    def since(self, kind: SignalKind, since_ms: float) -> List[MetricRecord]:
        """Records of one kind with timestamp strictly after since_ms."""
        with self._lock:
            return [r for r in self._sequences[kind] if r.timestamp > since_ms]

    def latest(self, kind: SignalKind) -> Optional[MetricRecord]:
        """Most recent record of one kind, or None."""
        with self._lock:
            sequence = self._sequences[kind]
            return sequence[-1] if sequence else None

    def size(self, kind: SignalKind) -> int:
        with self._lock:
            return len(self._sequences[kind])

    def snapshot(self) -> Dict[SignalKind, List[MetricRecord]]:
        """Consistent copy of every sequence."""
        with self._lock:
            return {kind: list(seq) for kind, seq in self._sequences.items()}

    def clear(self) -> None:
        """Empty every sequence and reset statistics."""
        with self._lock:
            for sequence in self._sequences.values():
                sequence.clear()
            self._stats = StoreStats()

    @property
    def stats(self) -> StoreStats:
        """Copy of current statistics."""
        with self._lock:
            return StoreStats(
                inserted=dict(self._stats.inserted),
                evicted=dict(self._stats.evicted),
            )
