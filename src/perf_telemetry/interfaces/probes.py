"""
Probe Protocols.

Probes read the current state of a platform capability on demand. A probe
for a capability the platform lacks reports ``available = False`` and the
sampler that needs it is never activated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class MemoryReading:
    """Heap figures in bytes."""
    used: int
    total: int
    limit: int


@runtime_checkable
class MemoryProbe(Protocol):
    """Reads current heap usage."""

    @property
    def available(self) -> bool:
        ...

    def read(self) -> Optional[MemoryReading]:
        """
        Read heap usage.

        Returns:
            MemoryReading, or None if the figures cannot be read right now
        """
        ...


@runtime_checkable
class DocumentProbe(Protocol):
    """Reads the size of the presentation surface."""

    @property
    def available(self) -> bool:
        ...

    def element_count(self) -> int:
        """Total number of elements currently in the document."""
        ...
