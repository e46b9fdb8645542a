"""
Probe Adapters.

    - PsutilMemoryProbe: process memory via psutil
    - NullMemoryProbe: memory introspection unsupported
    - CallableDocumentProbe: element count supplied by the host UI
    - NullDocumentProbe: no document to observe
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import psutil

from perf_telemetry.interfaces.probes import MemoryReading

logger = logging.getLogger(__name__)


class PsutilMemoryProbe:
    """
    Process memory figures.

    used = resident set size, total = virtual memory size,
    limit = physical memory of the machine.
    """

    def __init__(self, pid: Optional[int] = None) -> None:
        self._process = psutil.Process(pid)

    @property
    def available(self) -> bool:
        return True

    def read(self) -> Optional[MemoryReading]:
        try:
            info = self._process.memory_info()
            limit = psutil.virtual_memory().total
        except psutil.Error as e:
            logger.warning(f"Memory probe failed: {e}")
            return None
        return MemoryReading(used=info.rss, total=info.vms, limit=limit)


class NullMemoryProbe:
    """Memory introspection not supported."""

    @property
    def available(self) -> bool:
        return False

    def read(self) -> Optional[MemoryReading]:
        return None


class CallableDocumentProbe:
    """Element count read from a host-provided callable."""

    def __init__(self, count_elements: Callable[[], int]) -> None:
        self._count_elements = count_elements

    @property
    def available(self) -> bool:
        return True

    def element_count(self) -> int:
        return int(self._count_elements())


class NullDocumentProbe:
    """No document available."""

    @property
    def available(self) -> bool:
        return False

    def element_count(self) -> int:
        return 0
