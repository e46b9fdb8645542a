"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests. Time is always
driven by a ManualClock / ManualScheduler pair so tests are deterministic.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from perf_telemetry.adapters.channels import CallbackChannel
from perf_telemetry.adapters.clock import ManualClock
from perf_telemetry.adapters.probes import CallableDocumentProbe
from perf_telemetry.adapters.scheduler import ManualScheduler
from perf_telemetry.config.models import MonitorConfig
from perf_telemetry.domain.records import Advisory, AdvisoryKind
from perf_telemetry.interfaces.probes import MemoryReading
from perf_telemetry.monitor import MonitorCapabilities, PerformanceMonitor
from perf_telemetry.observability.event_log import EventLog


class FakeMemoryProbe:
    """Memory probe returning a settable reading."""

    def __init__(self, used: int = 100, total: int = 200, limit: int = 1000) -> None:
        self.reading: Optional[MemoryReading] = MemoryReading(used, total, limit)
        self.reads = 0

    @property
    def available(self) -> bool:
        return True

    def read(self) -> Optional[MemoryReading]:
        self.reads += 1
        return self.reading

    def set(self, used: int, limit: int = 1000, total: Optional[int] = None) -> None:
        self.reading = MemoryReading(used, total if total is not None else used, limit)


class FakeErrorSource:
    """Error source that tests trigger by hand."""

    def __init__(self) -> None:
        self.on_runtime_error = None
        self.on_rejection = None
        self.unsubscribed = 0

    @property
    def available(self) -> bool:
        return True

    def subscribe(self, on_runtime_error, on_rejection):
        self.on_runtime_error = on_runtime_error
        self.on_rejection = on_rejection

        def unsubscribe() -> None:
            self.unsubscribed += 1
            self.on_runtime_error = None
            self.on_rejection = None

        return unsubscribe

    def raise_runtime(self, message: str, filename: str = "app.py", line: int = 1, column: int = 0) -> None:
        if self.on_runtime_error:
            self.on_runtime_error(message, filename, line, column)

    def reject(self, reason) -> None:
        if self.on_rejection:
            self.on_rejection(reason)


class AdvisoryRecorder:
    """Collects advisories delivered to it."""

    def __init__(self) -> None:
        self.received: List[Advisory] = []

    def __call__(self, advisory: Advisory) -> None:
        self.received.append(advisory)

    def of_kind(self, kind: AdvisoryKind) -> List[Advisory]:
        return [a for a in self.received if a.kind == kind]


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at t=0."""
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> ManualScheduler:
    """Manual scheduler bound to the shared clock."""
    return ManualScheduler(clock)


@pytest.fixture
def memory_probe() -> FakeMemoryProbe:
    return FakeMemoryProbe()


@pytest.fixture
def error_source() -> FakeErrorSource:
    return FakeErrorSource()


@pytest.fixture
def element_count() -> List[int]:
    """Mutable element count read by the document probe."""
    return [120]


@pytest.fixture
def capabilities(
    clock: ManualClock,
    scheduler: ManualScheduler,
    memory_probe: FakeMemoryProbe,
    error_source: FakeErrorSource,
    element_count: List[int],
) -> MonitorCapabilities:
    """Deterministic capabilities with host channels the test publishes into."""
    return MonitorCapabilities(
        clock=clock,
        scheduler=scheduler,
        memory_probe=memory_probe,
        document_probe=CallableDocumentProbe(lambda: element_count[0]),
        performance_entries=CallbackChannel("performance"),
        mutations=CallbackChannel("mutations"),
        frames=CallbackChannel("frames"),
        errors=error_source,
    )


@pytest.fixture
def default_config() -> MonitorConfig:
    return MonitorConfig()


@pytest.fixture
def event_log() -> EventLog:
    return EventLog(use_json=True, session_id="test-session")


@pytest.fixture
def monitor(
    default_config: MonitorConfig,
    capabilities: MonitorCapabilities,
    event_log: EventLog,
) -> PerformanceMonitor:
    """Monitor with deterministic capabilities (not started)."""
    return PerformanceMonitor(
        config=default_config,
        capabilities=capabilities,
        event_log=event_log,
    )


@pytest.fixture
def advisories() -> AdvisoryRecorder:
    return AdvisoryRecorder()


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"
