"""
Interfaces Layer - Capability Protocols.

The monitor receives every platform capability as an injected object
implementing one of these protocols. A missing platform feature is
represented by a null implementation, never by branching on the environment.

Protocols:
    - Clock, Scheduler, TaskHandle: Time and periodic tasks
    - MemoryProbe, DocumentProbe: On-demand readings
    - NotificationSource, ErrorSource: Pushed notifications
"""

from perf_telemetry.interfaces.probes import (
    DocumentProbe,
    MemoryProbe,
    MemoryReading,
)
from perf_telemetry.interfaces.scheduling import Clock, Scheduler, TaskHandle
from perf_telemetry.interfaces.sources import (
    ErrorSource,
    NotificationSource,
    Unsubscribe,
)

__all__ = [
    "Clock",
    "DocumentProbe",
    "ErrorSource",
    "MemoryProbe",
    "MemoryReading",
    "NotificationSource",
    "Scheduler",
    "TaskHandle",
    "Unsubscribe",
]
