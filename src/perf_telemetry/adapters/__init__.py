"""
Adapters Package - Capability Implementations.

Concrete implementations of the protocols in the interfaces package,
following the Ports & Adapters pattern.

Time:
    - MonotonicClock / ManualClock
    - ThreadingScheduler / ManualScheduler

Notifications:
    - CallbackChannel: host-published notifications
    - IntervalFrameSource: scheduler-driven frame ticks
    - ExceptHookErrorSource: interpreter and asyncio error hooks

Probes:
    - PsutilMemoryProbe: process memory via psutil
    - CallableDocumentProbe: host-supplied element count

Null implementations (NullSource, NullMemoryProbe, NullDocumentProbe,
NullErrorSource) stand in for unsupported platform features.
"""

from perf_telemetry.adapters.channels import (
    CallbackChannel,
    IntervalFrameSource,
    NullSource,
)
from perf_telemetry.adapters.clock import ManualClock, MonotonicClock
from perf_telemetry.adapters.error_hooks import (
    ExceptHookErrorSource,
    NullErrorSource,
    describe_exception,
)
from perf_telemetry.adapters.probes import (
    CallableDocumentProbe,
    NullDocumentProbe,
    NullMemoryProbe,
    PsutilMemoryProbe,
)
from perf_telemetry.adapters.scheduler import ManualScheduler, ThreadingScheduler

__all__ = [
    "CallableDocumentProbe",
    "CallbackChannel",
    "ExceptHookErrorSource",
    "IntervalFrameSource",
    "ManualClock",
    "ManualScheduler",
    "MonotonicClock",
    "NullDocumentProbe",
    "NullErrorSource",
    "NullMemoryProbe",
    "NullSource",
    "PsutilMemoryProbe",
    "ThreadingScheduler",
    "describe_exception",
]
