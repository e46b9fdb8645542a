"""
Samplers Package - Turning notifications and ticks into metric records.

Event-driven:
    - PerformanceEntrySampler: measure / resource / paint entries
    - DomMutationSampler: DOM churn per mutation batch
    - ErrorSampler: runtime errors and unhandled rejections

Polling:
    - MemorySampler: periodic heap snapshot
    - FrameRateSampler: continuous frame counter
"""

from perf_telemetry.samplers.base import RecordSink, Sampler
from perf_telemetry.samplers.dom import DomMutationSampler
from perf_telemetry.samplers.errors import ErrorSampler, rejection_message
from perf_telemetry.samplers.frame_rate import FrameRateSampler
from perf_telemetry.samplers.memory import MemorySampler
from perf_telemetry.samplers.timing import PerformanceEntrySampler

__all__ = [
    "DomMutationSampler",
    "ErrorSampler",
    "FrameRateSampler",
    "MemorySampler",
    "PerformanceEntrySampler",
    "RecordSink",
    "Sampler",
    "rejection_message",
]
