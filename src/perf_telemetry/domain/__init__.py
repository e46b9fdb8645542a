"""
Domain Layer - Metric Records, Notifications and Summaries.

Immutable pydantic models shared by samplers, the store and the summarizer.
"""

from perf_telemetry.domain.records import (
    Advisory,
    AdvisoryKind,
    DomSample,
    EntryType,
    ErrorKind,
    ErrorLocation,
    ErrorSample,
    FpsSample,
    MemorySample,
    MetricRecord,
    MutationBatch,
    NetworkSample,
    PerformanceEntry,
    RenderSample,
    SignalKind,
    signal_of,
)
from perf_telemetry.domain.summaries import (
    ErrorSummary,
    FpsSummary,
    MemorySummary,
    MetricsSnapshot,
    MetricsSummary,
    RenderSummary,
)

__all__ = [
    "Advisory",
    "AdvisoryKind",
    "DomSample",
    "EntryType",
    "ErrorKind",
    "ErrorLocation",
    "ErrorSample",
    "ErrorSummary",
    "FpsSample",
    "FpsSummary",
    "MemorySample",
    "MemorySummary",
    "MetricRecord",
    "MetricsSnapshot",
    "MetricsSummary",
    "MutationBatch",
    "NetworkSample",
    "PerformanceEntry",
    "RenderSample",
    "RenderSummary",
    "SignalKind",
    "signal_of",
]
