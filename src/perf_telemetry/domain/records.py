"""
Metric Records and Notifications.

Metric records are immutable value objects produced by samplers and kept in
the MetricStore. Inbound notifications describe what the host runtime delivers
to the event-driven samplers; advisories are what the monitor sends back out.

All timestamps are monotonic milliseconds since process start.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# Enumerations
# =============================================================================


class SignalKind(str, Enum):
    """Signal streams kept by the metric store."""

    MEMORY = "memory"
    RENDER_TIMES = "render_times"
    FPS = "fps"
    DOM_NODES = "dom_nodes"
    NETWORK_REQUESTS = "network_requests"
    ERRORS = "errors"


class ErrorKind(str, Enum):
    """Origin of an observed application error."""

    RUNTIME = "runtime"
    UNHANDLED_REJECTION = "unhandled-rejection"


class EntryType(str, Enum):
    """Kinds of performance-timing entries delivered by the host."""

    MEASURE = "measure"
    RESOURCE = "resource"
    PAINT = "paint"
    NAVIGATION = "navigation"


class AdvisoryKind(str, Enum):
    """Outbound advisory signal kinds."""

    CLEANUP_SUGGESTED = "cleanup-suggested"
    OPTIMIZATION_SUGGESTED = "optimization-suggested"


# =============================================================================
# Metric Records
# =============================================================================


class MemorySample(BaseModel):
    """Heap usage snapshot (bytes)."""

    kind: Literal["memory"] = "memory"
    used: int = Field(ge=0)
    total: int = Field(ge=0)
    limit: int = Field(ge=0)
    timestamp: float

    model_config = {"frozen": True}

    @property
    def usage_ratio(self) -> float:
        """Fraction of the limit in use, 0.0 when the limit is unknown."""
        if self.limit <= 0:
            return 0.0
        return self.used / self.limit


class RenderSample(BaseModel):
    """Duration of a named render measurement."""

    kind: Literal["render"] = "render"
    name: str
    duration: float = Field(ge=0)
    timestamp: float = Field(description="Start time of the measurement")

    model_config = {"frozen": True}


class FpsSample(BaseModel):
    """Frames per second over one counting window."""

    kind: Literal["fps"] = "fps"
    value: int = Field(ge=0)
    timestamp: float

    model_config = {"frozen": True}


class DomSample(BaseModel):
    """Element count after a batch of DOM mutations."""

    kind: Literal["dom"] = "dom"
    node_count: int = Field(ge=0)
    mutation_count: int = Field(ge=0)
    timestamp: float

    model_config = {"frozen": True}


class NetworkSample(BaseModel):
    """Timing of a fetched resource."""

    kind: Literal["network"] = "network"
    name: str
    duration: float = Field(ge=0)
    transfer_size: int = Field(default=0, ge=0)
    timestamp: float

    model_config = {"frozen": True}


class ErrorLocation(BaseModel):
    """Source position of a runtime error."""

    filename: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    model_config = {"frozen": True}


class ErrorSample(BaseModel):
    """An error observed in the host application."""

    kind: Literal["error"] = "error"
    error_kind: ErrorKind
    message: str
    location: Optional[ErrorLocation] = None
    timestamp: float

    model_config = {"frozen": True}


MetricRecord = Union[
    MemorySample,
    RenderSample,
    FpsSample,
    DomSample,
    NetworkSample,
    ErrorSample,
]

RECORD_SIGNALS = {
    MemorySample: SignalKind.MEMORY,
    RenderSample: SignalKind.RENDER_TIMES,
    FpsSample: SignalKind.FPS,
    DomSample: SignalKind.DOM_NODES,
    NetworkSample: SignalKind.NETWORK_REQUESTS,
    ErrorSample: SignalKind.ERRORS,
}


def signal_of(record: MetricRecord) -> SignalKind:
    """Return the store sequence a record belongs to."""
    return RECORD_SIGNALS[type(record)]


# =============================================================================
# Inbound Notifications
# =============================================================================


class PerformanceEntry(BaseModel):
    """A performance-timing entry delivered by the host runtime."""

    entry_type: EntryType
    name: str
    start_time: float
    duration: float = Field(default=0.0, ge=0)
    transfer_size: Optional[int] = Field(default=None, ge=0)

    model_config = {"frozen": True}


class MutationBatch(BaseModel):
    """A batch of DOM mutations delivered together."""

    mutation_count: int = Field(ge=0)

    model_config = {"frozen": True}


# =============================================================================
# Outbound Advisories
# =============================================================================


class Advisory(BaseModel):
    """Best-effort suggestion sent to the presentation layer."""

    kind: AdvisoryKind
    reason: str
    value: float
    threshold: float
    timestamp: float

    model_config = {"frozen": True}
