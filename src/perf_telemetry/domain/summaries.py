"""
Summary Models.

Windowed aggregates returned by the Summarizer, and the full snapshot
returned by PerformanceMonitor.get_metrics().
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from perf_telemetry.domain.records import (
    DomSample,
    ErrorSample,
    FpsSample,
    MemorySample,
    NetworkSample,
    RenderSample,
)


class MemorySummary(BaseModel):
    """Latest and average heap usage in MB."""

    current_mb: int
    average_mb: int
    percentage: int

    model_config = {"frozen": True}


class RenderSummary(BaseModel):
    """Render duration statistics (milliseconds)."""

    average_render_time: float
    max_render_time: float
    render_count: int

    model_config = {"frozen": True}


class ErrorSummary(BaseModel):
    """Error counts per kind."""

    total: int = 0
    runtime: int = 0
    unhandled_rejection: int = 0

    model_config = {"frozen": True}


class FpsSummary(BaseModel):
    """Frame rate statistics."""

    average: int
    minimum: int
    samples: int

    model_config = {"frozen": True}


class MetricsSummary(BaseModel):
    """All sub-summaries for one window."""

    memory: Optional[MemorySummary] = None
    performance: Optional[RenderSummary] = None
    errors: ErrorSummary = Field(default_factory=ErrorSummary)
    fps: Optional[FpsSummary] = None

    model_config = {"frozen": True}


class MetricsSnapshot(BaseModel):
    """Every stored sequence plus the computed summary."""

    memory: List[MemorySample] = Field(default_factory=list)
    render_times: List[RenderSample] = Field(default_factory=list)
    fps: List[FpsSample] = Field(default_factory=list)
    dom_nodes: List[DomSample] = Field(default_factory=list)
    network_requests: List[NetworkSample] = Field(default_factory=list)
    errors: List[ErrorSample] = Field(default_factory=list)
    summary: MetricsSummary = Field(default_factory=MetricsSummary)

    model_config = {"frozen": True}
