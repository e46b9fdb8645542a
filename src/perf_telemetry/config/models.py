"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at construction using Pydantic and is
immutable afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class MonitorConfig(BaseModel):
    """Root configuration for the performance monitor."""

    enable_metrics: bool = Field(default=True, alias="enableMetrics")
    enable_memory_monitoring: bool = Field(
        default=True, alias="enableMemoryMonitoring"
    )
    enable_render_monitoring: bool = Field(
        default=True, alias="enableRenderMonitoring"
    )

    sampling_interval_ms: float = Field(
        default=30_000, gt=0, alias="samplingIntervalMs"
    )
    memory_threshold_ratio: float = Field(
        default=0.8, ge=0, le=1, alias="memoryThresholdRatio"
    )
    fps_threshold: int = Field(default=30, ge=0, alias="fpsThreshold")

    # Retention and windows
    max_entries: int = Field(default=1000, ge=1, alias="maxEntries")
    summary_window_ms: float = Field(
        default=5 * 60 * 1000, gt=0, alias="summaryWindowMs"
    )
    fps_window_ms: float = Field(default=1000, gt=0, alias="fpsWindowMs")
    frame_interval_ms: float = Field(
        default=1000 / 60, gt=0, alias="frameIntervalMs"
    )

    # Structured event log
    event_log_json: bool = Field(default=True, alias="eventLogJson")
    max_events: int = Field(default=500, ge=1, alias="maxEvents")

    model_config = {"frozen": True, "populate_by_name": True}
