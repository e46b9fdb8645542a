"""
Perf Telemetry - Runtime Performance Metrics for the Bookmark Manager UI.

Collects and summarizes runtime signals from the presentation layer of the
bookmark manager (item cards, modal dialogs) so that the UI can react to
memory pressure and frame drops.

Architecture:
    - Caller-owned PerformanceMonitor (no global singleton)
    - Capability injection for every platform feature (memory, frames, DOM)
    - Bounded per-signal metric store with inline pruning
    - Typed advisory channels toward the presentation layer

Main Components:
    - domain: Metric records, inbound notifications, summaries
    - config: Pydantic configuration models and YAML loader
    - interfaces: Capability protocols (clock, scheduler, probes, sources)
    - samplers: Event-driven and polling samplers
    - store: Bounded metric store
    - alerts: Threshold evaluator and advisory dispatcher
    - summary: Windowed summarizer
    - adapters: Platform and deterministic capability implementations
    - observability: Structured event log (structlog)

Example:
    >>> from perf_telemetry import MonitorConfig, create_monitor
    >>> monitor = create_monitor(MonitorConfig(sampling_interval_ms=5000))
    >>> with monitor:
    ...     monitor.start_timer("render-grid")
    ...     monitor.end_timer("render-grid")
    >>> print(monitor.export_metrics())

"""

import logging

__version__ = "0.2.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    json_events: bool = True,
) -> None:
    """
    Configure logging for Perf Telemetry.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format
        json_events: Render structured monitor events as JSON

    Example:
        >>> import perf_telemetry
        >>> perf_telemetry.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("perf_telemetry").setLevel(level)
    configure_structlog(use_json=json_events, log_level=level)


from perf_telemetry.config.models import MonitorConfig  # noqa: E402
from perf_telemetry.domain.records import (  # noqa: E402
    Advisory,
    AdvisoryKind,
    ErrorKind,
    SignalKind,
)
from perf_telemetry.monitor import (  # noqa: E402
    MonitorCapabilities,
    PerformanceMonitor,
    create_monitor,
)
from perf_telemetry.observability.event_log import configure_structlog  # noqa: E402

__all__ = [
    "Advisory",
    "AdvisoryKind",
    "ErrorKind",
    "MonitorCapabilities",
    "MonitorConfig",
    "PerformanceMonitor",
    "SignalKind",
    "configure_logging",
    "create_monitor",
]
