"""
Performance Monitor - Main Orchestrator.

The PerformanceMonitor owns the sampler registry, the metric store, the
threshold evaluator, the advisory dispatcher and the summarizer. It is a
caller-owned context object: construct it, start() it (or use it as a
context manager), and stop() it on shutdown.

Ingestion path:
    sampler -> _ingest (gated by is_monitoring) -> MetricStore.append
            -> ThresholdEvaluator (memory / fps) -> AdvisoryDispatcher
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from perf_telemetry.adapters.channels import IntervalFrameSource, NullSource
from perf_telemetry.adapters.clock import MonotonicClock
from perf_telemetry.adapters.error_hooks import ExceptHookErrorSource, NullErrorSource
from perf_telemetry.adapters.probes import (
    NullDocumentProbe,
    NullMemoryProbe,
    PsutilMemoryProbe,
)
from perf_telemetry.adapters.scheduler import ThreadingScheduler
from perf_telemetry.alerts.dispatcher import AdvisoryCallback, AdvisoryDispatcher
from perf_telemetry.alerts.threshold_evaluator import ThresholdEvaluator, Thresholds
from perf_telemetry.config.models import MonitorConfig
from perf_telemetry.domain.records import (
    Advisory,
    AdvisoryKind,
    EntryType,
    MemorySample,
    MetricRecord,
    MutationBatch,
    PerformanceEntry,
    SignalKind,
)
from perf_telemetry.domain.summaries import MetricsSnapshot, MetricsSummary
from perf_telemetry.interfaces.probes import DocumentProbe, MemoryProbe
from perf_telemetry.interfaces.scheduling import Clock, Scheduler
from perf_telemetry.interfaces.sources import ErrorSource, NotificationSource
from perf_telemetry.observability.event_log import EventLog
from perf_telemetry.samplers.base import Sampler
from perf_telemetry.samplers.dom import DomMutationSampler
from perf_telemetry.samplers.errors import ErrorSampler
from perf_telemetry.samplers.frame_rate import FrameRateSampler
from perf_telemetry.samplers.memory import MemorySampler
from perf_telemetry.samplers.timing import PerformanceEntrySampler
from perf_telemetry.store.metric_store import MetricStore
from perf_telemetry.summary.summarizer import Summarizer
from perf_telemetry.utils.rounding import round_int, to_mb
from perf_telemetry.utils.tables import CounterTable, TimerTable

logger = logging.getLogger(__name__)


@dataclass
class MonitorCapabilities:
    """
    Platform capabilities injected into the monitor.

    Every field defaults to an implementation that is safe without a host
    UI: real clock and scheduler, null probes and null sources. Use
    ``platform()`` for process-level memory and error capture.
    """

    clock: Clock = field(default_factory=MonotonicClock)
    scheduler: Scheduler = field(default_factory=ThreadingScheduler)
    memory_probe: MemoryProbe = field(default_factory=NullMemoryProbe)
    document_probe: DocumentProbe = field(default_factory=NullDocumentProbe)
    performance_entries: NotificationSource[PerformanceEntry] = field(
        default_factory=NullSource
    )
    mutations: NotificationSource[MutationBatch] = field(default_factory=NullSource)
    frames: Optional[NotificationSource[float]] = None
    errors: ErrorSource = field(default_factory=NullErrorSource)

    @classmethod
    def platform(cls, **overrides: Any) -> "MonitorCapabilities":
        """Capabilities backed by psutil and interpreter error hooks."""
        defaults: Dict[str, Any] = {
            "memory_probe": PsutilMemoryProbe(),
            "errors": ExceptHookErrorSource(),
        }
        defaults.update(overrides)
        return cls(**defaults)


class PerformanceMonitor:
    """
    Runtime performance-metrics collector and summarizer.

    Features:
        - Memory, frame-rate, render, DOM, network and error sampling
        - Bounded per-signal retention (FIFO eviction)
        - Memory / fps threshold advisories
        - Windowed summaries, JSON export
        - Named timers and counters
    """

    def __init__(
        self,
        config: Optional[MonitorConfig] = None,
        capabilities: Optional[MonitorCapabilities] = None,
        event_log: Optional[EventLog] = None,
    ) -> None:
        """
        Initialize the monitor. Nothing is sampled until start().

        Args:
            config: Monitor configuration (defaults if omitted)
            capabilities: Platform capabilities (safe defaults if omitted)
            event_log: Structured event log (created if omitted)
        """
        self.config = config or MonitorConfig()
        self.capabilities = capabilities or MonitorCapabilities()
        self.clock = self.capabilities.clock
        self.event_log = event_log or EventLog(
            use_json=self.config.event_log_json,
            max_events=self.config.max_events,
        )

        self.store = MetricStore(max_entries=self.config.max_entries)
        self.timers = TimerTable(self.clock)
        self.counters = CounterTable()
        self.evaluator = ThresholdEvaluator(
            Thresholds(
                memory_ratio=self.config.memory_threshold_ratio,
                fps=self.config.fps_threshold,
            )
        )
        self.dispatcher = AdvisoryDispatcher()
        self.summarizer = Summarizer(
            self.store, self.clock, window_ms=self.config.summary_window_ms
        )

        self._lock = threading.RLock()
        self._monitoring = False
        self._samplers = self._build_samplers()

    # =========================================================================
    # Sampler Registry
    # =========================================================================

    def _build_samplers(self) -> Dict[str, Sampler]:
        caps = self.capabilities
        frames = caps.frames or IntervalFrameSource(
            caps.scheduler, self.clock, interval_ms=self.config.frame_interval_ms
        )
        samplers: List[Sampler] = [
            PerformanceEntrySampler(
                self._ingest, self.clock, caps.performance_entries, self.event_log
            ),
            ErrorSampler(self._ingest, self.clock, caps.errors, self.event_log),
            MemorySampler(
                self._ingest,
                self.clock,
                caps.scheduler,
                caps.memory_probe,
                interval_ms=self.config.sampling_interval_ms,
            ),
            DomMutationSampler(
                self._ingest, self.clock, caps.mutations, caps.document_probe
            ),
            FrameRateSampler(
                self._ingest, self.clock, frames, window_ms=self.config.fps_window_ms
            ),
        ]
        return {s.name: s for s in samplers}

    def _enabled_sampler_names(self) -> List[str]:
        names = ["performance", "errors"]
        if self.config.enable_memory_monitoring:
            names.append("memory")
        if self.config.enable_render_monitoring:
            names.extend(["dom", "fps"])
        return names

    def sampler(self, name: str) -> Optional[Sampler]:
        """Registered sampler by name (performance, errors, memory, dom, fps)."""
        return self._samplers.get(name)

    @property
    def active_samplers(self) -> List[str]:
        return [name for name, s in self._samplers.items() if s.is_running]

    @property
    def is_monitoring(self) -> bool:
        with self._lock:
            return self._monitoring

    def start(self) -> bool:
        """
        Wire every enabled sampler to its source.

        Returns:
            False if metrics are disabled by configuration, else True
        """
        if not self.config.enable_metrics:
            logger.debug("Metrics disabled, monitor not started")
            return False

        with self._lock:
            if self._monitoring:
                return True
            self._monitoring = True
            for name in self._enabled_sampler_names():
                self._samplers[name].start()
            active = self.active_samplers

        self.event_log.log_event("monitor_started", {"samplers": active})
        return True

    def stop(self) -> None:
        """
        Detach every sampler. Records are kept until clear_metrics().

        Safe to call when already stopped. Once this returns no sampler
        writes to the store.
        """
        with self._lock:
            if not self._monitoring:
                return
            self._monitoring = False
            for sampler in self._samplers.values():
                sampler.stop()

        self.event_log.log_event("monitor_stopped", {})

    def __enter__(self) -> "PerformanceMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # =========================================================================
    # Ingestion and Advisories
    # =========================================================================

    def _ingest(self, record: MetricRecord) -> bool:
        """Store a sampler's record and evaluate thresholds."""
        with self._lock:
            if not self._monitoring:
                return False
            self.store.append(record)

        advisory = self.evaluator.evaluate(record)
        if advisory is not None:
            self._handle_breach(advisory, record)
        return True

    def _handle_breach(self, advisory: Advisory, record: MetricRecord) -> None:
        if isinstance(record, MemorySample):
            self.event_log.log_anomaly(
                "High memory usage detected",
                "WARNING",
                context={
                    "percentage": round_int(advisory.value * 100),
                    "used_mb": to_mb(record.used),
                    "limit_mb": to_mb(record.limit),
                },
            )
        else:
            self.event_log.log_anomaly(
                f"Low FPS detected: {int(advisory.value)}fps",
                "WARNING",
                context={"fps": int(advisory.value)},
            )
        self.event_log.log_event(
            advisory.kind.value, {"reason": advisory.reason}, level="debug"
        )
        self.dispatcher.dispatch(advisory)

    def subscribe(
        self,
        kind: AdvisoryKind,
        callback: AdvisoryCallback,
    ) -> Callable[[], None]:
        """Register an advisory callback; returns an unsubscribe callable."""
        return self.dispatcher.subscribe(kind, callback)

    def record_memory_usage(self) -> Optional[MemorySample]:
        """Take one memory sample now (None if unavailable or stopped)."""
        sampler = self._samplers["memory"]
        if not sampler.available:
            return None
        return sampler.sample_now()

    # =========================================================================
    # Timers and Counters
    # =========================================================================

    def start_timer(self, name: str) -> None:
        """Start (or restart) a named timer."""
        self.timers.start(name)

    def end_timer(self, name: str) -> float:
        """
        Stop a named timer.

        When monitoring with render monitoring enabled, the measurement is
        also stored as a render sample.

        Returns:
            Elapsed milliseconds, 0 if the timer was never started
        """
        finished = self.timers.finish(name)
        if finished is None:
            return 0
        start_ms, duration = finished

        if self.config.enable_render_monitoring:
            self._samplers["performance"].handle_entry(
                PerformanceEntry(
                    entry_type=EntryType.MEASURE,
                    name=name,
                    start_time=start_ms,
                    duration=max(duration, 0.0),
                )
            )
        logger.debug(f"Timer {name}: {duration:.2f}ms")
        return duration

    def increment_counter(self, name: str) -> int:
        return self.counters.increment(name)

    def get_counter(self, name: str) -> int:
        return self.counters.get(name)

    def reset_counter(self, name: str) -> None:
        self.counters.reset(name)

    # =========================================================================
    # Query Surface
    # =========================================================================

    def get_summary(self) -> MetricsSummary:
        return self.summarizer.get_summary()

    def get_metrics(self) -> MetricsSnapshot:
        """Every stored sequence plus the current summary."""
        sequences = self.store.snapshot()
        return MetricsSnapshot(
            memory=sequences[SignalKind.MEMORY],
            render_times=sequences[SignalKind.RENDER_TIMES],
            fps=sequences[SignalKind.FPS],
            dom_nodes=sequences[SignalKind.DOM_NODES],
            network_requests=sequences[SignalKind.NETWORK_REQUESTS],
            errors=sequences[SignalKind.ERRORS],
            summary=self.get_summary(),
        )

    def export_metrics(self) -> str:
        """get_metrics() serialized as indented JSON."""
        return self.get_metrics().model_dump_json(indent=2)

    def clear_metrics(self) -> None:
        """Reset every sequence, timer and counter."""
        self.store.clear()
        self.timers.clear()
        self.counters.clear()


def create_monitor(
    config: Optional[MonitorConfig] = None,
    capabilities: Optional[MonitorCapabilities] = None,
    start: bool = False,
) -> PerformanceMonitor:
    """
    Build a monitor with platform capabilities.

    Args:
        config: Monitor configuration
        capabilities: Explicit capabilities (platform defaults if omitted)
        start: Start sampling immediately

    Returns:
        Configured PerformanceMonitor
    """
    monitor = PerformanceMonitor(
        config=config,
        capabilities=capabilities or MonitorCapabilities.platform(),
    )
    if start:
        monitor.start()
    return monitor
