"""
Integration Tests for PerformanceMonitor.

Tests cover:
    - Lifecycle: start/stop idempotency, context manager, disabled metrics
    - Sampling through every host channel into the store
    - Memory and frame-rate advisories
    - Timers feeding render samples, counters
    - Summary, export and clear
"""

from __future__ import annotations

import json

import pytest

from perf_telemetry import create_monitor
from perf_telemetry.config.models import MonitorConfig
from perf_telemetry.domain.records import (
    AdvisoryKind,
    EntryType,
    ErrorKind,
    MutationBatch,
    PerformanceEntry,
    RenderSample,
    SignalKind,
)
from perf_telemetry.monitor import MonitorCapabilities, PerformanceMonitor
from perf_telemetry.observability.event_log import EventLog


def build_monitor(config: MonitorConfig, capabilities: MonitorCapabilities) -> PerformanceMonitor:
    return PerformanceMonitor(
        config=config,
        capabilities=capabilities,
        event_log=EventLog(session_id="test-session"),
    )


class TestLifecycle:
    """Start/stop behaviour."""

    def test_start_wires_all_samplers(self, monitor: PerformanceMonitor) -> None:
        """
        SCENARIO: Start with every capability present
        EXPECTED: All five samplers running
        """
        # Act
        started = monitor.start()

        # Assert
        assert started is True
        assert monitor.is_monitoring
        assert sorted(monitor.active_samplers) == ["dom", "errors", "fps", "memory", "performance"]

    def test_start_and_stop_are_idempotent(self, monitor: PerformanceMonitor, scheduler) -> None:
        monitor.start()
        monitor.start()

        assert scheduler.active_tasks == 1

        monitor.stop()
        monitor.stop()

        assert not monitor.is_monitoring
        assert monitor.active_samplers == []
        assert len(monitor.event_log.get_events("monitor_stopped")) == 1

    def test_restart_after_stop(self, monitor: PerformanceMonitor, scheduler) -> None:
        """
        SCENARIO: start, stop, start again
        EXPECTED: Samplers active again with a single memory task
        """
        # Arrange
        monitor.start()
        monitor.stop()

        # Act
        restarted = monitor.start()
        scheduler.advance(30_000)

        # Assert
        assert restarted is True
        assert monitor.is_monitoring
        assert sorted(monitor.active_samplers) == ["dom", "errors", "fps", "memory", "performance"]
        assert scheduler.active_tasks == 1
        assert monitor.store.size(SignalKind.MEMORY) == 1

    def test_disabled_metrics_never_start(self, capabilities, scheduler) -> None:
        """
        SCENARIO: enable_metrics is false
        EXPECTED: start() returns False, nothing scheduled
        """
        monitor = build_monitor(MonitorConfig(enable_metrics=False), capabilities)

        assert monitor.start() is False
        assert not monitor.is_monitoring
        assert scheduler.active_tasks == 0

    def test_disabled_memory_and_render(self, capabilities) -> None:
        config = MonitorConfig(enable_memory_monitoring=False, enable_render_monitoring=False)
        monitor = build_monitor(config, capabilities)

        monitor.start()

        assert sorted(monitor.active_samplers) == ["errors", "performance"]

    def test_context_manager(self, monitor: PerformanceMonitor) -> None:
        with monitor as m:
            assert m.is_monitoring
        assert not monitor.is_monitoring

    def test_no_records_after_stop(
        self, monitor: PerformanceMonitor, capabilities, scheduler, error_source
    ) -> None:
        """
        SCENARIO: Stop, then every source keeps notifying
        EXPECTED: Store unchanged, earlier records preserved
        """
        # Arrange
        monitor.start()
        scheduler.advance(30_000)
        assert monitor.store.size(SignalKind.MEMORY) == 1

        # Act
        monitor.stop()
        scheduler.advance(120_000)
        capabilities.mutations.publish(MutationBatch(mutation_count=2))
        capabilities.performance_entries.publish(
            PerformanceEntry(entry_type="measure", name="late", start_time=1.0, duration=1.0)
        )
        error_source.raise_runtime("late error")
        recorded = monitor.record_memory_usage()

        # Assert
        assert recorded is None
        metrics = monitor.get_metrics()
        assert len(metrics.memory) == 1
        assert metrics.dom_nodes == []
        assert metrics.render_times == []
        assert metrics.errors == []

    def test_create_monitor_starts(self, capabilities) -> None:
        monitor = create_monitor(capabilities=capabilities, start=True)
        try:
            assert monitor.is_monitoring
        finally:
            monitor.stop()


class TestSampling:
    """Host notifications end to end."""

    def test_dom_mutations(self, monitor, capabilities, element_count, clock) -> None:
        monitor.start()
        clock.set(500)
        element_count[0] = 321

        capabilities.mutations.publish(MutationBatch(mutation_count=4))

        sample = monitor.get_metrics().dom_nodes[0]
        assert sample.node_count == 321
        assert sample.mutation_count == 4
        assert sample.timestamp == 500

    def test_timing_entries(self, monitor, capabilities) -> None:
        """
        SCENARIO: measure, resource and paint entries published
        EXPECTED: render + network samples, paint only in the event log
        """
        monitor.start()

        capabilities.performance_entries.publish_many(
            [
                PerformanceEntry(entry_type="measure", name="list", start_time=10.0, duration=8.0),
                PerformanceEntry(
                    entry_type="resource", name="/api/bookmarks", start_time=20.0, duration=35.0,
                    transfer_size=2048,
                ),
                PerformanceEntry(entry_type="paint", name="first-paint", start_time=30.0),
            ]
        )

        metrics = monitor.get_metrics()
        assert [r.name for r in metrics.render_times] == ["list"]
        assert metrics.network_requests[0].transfer_size == 2048
        assert len(monitor.event_log.get_events("paint_metric")) == 1

    def test_errors_counted_per_kind(self, monitor, error_source) -> None:
        monitor.start()

        error_source.raise_runtime("TypeError: boom", "app.py", 3, 7)
        error_source.reject(ValueError("fetch failed"))
        error_source.reject(None)

        errors = monitor.get_summary().errors
        assert (errors.total, errors.runtime, errors.unhandled_rejection) == (3, 1, 2)
        stored = monitor.get_metrics().errors
        assert stored[0].error_kind == ErrorKind.RUNTIME
        assert stored[2].message == "Unhandled promise rejection"

    def test_retention_bound(self, capabilities) -> None:
        monitor = build_monitor(MonitorConfig(max_entries=5), capabilities)
        monitor.start()

        for i in range(8):
            capabilities.mutations.publish(MutationBatch(mutation_count=i))

        counts = [s.mutation_count for s in monitor.get_metrics().dom_nodes]
        assert counts == [3, 4, 5, 6, 7]


class TestAdvisories:
    """Memory and frame-rate advisories."""

    def test_memory_breach_advises_cleanup(
        self, monitor, scheduler, memory_probe, advisories
    ) -> None:
        """
        SCENARIO: 900/1000 bytes used with threshold 0.8
        EXPECTED: One cleanup advisory per breaching sample
        """
        # Arrange
        memory_probe.set(used=900, limit=1000)
        monitor.subscribe(AdvisoryKind.CLEANUP_SUGGESTED, advisories)
        monitor.start()

        # Act
        scheduler.advance(60_000)

        # Assert
        received = advisories.of_kind(AdvisoryKind.CLEANUP_SUGGESTED)
        assert len(received) == 2
        assert received[0].reason == "high-memory"
        assert received[0].value == pytest.approx(0.9)
        anomalies = monitor.event_log.get_events("anomaly")
        assert anomalies[0]["percentage"] == 90

    def test_memory_below_threshold_is_quiet(
        self, monitor, scheduler, memory_probe, advisories
    ) -> None:
        memory_probe.set(used=700, limit=1000)
        monitor.subscribe(AdvisoryKind.CLEANUP_SUGGESTED, advisories)
        monitor.start()

        scheduler.advance(30_000)

        assert advisories.received == []
        assert monitor.store.size(SignalKind.MEMORY) == 1

    def test_low_fps_advises_optimization(self, monitor, capabilities, advisories) -> None:
        """
        SCENARIO: 25 frames within one second, threshold 30
        EXPECTED: fps sample 25 and one optimization advisory
        """
        monitor.subscribe(AdvisoryKind.OPTIMIZATION_SUGGESTED, advisories)
        monitor.start()

        for i in range(1, 26):
            capabilities.frames.publish(i * 40.0)

        assert [s.value for s in monitor.get_metrics().fps] == [25]
        received = advisories.of_kind(AdvisoryKind.OPTIMIZATION_SUGGESTED)
        assert len(received) == 1
        assert received[0].reason == "low-fps"

    def test_failing_subscriber_does_not_block_others(
        self, monitor, scheduler, memory_probe, advisories
    ) -> None:
        def broken(advisory) -> None:
            raise RuntimeError("subscriber crashed")

        memory_probe.set(used=950, limit=1000)
        monitor.subscribe(AdvisoryKind.CLEANUP_SUGGESTED, broken)
        monitor.subscribe(AdvisoryKind.CLEANUP_SUGGESTED, advisories)
        monitor.start()

        scheduler.advance(30_000)

        assert len(advisories.received) == 1
        assert monitor.store.size(SignalKind.MEMORY) == 1

    def test_unsubscribe(self, monitor, scheduler, memory_probe, advisories) -> None:
        memory_probe.set(used=950, limit=1000)
        unsubscribe = monitor.subscribe(AdvisoryKind.CLEANUP_SUGGESTED, advisories)
        unsubscribe()
        monitor.start()

        scheduler.advance(30_000)

        assert advisories.received == []


class TestTimersAndCounters:
    """Named timers and counters."""

    def test_end_timer_records_render_sample(self, monitor, clock) -> None:
        """
        SCENARIO: Timer started at 100ms, ended at 112.5ms
        EXPECTED: 12.5 returned, matching render sample stored
        """
        monitor.start()
        clock.set(100)
        monitor.start_timer("bookmark-grid")
        clock.set(112.5)

        elapsed = monitor.end_timer("bookmark-grid")

        assert elapsed == pytest.approx(12.5)
        assert monitor.get_metrics().render_times == [
            RenderSample(name="bookmark-grid", duration=12.5, timestamp=100.0)
        ]

    def test_end_unknown_timer_returns_zero(self, monitor) -> None:
        assert monitor.end_timer("never-started") == 0

    def test_counters(self, monitor) -> None:
        monitor.increment_counter("clicks")
        monitor.increment_counter("clicks")
        assert monitor.get_counter("clicks") == 2

        monitor.reset_counter("clicks")

        assert monitor.get_counter("clicks") == 0
        assert monitor.get_counter("unknown") == 0


class TestQuerySurface:
    """Summary, export, clear."""

    def test_export_is_json(self, monitor, scheduler, capabilities) -> None:
        monitor.start()
        scheduler.advance(30_000)
        capabilities.performance_entries.publish(
            PerformanceEntry(entry_type=EntryType.MEASURE, name="list", start_time=1.0, duration=4.0)
        )

        exported = json.loads(monitor.export_metrics())

        assert set(exported) == {
            "memory", "render_times", "fps", "dom_nodes", "network_requests", "errors", "summary",
        }
        assert len(exported["memory"]) == 1
        assert exported["summary"]["performance"]["render_count"] == 1

    def test_clear_metrics(self, monitor, scheduler, error_source) -> None:
        """
        SCENARIO: Data recorded, then cleared
        EXPECTED: Empty sequences and an empty summary
        """
        monitor.start()
        scheduler.advance(30_000)
        error_source.raise_runtime("boom")
        monitor.increment_counter("clicks")

        monitor.clear_metrics()

        metrics = monitor.get_metrics()
        assert metrics.memory == [] and metrics.errors == []
        assert metrics.summary.memory is None
        assert metrics.summary.fps is None
        assert metrics.summary.errors.total == 0
        assert monitor.get_counter("clicks") == 0
        assert monitor.is_monitoring

    def test_clear_metrics_drops_pending_timers(self, monitor, clock) -> None:
        """
        SCENARIO: Timer started, metrics cleared, timer ended
        EXPECTED: end_timer returns 0 and stores no render sample
        """
        monitor.start()
        monitor.start_timer("t")
        clock.set(50)

        monitor.clear_metrics()

        assert monitor.end_timer("t") == 0
        assert monitor.get_metrics().render_times == []
        assert len(monitor.timers) == 0
