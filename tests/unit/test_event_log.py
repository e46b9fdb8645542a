"""
Unit Tests for EventLog.

Test Aspects Covered:
    ✅ Business Logic: Structured events, anomalies, session IDs
    ✅ Edge Cases: Bounded buffer, all log levels
    ✅ State: Clear
    ✅ Configuration: structlog set up once, host configuration kept
"""

from __future__ import annotations

import logging

import pytest
import structlog

import perf_telemetry
from perf_telemetry.observability.event_log import EventLog


class TestSessionIds:
    """Test session ID handling."""

    def test_explicit_session_id(self) -> None:
        log = EventLog(session_id="abc")
        log.log_event("monitor_started")

        assert log.get_events()[0]["session_id"] == "abc"

    def test_generated_session_id(self) -> None:
        """
        SCENARIO: No session ID given
        EXPECTED: UUID format
        """
        log = EventLog()
        assert len(log.session_id) == 36


class TestEventLogging:
    """Test event recording."""

    def test_log_event_stores_event(self) -> None:
        """
        SCENARIO: Log an event with data
        EXPECTED: Event stored and retrievable
        """
        # Arrange
        log = EventLog()

        # Act
        log.log_event("paint_metric", {"name": "first-paint", "start_time": 12.0})

        # Assert
        events = log.get_events()
        assert len(events) == 1
        assert events[0]["event_type"] == "paint_metric"
        assert events[0]["name"] == "first-paint"

    def test_log_event_with_level(self) -> None:
        """
        SCENARIO: Log events at every level
        EXPECTED: All recorded (no exception)
        """
        log = EventLog(use_json=False)

        log.log_event("info_event", level="info")
        log.log_event("warn_event", level="warning")
        log.log_event("error_event", level="error")
        log.log_event("debug_event", level="debug")

        assert len(log.get_events()) == 4

    def test_filter_by_type(self) -> None:
        log = EventLog()
        log.log_event("a")
        log.log_event("b")
        log.log_event("a")

        assert len(log.get_events("a")) == 2

    def test_buffer_is_bounded(self) -> None:
        """
        SCENARIO: More events than max_events
        EXPECTED: Only the most recent kept
        """
        log = EventLog(max_events=3)
        for i in range(5):
            log.log_event("tick", {"i": i})

        assert [e["i"] for e in log.get_events()] == [2, 3, 4]


class TestAnomalies:
    """Test anomaly logging."""

    def test_log_anomaly(self) -> None:
        log = EventLog()

        log.log_anomaly("High memory usage detected", "WARNING", context={"percentage": 91})

        event = log.get_events("anomaly")[0]
        assert event["severity"] == "WARNING"
        assert event["percentage"] == 91


class TestClear:
    """Test clearing state."""

    def test_clear_removes_all(self) -> None:
        log = EventLog()
        log.log_event("test")

        log.clear()

        assert log.get_events() == []


class TestStructlogConfiguration:
    """Test process-wide structlog setup."""

    @pytest.fixture(autouse=True)
    def pristine_structlog(self):
        structlog.reset_defaults()
        yield
        structlog.reset_defaults()

    def test_configures_when_unconfigured(self) -> None:
        assert not structlog.is_configured()

        EventLog()

        assert structlog.is_configured()
        assert isinstance(
            structlog.get_config()["logger_factory"], structlog.stdlib.LoggerFactory
        )

    def test_keeps_host_configuration(self) -> None:
        """
        SCENARIO: Host application configured structlog first
        EXPECTED: Creating an EventLog leaves that configuration in place
        """
        # Arrange
        renderer = structlog.processors.KeyValueRenderer()
        structlog.configure(
            processors=[renderer],
            logger_factory=structlog.PrintLoggerFactory(),
        )

        # Act
        log = EventLog(use_json=True)
        log.log_event("monitor_started")

        # Assert
        config = structlog.get_config()
        assert config["processors"] == [renderer]
        assert isinstance(config["logger_factory"], structlog.PrintLoggerFactory)
        assert len(log.get_events()) == 1

    def test_configure_logging_sets_renderer(self) -> None:
        perf_telemetry.configure_logging(logging.WARNING, json_events=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
