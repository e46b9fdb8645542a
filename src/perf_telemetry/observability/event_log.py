"""
Event Log - Structured Logging for Monitor Events.

Provides:
    - Structured JSON (or console) logging via structlog
    - A session ID bound to every event of one monitor
    - A bounded in-memory list of recent events for inspection

Design Notes:
    - Events are routed through the stdlib ``logging`` tree, so
      ``configure_logging`` controls where they end up
    - structlog is configured once per process; an EventLog never
      replaces a configuration the host application already set up
    - Thread-safe event storage
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

import structlog

DEFAULT_MAX_EVENTS = 500


def configure_structlog(use_json: bool = True, log_level: int = logging.INFO) -> None:
    """Configure structlog processors for the event log."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class EventLog:
    """
    Structured event log for one monitor session.

    Every event is both emitted through structlog and kept in a bounded
    buffer so tests and diagnostics panels can read recent activity.
    """

    def __init__(
        self,
        service_name: str = "perf_telemetry",
        use_json: bool = True,
        log_level: int = logging.INFO,
        max_events: int = DEFAULT_MAX_EVENTS,
        session_id: Optional[str] = None,
    ) -> None:
        """
        Initialize event log.

        Args:
            service_name: Logger name for emitted events
            use_json: Render JSON instead of console output (only applied
                when structlog is not configured yet)
            log_level: Minimum level emitted through structlog (same)
            max_events: Number of recent events kept in memory
            session_id: Explicit session ID (generated if omitted)
        """
        self.service_name = service_name
        self.use_json = use_json
        self.log_level = log_level
        self.session_id = session_id or str(uuid.uuid4())
        self._events: Deque[Dict[str, Any]] = deque(maxlen=max_events)
        self._lock = threading.Lock()

        if not structlog.is_configured():
            configure_structlog(use_json=use_json, log_level=log_level)
        self._logger = structlog.get_logger(service_name).bind(
            session_id=self.session_id
        )

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """
        Log a structured event.

        Args:
            event_type: Type of event (e.g., "monitor_started", "paint_metric")
            data: Additional event data
            level: Log level (debug, info, warning, error)
        """
        event_data = {
            "event_type": event_type,
            "logged_at": datetime.now().isoformat(),
            "session_id": self.session_id,
            **(data or {}),
        }

        with self._lock:
            self._events.append(event_data)

        log_method = getattr(self._logger, level.lower(), self._logger.info)
        log_method(event_type, **{k: v for k, v in event_data.items()
                                  if k not in ("event_type", "session_id")})

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an anomaly at warning or error level."""
        level = "warning" if severity.upper() == "WARNING" else "error"
        self.log_event(
            "anomaly",
            {
                "message": message,
                "severity": severity,
                **(context or {}),
            },
            level=level,
        )

    def get_events(self, event_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Recent events, optionally filtered by type."""
        with self._lock:
            events = list(self._events)
        if event_type is None:
            return events
        return [e for e in events if e["event_type"] == event_type]

    def clear(self) -> None:
        """Clear all recorded events."""
        with self._lock:
            self._events.clear()
