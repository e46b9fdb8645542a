"""
Observability Package - Structured event logging.

    - EventLog: structlog-backed event log with a bounded event buffer

Design Principles:
    - Structured JSON logging via structlog
    - One session ID per monitor for correlating events
"""

from perf_telemetry.observability.event_log import EventLog, configure_structlog

__all__ = ["EventLog", "configure_structlog"]
