"""
Error Sampler - Uncaught Errors as Data.

Captures uncaught runtime errors and unhandled asynchronous rejections from
the host application. These are observations, not failures of the monitor:
every one is retained as an ErrorSample. Runtime errors are also logged.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from perf_telemetry.domain.records import ErrorKind, ErrorLocation, ErrorSample
from perf_telemetry.interfaces.scheduling import Clock
from perf_telemetry.interfaces.sources import ErrorSource, Unsubscribe
from perf_telemetry.samplers.base import RecordSink, Sampler

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_MESSAGE = "Unhandled promise rejection"


def rejection_message(reason: Any) -> str:
    """Message carried by a rejection reason, or the fallback text."""
    message = getattr(reason, "message", None)
    if isinstance(message, str) and message:
        return message
    if isinstance(reason, BaseException) and str(reason):
        return str(reason)
    if isinstance(reason, str) and reason:
        return reason
    return DEFAULT_REJECTION_MESSAGE


class ErrorSampler(Sampler):
    """Records runtime errors and unhandled rejections."""

    name = "errors"

    def __init__(
        self,
        sink: RecordSink,
        clock: Clock,
        source: ErrorSource,
        event_log: Optional[Any] = None,
    ) -> None:
        super().__init__(sink, clock)
        self._source = source
        self._event_log = event_log
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def available(self) -> bool:
        return self._source.available

    def _activate(self) -> None:
        self._unsubscribe = self._source.subscribe(
            self.handle_runtime_error, self.handle_rejection
        )

    def _deactivate(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle_runtime_error(
        self,
        message: str,
        filename: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> bool:
        sample = ErrorSample(
            error_kind=ErrorKind.RUNTIME,
            message=str(message) if message is not None else "",
            location=ErrorLocation(filename=filename, line=line, column=column),
            timestamp=self._clock.now_ms(),
        )
        accepted = self.emit(sample)
        if accepted:
            self._log_runtime_error(sample)
        return accepted

    def handle_rejection(self, reason: Any) -> bool:
        return self.emit(
            ErrorSample(
                error_kind=ErrorKind.UNHANDLED_REJECTION,
                message=rejection_message(reason),
                timestamp=self._clock.now_ms(),
            )
        )

    def _log_runtime_error(self, sample: ErrorSample) -> None:
        location = sample.location
        if self._event_log:
            self._event_log.log_event(
                "runtime_error",
                {
                    "message": sample.message,
                    "filename": location.filename if location else None,
                    "line": location.line if location else None,
                    "column": location.column if location else None,
                },
                level="error",
            )
        else:
            logger.error(f"Runtime error: {sample.message}")
