"""
Error Hook Adapters.

ExceptHookErrorSource reports uncaught exceptions from the interpreter
(``sys.excepthook`` and ``threading.excepthook``) as runtime errors, and
exceptions reaching an asyncio loop's exception handler (for example a task
whose exception was never retrieved) as unhandled rejections. Previous hooks
are chained and restored on unsubscribe.
"""

from __future__ import annotations

import asyncio
import sys
import threading
import traceback
from types import TracebackType
from typing import Any, Dict, Optional, Tuple, Type

from perf_telemetry.interfaces.sources import (
    RejectionCallback,
    RuntimeErrorCallback,
    Unsubscribe,
)


def describe_exception(
    exc_type: Type[BaseException],
    exc: Optional[BaseException],
    tb: Optional[TracebackType],
) -> Tuple[str, Optional[str], Optional[int], Optional[int]]:
    """Message and innermost source position of an exception."""
    message = f"{exc_type.__name__}: {exc}" if exc is not None else exc_type.__name__
    if tb is None:
        return message, None, None, None
    frame = traceback.extract_tb(tb)[-1]
    return message, frame.filename, frame.lineno, getattr(frame, "colno", None)


class ExceptHookErrorSource:
    """Interpreter-level uncaught error capture."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        Args:
            loop: Event loop whose exception handler reports rejections
        """
        self._loop = loop

    @property
    def available(self) -> bool:
        return True

    def subscribe(
        self,
        on_runtime_error: RuntimeErrorCallback,
        on_rejection: RejectionCallback,
    ) -> Unsubscribe:
        previous_excepthook = sys.excepthook
        previous_thread_hook = threading.excepthook
        previous_loop_handler = (
            self._loop.get_exception_handler() if self._loop else None
        )

        def excepthook(
            exc_type: Type[BaseException],
            exc: BaseException,
            tb: Optional[TracebackType],
        ) -> None:
            on_runtime_error(*describe_exception(exc_type, exc, tb))
            previous_excepthook(exc_type, exc, tb)

        def thread_hook(args: Any) -> None:
            on_runtime_error(
                *describe_exception(args.exc_type, args.exc_value, args.exc_traceback)
            )
            previous_thread_hook(args)

        def loop_handler(
            loop: asyncio.AbstractEventLoop, context: Dict[str, Any]
        ) -> None:
            on_rejection(context.get("exception") or context.get("message"))
            if previous_loop_handler is not None:
                previous_loop_handler(loop, context)
            else:
                loop.default_exception_handler(context)

        sys.excepthook = excepthook
        threading.excepthook = thread_hook
        if self._loop is not None:
            self._loop.set_exception_handler(loop_handler)

        restored = False

        def unsubscribe() -> None:
            nonlocal restored
            if restored:
                return
            restored = True
            if sys.excepthook is excepthook:
                sys.excepthook = previous_excepthook
            if threading.excepthook is thread_hook:
                threading.excepthook = previous_thread_hook
            if self._loop is not None:
                self._loop.set_exception_handler(previous_loop_handler)

        return unsubscribe


class NullErrorSource:
    """Error capture not supported."""

    @property
    def available(self) -> bool:
        return False

    def subscribe(
        self,
        on_runtime_error: RuntimeErrorCallback,
        on_rejection: RejectionCallback,
    ) -> Unsubscribe:
        return lambda: None
