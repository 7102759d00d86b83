from __future__ import annotations

import threading
from typing import Any, Callable

from observability import emit_event
from snipstash.domain.interfaces.scheduler_interface import IScheduler


def run_callback_safely(callback: Callable[[], Any], scheduler_name: str) -> None:
    """Run a scheduled callback; failures are logged since there is no caller to raise to."""
    try:
        callback()
    except Exception as e:
        emit_event(
            "scheduled_callback_failed",
            severity="error",
            scheduler=scheduler_name,
            error=str(e),
            error_type=type(e).__name__,
        )


class ThreadingScheduler(IScheduler):
    """Scheduler backed by one daemon ``threading.Timer`` per call."""

    def call_later(self, delay_seconds: float, callback: Callable[[], Any]) -> threading.Timer:
        timer = threading.Timer(
            max(0.0, float(delay_seconds)),
            run_callback_safely,
            args=(callback, "threading"),
        )
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()
