"""
Domain service: call-coalescing debounce wrapper.

A burst of calls (each less than ``delay_ms`` after the previous one) results
in exactly one call of the wrapped function, ``delay_ms`` after the last call
of the burst, with that call's arguments. Timing is delegated to an
``IScheduler`` so the same logic runs on threads, asyncio, or a fake clock.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import Any, Callable, Optional

from snipstash.domain.interfaces.scheduler_interface import IScheduler

logger = logging.getLogger(__name__)


class Debouncer:
    """Wrap ``fn`` so calls are deferred and coalesced.

    Holds a single pending-call slot. Each call cancels whatever occupies the
    slot and schedules a fresh one; the slot is cleared when the call fires.
    """

    def __init__(self, fn: Callable[..., Any], delay_ms: float, scheduler: IScheduler) -> None:
        if not callable(fn):
            raise TypeError("fn must be callable")
        if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)):
            raise TypeError(f"delay_ms must be a number, got {type(delay_ms).__name__}")
        if delay_ms < 0:
            logger.warning("negative debounce delay %r clamped to 0", delay_ms)
            delay_ms = 0
        self._fn = fn
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self._lock = threading.Lock()
        self._pending: Optional[Any] = None
        # bumped on every call; a callback only fires if its generation is still current
        self._generation = 0
        functools.update_wrapper(self, fn, updated=())

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._pending is not None:
                self._scheduler.cancel(self._pending)
                self._pending = None
                logger.debug("debounce reset for %s", getattr(self._fn, "__name__", self._fn))
            self._generation += 1
            generation = self._generation
            self._pending = self._scheduler.call_later(
                self.delay_ms / 1000.0,
                lambda: self._fire(generation, args, kwargs),
            )

    def _fire(self, generation: int, args: tuple, kwargs: dict) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None
        self._fn(*args, **kwargs)


def debounce(
    fn: Optional[Callable[..., Any]] = None,
    delay_ms: float = 300,
    *,
    scheduler: IScheduler,
) -> Any:
    """Build a ``Debouncer``.

    Usable directly, ``debounce(fn, 300, scheduler=s)``, or as a decorator,
    ``@debounce(300, scheduler=s)`` / ``@debounce(delay_ms=300, scheduler=s)``.
    """
    if fn is not None and not callable(fn):
        if isinstance(fn, bool) or not isinstance(fn, (int, float)):
            raise TypeError(f"expected a callable or a delay in ms, got {type(fn).__name__}")
        # decorator form with the delay passed positionally
        delay_ms, fn = fn, None
    if fn is None:
        return lambda f: Debouncer(f, delay_ms, scheduler)
    return Debouncer(fn, delay_ms, scheduler)
