from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from snipstash.domain.interfaces.scheduler_interface import IScheduler
from snipstash.infrastructure.scheduling.threading_scheduler import run_callback_safely


class AsyncioScheduler(IScheduler):
    """Scheduler backed by ``loop.call_later``.

    Without an explicit loop, the running loop is looked up on each call, so
    ``call_later`` must then be used from inside a coroutine or callback.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def call_later(self, delay_seconds: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(
            max(0.0, float(delay_seconds)),
            run_callback_safely,
            callback,
            "asyncio",
        )

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
