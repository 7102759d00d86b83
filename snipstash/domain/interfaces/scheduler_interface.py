from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class IScheduler(ABC):
    """Host capability needed by the debouncer: delayed call + cancel.

    Handles are opaque to callers; only the scheduler that produced a handle
    may cancel it.
    """

    @abstractmethod
    def call_later(self, delay_seconds: float, callback: Callable[[], Any]) -> Any:
        """Run ``callback`` once after ``delay_seconds``; return a cancellable handle."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel ``handle``; after return it must not fire."""
        raise NotImplementedError
