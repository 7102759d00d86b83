"""
tests/conftest.py

Shared fixtures: the sample snippet collection and a manual scheduler with a
virtual clock for deterministic debounce tests.
"""

from datetime import datetime, timezone

import pytest

from snipstash.domain.entities.snippet import Snippet
from snipstash.domain.interfaces.scheduler_interface import IScheduler


def _ts(day: str) -> datetime:
    return datetime.fromisoformat(day).replace(tzinfo=timezone.utc)


SAMPLE_SNIPPETS = (
    Snippet("1", "Array flatten", "javascript", ("arrays", "utils"), True, _ts("2025-01-15")),
    Snippet("2", "SQL Inner Join", "sql", ("database", "joins"), False, _ts("2025-03-20")),
    Snippet("3", "useDebounce hook", "typescript", ("react", "hooks"), True, _ts("2025-02-10")),
    Snippet("4", "Python list comprehension", "python", ("lists", "utils"), False, _ts("2025-04-05")),
    Snippet("5", "Fetch wrapper", "javascript", ("api", "utils"), True, _ts("2025-01-30")),
    Snippet("6", "React useEffect cleanup", "typescript", ("react", "hooks"), False, _ts("2025-05-12")),
)


@pytest.fixture
def snippets():
    return list(SAMPLE_SNIPPETS)


class ManualScheduler(IScheduler):
    """Fake scheduler: nothing fires until ``advance`` moves the clock."""

    def __init__(self):
        self.now_ms = 0.0
        self._seq = 0
        self._timers = {}
        self.cancelled = []

    def call_later(self, delay_seconds, callback):
        self._seq += 1
        self._timers[self._seq] = (self.now_ms + delay_seconds * 1000.0, self._seq, callback)
        return self._seq

    def cancel(self, handle):
        self.cancelled.append(handle)
        self._timers.pop(handle, None)

    @property
    def outstanding(self):
        return len(self._timers)

    def advance(self, ms):
        target = self.now_ms + ms
        while True:
            due = sorted(t for t in self._timers.values() if t[0] <= target)
            if not due:
                break
            when, seq, callback = due[0]
            del self._timers[seq]
            self.now_ms = when
            callback()
        self.now_ms = target


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()
