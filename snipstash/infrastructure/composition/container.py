from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, Mapping, Optional, Union


_scheduler_singleton = None  # type: Optional["ThreadingScheduler"]
_singleton_lock = threading.Lock()
_logging_configured = False


def configure_logging() -> None:
    """
    Apply LOG_LEVEL to structlog once per process and tag every event with ENVIRONMENT.
    """
    global _logging_configured
    if _logging_configured:
        return
    with _singleton_lock:
        if _logging_configured:
            return

        from config import config
        from observability import setup_structlog_logging

        setup_structlog_logging(config.LOG_LEVEL, environment=config.ENVIRONMENT)
        _logging_configured = True


def get_scheduler():
    """
    Composition Root: build and return the process-wide ThreadingScheduler.
    """
    global _scheduler_singleton
    if _scheduler_singleton is not None:
        return _scheduler_singleton

    # Ensure singleton creation is thread-safe under concurrent first requests
    with _singleton_lock:
        if _scheduler_singleton is not None:
            return _scheduler_singleton

        from snipstash.infrastructure.scheduling.threading_scheduler import ThreadingScheduler

        _scheduler_singleton = ThreadingScheduler()
        return _scheduler_singleton


def build_snippet_query_service(records: Iterable[Union[Any, Mapping[str, Any]]] = ()):
    """Wire a SnippetQueryService over in-memory records, page size from config."""
    configure_logging()
    from config import config
    from snipstash.application.services.snippet_query_service import SnippetQueryService
    from snipstash.infrastructure.sources.in_memory_snippet_source import InMemorySnippetSource

    return SnippetQueryService(
        snippet_source=InMemorySnippetSource(records),
        default_page_size=int(config.SEARCH_PAGE_SIZE),
    )


def make_debounced(fn: Callable[..., Any], delay_ms: Optional[float] = None, scheduler=None):
    """Debounce ``fn`` on the shared scheduler; delay defaults to DEBOUNCE_DELAY_MS."""
    configure_logging()
    from config import config
    from snipstash.domain.services.debouncer import Debouncer

    delay = config.DEBOUNCE_DELAY_MS if delay_ms is None else delay_ms
    return Debouncer(fn, delay, scheduler or get_scheduler())


def build_live_search(
    records: Iterable[Union[Any, Mapping[str, Any]]],
    on_results: Callable[[Any], Any],
    delay_ms: Optional[float] = None,
    scheduler=None,
):
    from config import config
    from snipstash.application.services.live_search import LiveSearch

    delay = config.DEBOUNCE_DELAY_MS if delay_ms is None else delay_ms
    return LiveSearch(
        service=build_snippet_query_service(records),
        scheduler=scheduler or get_scheduler(),
        on_results=on_results,
        delay_ms=delay,
    )
