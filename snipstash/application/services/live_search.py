from __future__ import annotations

from typing import Any, Callable

from snipstash.application.dto.snippet_query_dto import SnippetPage, SnippetQueryDTO
from snipstash.application.services.snippet_query_service import SnippetQueryService
from snipstash.domain.interfaces.scheduler_interface import IScheduler
from snipstash.domain.services.debouncer import Debouncer


class LiveSearch:
    """Search-as-you-type: only the last query of a typing burst is searched.

    ``type()`` returns immediately; results are delivered to ``on_results`` on
    the scheduler's callback context once typing pauses for ``delay_ms``.
    """

    def __init__(
        self,
        service: SnippetQueryService,
        scheduler: IScheduler,
        on_results: Callable[[SnippetPage], Any],
        delay_ms: float = 300,
    ) -> None:
        self._service = service
        self._on_results = on_results
        self._debounced = Debouncer(self._run, delay_ms, scheduler)

    @property
    def pending(self) -> bool:
        return self._debounced.pending

    def type(self, query: str, **filters: Any) -> None:
        # validate now so bad input fails in the caller, not on the timer
        dto = SnippetQueryDTO(query=query, **filters)
        self._debounced(dto)

    def _run(self, dto: SnippetQueryDTO) -> None:
        self._on_results(self._service.search(dto))
