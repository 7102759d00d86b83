from __future__ import annotations

from typing import Dict, List, Optional

from observability import emit_event
from snipstash.application.dto.snippet_query_dto import SnippetPage, SnippetQueryDTO
from snipstash.domain.entities.snippet import Snippet
from snipstash.domain.interfaces.snippet_source_interface import ISnippetSource
from snipstash.domain.services import snippet_query


class SnippetQueryService:
    """Application service orchestrating snippet queries.

    Thin orchestration over the pure query engine and a snippet source.
    """

    def __init__(self, snippet_source: ISnippetSource, default_page_size: int = 20) -> None:
        if default_page_size <= 0:
            raise ValueError("default_page_size must be positive int")
        self._source = snippet_source
        self._default_page_size = default_page_size

    def search(self, dto: SnippetQueryDTO) -> SnippetPage:
        """Filter, sort and paginate in one pass over the current snippets."""
        snippets = self._source.list_snippets()
        matched = snippet_query.filter_snippets(snippets, dto.query)
        if dto.language is not None:
            matched = [s for s in matched if s.language == dto.language]
        if dto.favorites_only:
            matched = snippet_query.get_favorites(matched)
        if dto.sort_key is not None:
            matched = snippet_query.sort_snippets(matched, dto.sort_key)

        page_size = dto.page_size or self._default_page_size
        items = snippet_query.paginate_snippets(matched, dto.page, page_size)
        emit_event(
            "snippet_search",
            severity="info",
            query_len=len(dto.query),
            language=dto.language or "",
            favorites_only=bool(dto.favorites_only),
            sort_by=dto.sort_by or "",
            page=dto.page,
            total=len(matched),
            returned=len(items),
        )
        return SnippetPage(items=items, page=dto.page, page_size=page_size, total=len(matched))

    def group_by_language(self) -> Dict[str, List[Snippet]]:
        return snippet_query.group_by_language(self._source.list_snippets())

    def unique_tags(self) -> List[str]:
        return snippet_query.unique_tags(self._source.list_snippets())

    def count_by_language(self) -> Dict[str, int]:
        return snippet_query.count_by_language(self._source.list_snippets())

    def favorite_title_length(self) -> int:
        return snippet_query.total_favorite_title_length(self._source.list_snippets())

    def find_snippet(self, snippet_id: str) -> Optional[Snippet]:
        return snippet_query.find_snippet_by_id(self._source.list_snippets(), snippet_id)
