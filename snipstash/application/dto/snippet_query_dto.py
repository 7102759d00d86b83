from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from snipstash.domain.entities.snippet import Snippet
from snipstash.domain.services.snippet_query import SortKey, parse_sort_key


@dataclass
class SnippetQueryDTO:
    query: str = ""
    language: Optional[str] = None
    favorites_only: bool = False
    sort_by: Optional[str] = None
    page: int = 1
    page_size: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.query, str):
            raise ValueError("query must be a string")
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page <= 0:
            raise ValueError("page must be positive int")
        if self.page_size is not None and (
            isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size <= 0
        ):
            raise ValueError("page_size must be positive int")
        if self.sort_by is not None:
            # raises InvalidSortKeyError (a ValueError) on unknown keys
            self.sort_by = parse_sort_key(self.sort_by).value

    @property
    def sort_key(self) -> Optional[SortKey]:
        return SortKey(self.sort_by) if self.sort_by is not None else None


@dataclass
class SnippetPage:
    items: List[Snippet] = field(default_factory=list)
    page: int = 1
    page_size: int = 20
    total: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ValueError("page_size must be positive int")
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page <= 0:
            raise ValueError("page must be positive int")
        if self.total < 0:
            raise ValueError("total must be >= 0")

    @property
    def total_pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
