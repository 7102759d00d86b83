from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple


@dataclass(frozen=True)
class Snippet:
    """Domain entity: code snippet record.

    Immutable; "updates" return a new instance via ``with_changes``.
    Identity is ``id`` - compare by id, not by full equality.
    """

    id: str
    title: str
    language: str
    tags: Tuple[str, ...] = field(default_factory=tuple)
    is_favorite: bool = False
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        # lists from callers are frozen so later mutation of their list can't leak in
        if isinstance(self.tags, str):
            object.__setattr__(self, "tags", (self.tags,))
        elif not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags or ()))

    def with_changes(self, **fields: Any) -> "Snippet":
        return replace(self, **fields)

    def update(self, title: str, is_favorite: bool) -> "Snippet":
        return self.with_changes(title=title, is_favorite=is_favorite)

    def add_tags(self, *new_tags: str) -> "Snippet":
        return self.with_changes(tags=self.tags + tuple(new_tags))

    @classmethod
    def of(
        cls,
        id: str,
        title: str,
        language: str,
        tags: Iterable[str] = (),
        is_favorite: bool = False,
        created_at: Optional[datetime] = None,
    ) -> "Snippet":
        return cls(
            id=str(id),
            title=title,
            language=language,
            tags=tags,
            is_favorite=bool(is_favorite),
            created_at=created_at,
        )
