from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from observability import emit_event
from snipstash.domain.entities.snippet import Snippet
from snipstash.domain.interfaces.snippet_source_interface import ISnippetSource

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


class InMemorySnippetSource(ISnippetSource):
    """Snippet source over records already held in memory.

    Accepts domain entities or raw mappings (parsed JSON, user input, ...).
    Raw records are mapped once at construction; records without an id are
    skipped.
    """

    def __init__(self, records: Iterable[Union[Snippet, Mapping[str, Any]]] = ()) -> None:
        snippets: List[Snippet] = []
        for index, record in enumerate(records or ()):
            if isinstance(record, Snippet):
                snippets.append(record)
                continue
            try:
                snippets.append(self._from_record(record))
            except (TypeError, ValueError) as e:
                emit_event(
                    "snippet_record_skipped",
                    severity="warning",
                    index=index,
                    error=str(e),
                )
        self._snippets = tuple(snippets)

    def list_snippets(self) -> List[Snippet]:
        return list(self._snippets)

    # ---------- Mapping helpers ----------
    @staticmethod
    def _parse_created_at(value: Any) -> Optional[datetime]:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
        raise TypeError(f"unsupported createdAt value: {type(value).__name__}")

    @staticmethod
    def _parse_tags(value: Any) -> Tuple[str, ...]:
        if value is None or value == "":
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return tuple(str(t) for t in value)
        raise TypeError(f"unsupported tags value: {type(value).__name__}")

    @staticmethod
    def _parse_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
        raise ValueError(f"unsupported isFavorite value: {value!r}")

    def _from_record(self, d: Mapping[str, Any]) -> Snippet:
        if not isinstance(d, Mapping):
            raise TypeError(f"record must be a mapping, got {type(d).__name__}")
        raw_id = d.get("id")
        if raw_id is None or str(raw_id).strip() == "":
            raise ValueError("record has no id")
        favorite = d.get("isFavorite", d.get("is_favorite", False))
        created = d.get("createdAt", d.get("created_at"))
        return Snippet(
            id=str(raw_id),
            title=str(d.get("title", "") or ""),
            language=str(d.get("language", "") or ""),
            tags=self._parse_tags(d.get("tags")),
            is_favorite=self._parse_bool(favorite),
            created_at=self._parse_created_at(created),
        )
