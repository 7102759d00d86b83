"""
Domain service: in-memory query engine over snippet collections.

Pure functions only. Every function takes the full sequence and returns a new
list/dict/scalar; neither the sequence nor its snippets are mutated.

- sort by title / language / created_at (stable)
- group by language, unique tags, count by language
- 1-based pagination (fail-fast on non-positive parameters)
- case-insensitive free-text search over title, language and tags
"""

from __future__ import annotations

import unicodedata
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from snipstash.domain.entities.snippet import Snippet


class InvalidSortKeyError(ValueError):
    pass


class InvalidPaginationError(ValueError):
    pass


class SortKey(Enum):
    """Supported sort keys"""
    TITLE = "title"
    LANGUAGE = "language"
    CREATED_AT = "created_at"


_SORT_KEY_ALIASES = {
    "createdAt": SortKey.CREATED_AT,
    "created": SortKey.CREATED_AT,
}


def parse_sort_key(key: Union[SortKey, str]) -> SortKey:
    if isinstance(key, SortKey):
        return key
    if isinstance(key, str):
        raw = key.strip()
        if raw in _SORT_KEY_ALIASES:
            return _SORT_KEY_ALIASES[raw]
        try:
            return SortKey(raw.lower())
        except ValueError:
            pass
    valid = ", ".join(k.value for k in SortKey)
    raise InvalidSortKeyError(f"unknown sort key {key!r}; expected one of: {valid}")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _char_class(ch: str) -> int:
    # whitespace < punctuation < symbols < digits < letters, as in CLDR root collation
    if ch.isspace():
        return 0
    category = unicodedata.category(ch)
    if category.startswith("P"):
        return 1
    if category.startswith("S"):
        return 2
    if category.startswith("N"):
        return 3
    return 4


def collation_key(text: str) -> Tuple[Tuple[Tuple[int, str], ...], str, str]:
    """Locale-like ordering key.

    Base letters first (accents and case ignored), then accents, then case with
    lowercase before uppercase ("apple" < "Apple" < "banana"). On the base
    level whitespace and punctuation sort before symbols, digits and letters
    ("_a" < "1a" < "a").
    """
    value = text or ""
    base = tuple((_char_class(ch), ch) for ch in _strip_accents(value).casefold())
    return (base, value.casefold(), value.swapcase())


_EPOCH_MAX = datetime.max.replace(tzinfo=timezone.utc)


def _timestamp_key(snippet: Snippet) -> Tuple[int, datetime]:
    created = snippet.created_at
    if created is None:
        # undated snippets go last, input order kept by the stable sort
        return (1, _EPOCH_MAX)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (0, created)


def sort_snippets(snippets: Sequence[Snippet], key: Union[SortKey, str]) -> List[Snippet]:
    sort_key = parse_sort_key(key)
    if sort_key is SortKey.TITLE:
        return sorted(snippets, key=lambda s: collation_key(s.title))
    if sort_key is SortKey.LANGUAGE:
        return sorted(snippets, key=lambda s: collation_key(s.language))
    return sorted(snippets, key=_timestamp_key)


def group_by_language(snippets: Sequence[Snippet]) -> Dict[str, List[Snippet]]:
    groups: Dict[str, List[Snippet]] = {}
    for snippet in snippets:
        groups.setdefault(snippet.language, []).append(snippet)
    return groups


def unique_tags(snippets: Sequence[Snippet]) -> List[str]:
    return sorted({tag for snippet in snippets for tag in snippet.tags})


def paginate_snippets(snippets: Sequence[Snippet], page: int, page_size: int) -> List[Snippet]:
    """Return the 1-based ``page`` of ``page_size`` items; ``[]`` past the end."""
    for name, value in (("page", page), ("page_size", page_size)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidPaginationError(f"{name} must be an int, got {type(value).__name__}")
        if value <= 0:
            raise InvalidPaginationError(f"{name} must be >= 1, got {value}")
    start = (page - 1) * page_size
    return list(snippets[start:start + page_size])


def _fold(text: str) -> str:
    return (text or "").casefold()


def matches_query(snippet: Snippet, query: str) -> bool:
    needle = _fold(query)
    if needle in _fold(snippet.title):
        return True
    if needle in _fold(snippet.language):
        return True
    return any(needle in _fold(tag) for tag in snippet.tags)


def filter_snippets(snippets: Sequence[Snippet], query: str) -> List[Snippet]:
    # an empty query is a substring of everything, so it keeps every snippet
    return [s for s in snippets if matches_query(s, query)]


def has_language(snippets: Sequence[Snippet], language: str) -> bool:
    return any(s.language == language for s in snippets)


def all_have_tags(snippets: Sequence[Snippet]) -> bool:
    return all(len(s.tags) > 0 for s in snippets)


def count_by_language(snippets: Sequence[Snippet]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for snippet in snippets:
        counts[snippet.language] = counts.get(snippet.language, 0) + 1
    return counts


def total_favorite_title_length(snippets: Sequence[Snippet]) -> int:
    total = 0
    for snippet in snippets:
        if snippet.is_favorite:
            total += len(snippet.title)
    return total


def get_titles(snippets: Sequence[Snippet]) -> List[str]:
    return [s.title for s in snippets]


def get_favorites(snippets: Sequence[Snippet]) -> List[Snippet]:
    return [s for s in snippets if s.is_favorite]


def get_favorites_by_language(snippets: Sequence[Snippet], language: str) -> List[Snippet]:
    return [s for s in snippets if s.is_favorite and s.language == language]


def find_snippet_by_id(snippets: Sequence[Snippet], snippet_id: str) -> Optional[Snippet]:
    return next((s for s in snippets if s.id == snippet_id), None)


def find_index_by_language(snippets: Sequence[Snippet], language: str) -> int:
    """Index of the first snippet in ``language``, or -1."""
    for index, snippet in enumerate(snippets):
        if snippet.language == language:
            return index
    return -1
