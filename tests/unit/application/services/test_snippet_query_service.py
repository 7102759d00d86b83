import pytest

from snipstash.application.dto.snippet_query_dto import SnippetQueryDTO
from snipstash.application.services.snippet_query_service import SnippetQueryService
import snipstash.application.services.snippet_query_service as svc_mod
from snipstash.domain.interfaces.snippet_source_interface import ISnippetSource


class StubSource(ISnippetSource):
    def __init__(self, snippets):
        self._snippets = list(snippets)
        self.calls = 0

    def list_snippets(self):
        self.calls += 1
        return list(self._snippets)


@pytest.fixture
def service(snippets, monkeypatch):
    monkeypatch.setattr(svc_mod, "emit_event", lambda *a, **k: None)
    return SnippetQueryService(snippet_source=StubSource(snippets), default_page_size=2)


def _ids(items):
    return [s.id for s in items]


def test_search_filters_sorts_and_paginates(service):
    page = service.search(SnippetQueryDTO(query="utils", sort_by="title"))
    assert _ids(page.items) == ["1", "5"]
    assert page.total == 3
    assert page.page_size == 2
    assert page.has_next is True

    second = service.search(SnippetQueryDTO(query="utils", sort_by="title", page=2))
    assert _ids(second.items) == ["4"]
    assert second.has_next is False


def test_search_language_and_favorites_filters(service):
    page = service.search(SnippetQueryDTO(language="typescript", favorites_only=True))
    assert _ids(page.items) == ["3"]
    assert page.total == 1


def test_search_without_sort_keeps_input_order(service):
    page = service.search(SnippetQueryDTO(page_size=10))
    assert _ids(page.items) == ["1", "2", "3", "4", "5", "6"]


def test_search_page_beyond_range_is_empty(service):
    page = service.search(SnippetQueryDTO(page=9))
    assert page.items == []
    assert page.total == 6


def test_search_emits_structured_event(snippets, monkeypatch):
    events = []
    monkeypatch.setattr(svc_mod, "emit_event", lambda e, severity="info", **f: events.append((e, f)))
    service = SnippetQueryService(StubSource(snippets))

    service.search(SnippetQueryDTO(query="SQL"))

    event, fields = events[0]
    assert event == "snippet_search"
    assert fields["total"] == 1 and fields["returned"] == 1
    assert fields["query_len"] == 3


def test_aggregates_delegate_to_engine(service):
    assert service.count_by_language() == {"javascript": 2, "sql": 1, "typescript": 2, "python": 1}
    assert service.unique_tags()[0] == "api"
    assert sorted(service.group_by_language()) == ["javascript", "python", "sql", "typescript"]
    assert service.favorite_title_length() == 42


def test_find_snippet(service):
    assert service.find_snippet("2").title == "SQL Inner Join"
    assert service.find_snippet("missing") is None


def test_invalid_default_page_size():
    with pytest.raises(ValueError):
        SnippetQueryService(StubSource([]), default_page_size=0)
