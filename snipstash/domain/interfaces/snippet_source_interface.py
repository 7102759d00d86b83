from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from snipstash.domain.entities.snippet import Snippet


class ISnippetSource(ABC):
    """Source of snippet records for the query engine.

    Domain defines the contract; infrastructure decides where records come from.
    """

    @abstractmethod
    def list_snippets(self) -> List[Snippet]:  # fresh list on every call
        raise NotImplementedError
