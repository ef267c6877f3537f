# src/domain/interfaces.py

from abc import ABC, abstractmethod
from typing import Any, List

from .models import BooleanQuery, Document, SourceRecord


class RelationalSourcePort(ABC):
    """
    Port for the relational store holding podcast episodes.
    Only episodes flagged complete are visible through it.
    """

    @abstractmethod
    def list_complete_records(self) -> List[SourceRecord]:
        """Return complete episodes ordered by id ascending."""
        ...


class IndexStorePort(ABC):

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def upsert(self, document: Document) -> None: ...

    @abstractmethod
    def query_exact(
        self,
        title: str,
        description: str,
        transcript: str,
    ) -> List[Document]:
        """
        Documents whose title OR description OR transcript matches the
        value given for that field. Matching semantics belong to the store.
        """
        ...

    @abstractmethod
    def query_full_text(self, query: BooleanQuery) -> List[Document]:
        """
        Documents matching every must clause, ordered by relevance
        (descending), at most query.max_results of them.
        """
        ...


class SearchPort(ABC):

    @abstractmethod
    def find(self, query: str) -> List[Document]: ...


class EventSinkPort(ABC):
    """
    Structured observability events. Injected wherever something
    needs to report progress; there is no process-wide logger.
    """

    @abstractmethod
    def emit(self, event: str, **fields: Any) -> None: ...
