# src/infrastructure/memory_index_store.py

from typing import Dict, List

from src.domain.interfaces import IndexStorePort
from src.domain.models import BooleanQuery, Document
from src.infrastructure.text_engine import FullTextIndex, matches_exact


class InMemoryIndexStore(IndexStorePort):
    """
    Index store kept in a dict keyed by document id.
    Nothing survives the process; used for tests and the "memory" backend.
    """

    def __init__(self):
        self._documents: Dict[str, Document] = {}

    def count(self) -> int:
        return len(self._documents)

    def upsert(self, document: Document) -> None:
        self._documents[document.id] = document

    def get(self, document_id: str) -> Document:
        return self._documents[document_id]

    def all(self) -> List[Document]:
        return list(self._documents.values())

    def query_exact(
        self,
        title: str,
        description: str,
        transcript: str,
    ) -> List[Document]:
        return [
            document
            for document in self._documents.values()
            if matches_exact(document, "title", title)
            or matches_exact(document, "description", description)
            or matches_exact(document, "transcript", transcript)
        ]

    def query_full_text(self, query: BooleanQuery) -> List[Document]:
        return FullTextIndex(self.all()).search(query)
