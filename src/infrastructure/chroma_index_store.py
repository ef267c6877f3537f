# src/infrastructure/chroma_index_store.py

from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List

import chromadb
from chromadb.config import Settings

from src.domain.errors import DataAccessError
from src.domain.interfaces import IndexStorePort
from src.domain.models import BooleanQuery, Document
from src.infrastructure.text_engine import TEXT_FIELDS, FullTextIndex, matches_exact


# ── Constants ─────────────────────────────────────────────────────────────────

DEFAULT_INDEX_NAME = "documents"
CREATED_AT_KEY     = "created_at"

# Retrieval never uses vectors, but every Chroma record needs one.
PLACEHOLDER_EMBEDDING = [1.0]


class ChromaIndexStore(IndexStorePort):
    """
    Persistent index store backed by a ChromaDB collection.

    ┌────────────────────────────────────────────────────────┐
    │  ChromaDB (disk)    →  documents, keyed by record id   │
    │  FullTextIndex      →  exact + full-text evaluation    │
    └────────────────────────────────────────────────────────┘

    Storage layout per document:
        id        → Document.id
        metadata  → title / description / transcript, omitted when None,
                    plus created_at as epoch milliseconds
    """

    def __init__(
        self,
        persist_directory: str,
        index_name: str = DEFAULT_INDEX_NAME,
    ):
        self._persist_directory = persist_directory
        self._index_name        = index_name

        path = Path(persist_directory)
        if path.exists() and not path.is_dir():
            raise DataAccessError(
                f"Failed to initialize ChromaDB: path '{persist_directory}' is a file."
            )
        path.mkdir(parents=True, exist_ok=True)

        try:
            self._client = chromadb.PersistentClient(
                path=persist_directory,
                settings=Settings(anonymized_telemetry=False),
            )
            self._collection = self._client.get_or_create_collection(
                name=index_name,
            )
        except Exception as error:
            raise DataAccessError(
                f"Failed to initialize ChromaDB at '{persist_directory}'.\n"
                f"The database may be locked by another process or corrupted.\n"
                f"Original error: {error}"
            ) from error

    # ─── IndexStorePort ───────────────────────────────────────────────────────

    def count(self) -> int:
        with self._translate_errors("count"):
            return self._collection.count()

    def upsert(self, document: Document) -> None:
        with self._translate_errors(f"upsert of document '{document.id}'"):
            self._collection.upsert(
                ids        = [document.id],
                embeddings = [PLACEHOLDER_EMBEDDING],
                metadatas  = [self._to_metadata(document)],
            )

    def query_exact(
        self,
        title: str,
        description: str,
        transcript: str,
    ) -> List[Document]:
        return [
            document
            for document in self.all()
            if matches_exact(document, "title", title)
            or matches_exact(document, "description", description)
            or matches_exact(document, "transcript", transcript)
        ]

    def query_full_text(self, query: BooleanQuery) -> List[Document]:
        return FullTextIndex(self.all()).search(query)

    # ─── Reads ────────────────────────────────────────────────────────────────

    def all(self) -> List[Document]:
        """Every stored document, ordered by numeric id."""
        with self._translate_errors("read"):
            results = self._collection.get(include=["metadatas"])

        documents = [
            self._from_metadata(document_id, metadata)
            for document_id, metadata in zip(results["ids"], results["metadatas"])
        ]
        # Ids are decimal strings: shorter first, then lexical == numeric order
        return sorted(documents, key=lambda d: (len(d.id), d.id))

    # ─── Private: mapping ─────────────────────────────────────────────────────

    @staticmethod
    def _to_metadata(document: Document) -> dict:
        metadata = {
            CREATED_AT_KEY: round(document.created_at.timestamp() * 1000),
        }
        # Chroma metadata cannot hold None: absent key means NULL
        for field in TEXT_FIELDS:
            value = getattr(document, field)
            if value is not None:
                metadata[field] = value
        return metadata

    @staticmethod
    def _from_metadata(document_id: str, metadata: dict) -> Document:
        metadata = metadata or {}
        millis = metadata.get(CREATED_AT_KEY, 0)
        return Document(
            id          = document_id,
            title       = metadata.get("title"),
            description = metadata.get("description"),
            transcript  = metadata.get("transcript"),
            created_at  = datetime.fromtimestamp(millis / 1000, tz=timezone.utc),
        )

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except DataAccessError:
            raise
        except Exception as error:
            raise DataAccessError(
                f"ChromaDB {operation} failed on index '{self._index_name}': {error}"
            ) from error
