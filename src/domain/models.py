# src/domain/models.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class SourceRecord:
    """
    A denormalized podcast episode row, transcript segments already joined.
    """
    id: int
    title: Optional[str]
    description: Optional[str]
    transcript: str = ""


@dataclass(frozen=True)
class Document:
    """
    Search-ready projection of a SourceRecord. `id` is str(SourceRecord.id).
    """
    id: str
    title: Optional[str]
    description: Optional[str]
    transcript: Optional[str]
    created_at: datetime = field(compare=False)

    def __repr__(self) -> str:
        preview = (self.title or "")[:60]
        return f"Document(id='{self.id}', title='{preview}')"


# ── Full-text query structure ─────────────────────────────────────────────────

FUZZINESS_AUTO = "AUTO"


@dataclass(frozen=True)
class FieldBoost:
    field: str
    boost: float = 1.0


@dataclass(frozen=True)
class MultiMatchClause:
    query: str
    fields: Tuple[FieldBoost, ...]
    fuzziness: Optional[str] = None


@dataclass(frozen=True)
class MatchClause:
    field: str
    query: str


@dataclass(frozen=True)
class BooleanQuery:
    """
    must clauses are required, should clauses only add to the score.
    """
    must: Tuple[MultiMatchClause, ...] = ()
    should: Tuple[MatchClause, ...] = ()
    max_results: int = 1000
