# src/application/projection.py

from datetime import datetime, timezone
from typing import Callable

from src.domain.models import Document, SourceRecord


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def project(
    record: SourceRecord,
    clock: Callable[[], datetime] = utc_now,
) -> Document:
    """
    Map a source record to its index document.

    Text fields are copied verbatim (None stays None); only display code
    substitutes empty strings. created_at is the projection time.
    """
    return Document(
        id=str(record.id),
        title=record.title,
        description=record.description,
        transcript=record.transcript,
        created_at=clock(),
    )
