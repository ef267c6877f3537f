# src/application/sync_service.py

from src.application.projection import project, utc_now
from src.domain.errors import DataAccessError, PartialIngestionError
from src.domain.interfaces import EventSinkPort, IndexStorePort, RelationalSourcePort


class SyncService:
    """
    Ingestion use case: bring the index store in line with the relational store.

    Reconciliation is count-only:
    - count(index) == count(complete source records) → already synced, no writes
    - otherwise → every source record is re-projected and upserted

    Content drift on already-indexed records is not detected, and documents
    whose source record disappeared are never removed.
    """

    def __init__(
        self,
        source: RelationalSourcePort,
        index_store: IndexStorePort,
        events: EventSinkPort,
        clock=utc_now,
    ):
        self._source = source
        self._index_store = index_store
        self._events = events
        self._clock = clock

    def sync(self) -> None:
        # Single scan: the listing used for the count is the one ingested.
        records = self._source.list_complete_records()
        indexed = self._index_store.count()

        if indexed == len(records):
            self._events.emit("sync.already_synced", documents=indexed)
            return

        self._events.emit(
            "sync.started",
            source_records=len(records),
            indexed_documents=indexed,
        )

        ingested = 0
        for record in records:
            document = project(record, clock=self._clock)
            try:
                self._index_store.upsert(document)
            except DataAccessError as error:
                self._events.emit(
                    "sync.aborted",
                    record_id=record.id,
                    ingested=ingested,
                    error=str(error),
                )
                raise PartialIngestionError(
                    f"Upsert of record {record.id} failed after "
                    f"{ingested} of {len(records)} documents were written: {error}",
                    record_id=record.id,
                    ingested=ingested,
                ) from error

            ingested += 1
            self._events.emit(
                "sync.record_ingested",
                id=document.id,
                title=document.title,
            )

        self._events.emit("sync.completed", ingested=ingested)
