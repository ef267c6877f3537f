# src/bootstrap.py
# Composition root shared by main.py and api.py.

from dataclasses import dataclass
from typing import Dict, Optional

from src.application.search_service import FullTextSearch, RelationalSearch
from src.application.sync_service import SyncService
from src.config import Settings
from src.domain.interfaces import (
    EventSinkPort,
    IndexStorePort,
    RelationalSourcePort,
    SearchPort,
)
from src.infrastructure.chroma_index_store import ChromaIndexStore
from src.infrastructure.database import build_engine
from src.infrastructure.episode_reader import SqlEpisodeReader
from src.infrastructure.event_sink import LoggingEventSink, setup_logging
from src.infrastructure.memory_index_store import InMemoryIndexStore


@dataclass
class Services:
    sync_service: SyncService
    index_store: IndexStorePort
    searches: Dict[str, SearchPort]
    default_strategy: str = "fulltext"


def build_index_store(settings: Settings) -> IndexStorePort:
    if settings.index_backend == "memory":
        return InMemoryIndexStore()
    return ChromaIndexStore(
        persist_directory=settings.chroma_persist_directory,
        index_name=settings.index_name,
    )


def build_services(
    settings: Settings,
    source: Optional[RelationalSourcePort] = None,
    index_store: Optional[IndexStorePort] = None,
    events: Optional[EventSinkPort] = None,
) -> Services:
    """Wire every collaborator; any of them can be passed in pre-built."""
    if events is None:
        events = LoggingEventSink(
            setup_logging(
                logger_name="podcast_search",
                log_file=settings.log_file,
                verbose=settings.verbose,
            )
        )
    if source is None:
        source = SqlEpisodeReader(build_engine(settings.database_url))
    if index_store is None:
        index_store = build_index_store(settings)

    return Services(
        sync_service=SyncService(source, index_store, events),
        index_store=index_store,
        searches={
            "fulltext": FullTextSearch(index_store, events, max_results=settings.max_results),
            "relational": RelationalSearch(index_store, events),
        },
        default_strategy=settings.search_strategy,
    )


def select_search(services: Services, strategy: str) -> SearchPort:
    try:
        return services.searches[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown search strategy '{strategy}'. "
            f"Expected one of {sorted(services.searches)}."
        ) from None
