# src/application/search_service.py

from typing import List, Optional

from src.domain.errors import InvalidArgumentError
from src.domain.interfaces import EventSinkPort, IndexStorePort, SearchPort
from src.domain.models import (
    FUZZINESS_AUTO,
    BooleanQuery,
    Document,
    FieldBoost,
    MatchClause,
    MultiMatchClause,
)


DEFAULT_MAX_RESULTS = 1000

# Short curated fields are stronger relevance signals than the long transcript.
FULL_TEXT_FIELDS = (
    FieldBoost("title", 2.0),
    FieldBoost("description", 2.0),
    FieldBoost("transcript", 1.0),
)


def _require_text(query: Optional[str]) -> str:
    if query is None or not query.strip():
        raise InvalidArgumentError("the query must not be null or empty")
    return query


class RelationalSearch(SearchPort):
    """
    Exact field matching delegated to the index store.

    The one query string is passed positionally for title, description and
    transcript; the store ORs the three.
    """

    def __init__(self, index_store: IndexStorePort, events: EventSinkPort):
        self._index_store = index_store
        self._events = events

    def find(self, query: str) -> List[Document]:
        query = _require_text(query)
        results = self._index_store.query_exact(query, query, query)
        self._events.emit(
            "search.completed", strategy="relational", query=query, results=len(results)
        )
        return results


class FullTextSearch(SearchPort):
    """
    Fuzzy multi-field query executed by the index store's full-text engine.

    Query shape:
    - must:   multi_match over title^2, description^2, transcript (fuzziness AUTO)
    - should: match on transcript alone, boosting literal transcript hits

    Ordering is the engine's relevance order and is not re-sorted here.
    """

    def __init__(
        self,
        index_store: IndexStorePort,
        events: EventSinkPort,
        max_results: int = DEFAULT_MAX_RESULTS,
    ):
        self._index_store = index_store
        self._events = events
        self._max_results = max_results

    def build_query(self, query: str) -> BooleanQuery:
        must = (
            MultiMatchClause(
                query=query,
                fields=FULL_TEXT_FIELDS,
                fuzziness=FUZZINESS_AUTO,
            ),
        )

        should = ()
        if query and query.strip():
            should = (MatchClause(field="transcript", query=query),)

        return BooleanQuery(must=must, should=should, max_results=self._max_results)

    def find(self, query: str) -> List[Document]:
        query = _require_text(query)
        results = self._index_store.query_full_text(self.build_query(query))
        self._events.emit(
            "search.completed", strategy="fulltext", query=query, results=len(results)
        )
        return results
