# tests/test_memory_index_store.py

from datetime import datetime, timezone

from src.domain.models import Document
from src.infrastructure.memory_index_store import InMemoryIndexStore


def _doc(doc_id: str, title=None, description=None, transcript=None) -> Document:
    return Document(
        id=doc_id,
        title=title,
        description=description,
        transcript=transcript,
        created_at=datetime.now(timezone.utc),
    )


def test_count_is_zero_when_empty():
    assert InMemoryIndexStore().count() == 0


def test_upsert_replaces_document_with_same_id():
    store = InMemoryIndexStore()
    store.upsert(_doc("1", title="first"))
    store.upsert(_doc("1", title="second"))

    assert store.count() == 1
    assert store.get("1").title == "second"


def test_query_exact_ors_the_three_fields():
    store = InMemoryIndexStore()
    store.upsert(_doc("1", title="vaadin"))
    store.upsert(_doc("2", description="vaadin"))
    store.upsert(_doc("3", transcript="vaadin"))
    store.upsert(_doc("4", title="spring"))

    results = store.query_exact("vaadin", "vaadin", "vaadin")

    assert [d.id for d in results] == ["1", "2", "3"]


def test_query_exact_values_are_positional():
    store = InMemoryIndexStore()
    store.upsert(_doc("1", title="vaadin", description="spring"))

    assert store.query_exact("spring", "vaadin", "vaadin") == []
    assert [d.id for d in store.query_exact("spring", "spring", "x")] == ["1"]


def test_query_exact_is_case_insensitive():
    store = InMemoryIndexStore()
    store.upsert(_doc("1", title="Vaadin Deep Dive"))

    assert [d.id for d in store.query_exact("VAADIN", "VAADIN", "VAADIN")] == ["1"]
