# tests/test_text_engine.py

from datetime import datetime, timezone

import pytest

from src.application.search_service import FULL_TEXT_FIELDS, FullTextSearch
from src.domain.models import (
    FUZZINESS_AUTO,
    BooleanQuery,
    Document,
    MatchClause,
    MultiMatchClause,
)
from src.infrastructure.text_engine import (
    FullTextIndex,
    analyze,
    auto_fuzziness,
    edit_distance,
    matches_exact,
)


def _doc(doc_id: str, title=None, description=None, transcript=None) -> Document:
    return Document(
        id=doc_id,
        title=title,
        description=description,
        transcript=transcript,
        created_at=datetime.now(timezone.utc),
    )


def _query(text: str, max_results: int = 1000) -> BooleanQuery:
    """The exact query the full-text strategy sends to the store."""
    return FullTextSearch(None, None, max_results=max_results).build_query(text)


def _ids(documents) -> list:
    return [d.id for d in documents]


# ── Analysis ──────────────────────────────────────────────────────────────────

def test_analyze_lowercases_and_drops_stop_words():
    assert analyze("The Future of Spring and Vaadin") == ["futur", "spring", "vaadin"]


def test_analyze_strips_possessives():
    assert analyze("Josh's podcast") == ["josh", "podcast"]


def test_analyze_handles_missing_text():
    assert analyze(None) == []
    assert analyze("") == []


def test_analyze_stems_inflected_forms():
    assert analyze("talks building images") == ["talk", "build", "imag"]
    assert analyze("talk") == analyze("talking") == analyze("talked")


@pytest.mark.parametrize("term, expected", [
    ("ai", 0),
    ("java", 1),
    ("kotlin", 2),
    ("kubernetes", 2),
])
def test_auto_fuzziness_depends_on_term_length(term, expected):
    assert auto_fuzziness(term) == expected


def test_edit_distance():
    assert edit_distance("vaadin", "vaadin", 2) == 0
    assert edit_distance("vadin", "vaadin", 2) == 1
    assert edit_distance("kitten", "sitting", 3) == 3


def test_edit_distance_stops_past_limit():
    assert edit_distance("graalvm", "x", 2) == 3


def test_edit_distance_counts_transposition_as_one_edit():
    assert edit_distance("jaav", "java", 1) == 1
    assert edit_distance("ab", "ba", 1) == 1
    assert edit_distance("abcd", "badc", 2) == 2


# ── Exact matching ────────────────────────────────────────────────────────────

def test_matches_exact_requires_every_term():
    document = _doc("1", title="Vaadin Deep Dive")

    assert matches_exact(document, "title", "vaadin")
    assert matches_exact(document, "title", "deep vaadin")
    assert not matches_exact(document, "title", "vaadin flow")


def test_matches_exact_never_matches_blank_value():
    assert not matches_exact(_doc("1", title="the"), "title", "the")
    assert not matches_exact(_doc("1", title="Intro"), "title", "  ")


def test_matches_exact_on_null_field():
    assert not matches_exact(_doc("1", description=None), "description", "vaadin")


# ── Full-text queries ─────────────────────────────────────────────────────────

def test_title_match_ranks_above_transcript_only_match():
    transcript_hit = _doc("t", title="Other episode", transcript="we talked about vaadin today")
    title_hit = _doc("h", title="Vaadin", transcript="")

    results = FullTextIndex([transcript_hit, title_hit]).search(_query("vaadin"))

    assert _ids(results) == ["h", "t"]


def test_title_boost_outweighs_transcript_for_identical_text():
    in_transcript = _doc("t", transcript="vaadin tips")
    in_title = _doc("h", title="vaadin tips")
    must_only = BooleanQuery(must=(MultiMatchClause("vaadin", FULL_TEXT_FIELDS, FUZZINESS_AUTO),))

    results = FullTextIndex([in_transcript, in_title]).search(must_only)

    assert _ids(results) == ["h", "t"]


def test_fuzzy_match_tolerates_a_typo():
    index = FullTextIndex([_doc("1", title="Vaadin Deep Dive"), _doc("2", title="Intro")])

    assert _ids(index.search(_query("vadin"))) == ["1"]


def test_fuzzy_match_tolerates_swapped_letters():
    index = FullTextIndex([_doc("1", title="java"), _doc("2", title="kotlin")])

    assert _ids(index.search(_query("jaav"))) == ["1"]


def test_exact_term_outranks_fuzzy_variant():
    index = FullTextIndex([_doc("fuzzy", title="vaadim"), _doc("exact", title="vaadin")])

    assert _ids(index.search(_query("vaadin"))) == ["exact", "fuzzy"]


def test_short_terms_are_not_fuzzy():
    index = FullTextIndex([_doc("1", title="so")])

    assert index.search(_query("go")) == []


def test_transcript_should_clause_boosts_literal_hit():
    plain = _doc("plain", description="vaadin tips")
    boosted = _doc("boosted", description="vaadin tips", transcript="vaadin")

    results = FullTextIndex([plain, boosted]).search(_query("vaadin"))

    assert _ids(results) == ["boosted", "plain"]


def test_documents_without_any_match_are_excluded():
    index = FullTextIndex([
        _doc("1", title="Spring Boot 4"),
        _doc("2", title="GraalVM native images"),
    ])

    assert _ids(index.search(_query("graalvm"))) == ["2"]


def test_result_count_is_capped():
    index = FullTextIndex([_doc(str(i), title=f"vaadin episode {i}") for i in range(5)])

    assert len(index.search(_query("vaadin", max_results=2))) == 2


def test_equal_scores_keep_insertion_order():
    index = FullTextIndex([_doc("b", title="vaadin"), _doc("a", title="vaadin")])

    assert _ids(index.search(_query("vaadin"))) == ["b", "a"]


def test_stop_word_only_query_matches_nothing():
    index = FullTextIndex([_doc("1", title="the the the")])

    assert index.search(_query("the")) == []


def test_empty_index_returns_nothing():
    assert FullTextIndex([]).search(_query("vaadin")) == []


def test_should_only_query_requires_a_should_hit():
    index = FullTextIndex([_doc("1", transcript="vaadin"), _doc("2", transcript="spring")])
    query = BooleanQuery(should=(MatchClause("transcript", "vaadin"),))

    assert _ids(index.search(query)) == ["1"]


def test_unknown_field_is_rejected():
    index = FullTextIndex([_doc("1", title="vaadin")])
    query = BooleanQuery(should=(MatchClause("speaker", "josh"),))

    with pytest.raises(ValueError, match="Unknown text field"):
        index.search(query)
