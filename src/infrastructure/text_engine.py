# src/infrastructure/text_engine.py

import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
import Stemmer
from rank_bm25 import BM25Plus

from src.domain.models import (
    FUZZINESS_AUTO,
    BooleanQuery,
    Document,
    MatchClause,
    MultiMatchClause,
)


TEXT_FIELDS = ("title", "description", "transcript")

# Lucene's English stop set, the one the "english" analyzer uses.
ENGLISH_STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "if",
    "in", "into", "is", "it", "no", "not", "of", "on", "or", "such", "that",
    "the", "their", "then", "there", "these", "they", "this", "to", "was",
    "will", "with",
})

_TOKEN_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)?")

# The "english" analyzer ends with the Porter stemmer
_STEMMER = Stemmer.Stemmer("porter")


def analyze(text: Optional[str]) -> List[str]:
    """
    English analysis: lowercase word tokens, possessives stripped,
    stop words removed, Porter-stemmed.
    """
    if not text:
        return []

    terms = []
    for token in _TOKEN_PATTERN.findall(text.lower()):
        if token.endswith("'s"):
            token = token[:-2]
        token = token.replace("'", "")
        if token and token not in ENGLISH_STOP_WORDS:
            terms.append(token)
    return _STEMMER.stemWords(terms)


def auto_fuzziness(term: str) -> int:
    """Edit distance allowed for a term under fuzziness AUTO."""
    if len(term) <= 2:
        return 0
    if len(term) <= 5:
        return 1
    return 2


def edit_distance(a: str, b: str, limit: int) -> int:
    """
    Optimal string alignment distance between a and b (an adjacent
    transposition is one edit), or limit + 1 as soon as it is certain
    to exceed limit.
    """
    if abs(len(a) - len(b)) > limit:
        return limit + 1

    before = None
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            distance = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (char_a != char_b),
            )
            if i > 1 and j > 1 and char_a == b[j - 2] and a[i - 2] == char_b:
                distance = min(distance, before[j - 2] + 1)
            current.append(distance)
        if min(current) > limit:
            return limit + 1
        before, previous = previous, current
    return previous[-1]


def matches_exact(document: Document, field: str, value: Optional[str]) -> bool:
    """
    True when every analysed term of value occurs in the analysed field.
    Blank values (or values made only of stop words) never match.
    """
    wanted = analyze(value)
    if not wanted:
        return False
    return set(wanted) <= set(analyze(getattr(document, field)))


class _FieldIndex:

    def __init__(self, corpus: List[List[str]]):
        self.term_sets: List[Set[str]] = [set(terms) for terms in corpus]
        self.vocabulary: Set[str] = set().union(*self.term_sets) if corpus else set()
        # BM25 needs at least one non-empty document to compute avgdl
        self.bm25: Optional[BM25Plus] = BM25Plus(corpus) if self.vocabulary else None

    def variants(self, term: str, fuzziness: Optional[str]) -> List[Tuple[str, int]]:
        if fuzziness != FUZZINESS_AUTO:
            return [(term, 0)] if term in self.vocabulary else []

        limit = auto_fuzziness(term)
        found = []
        for candidate in self.vocabulary:
            distance = edit_distance(term, candidate, limit)
            if distance <= limit:
                found.append((candidate, distance))
        return found

    def score(self, terms: List[str], fuzziness: Optional[str]) -> np.ndarray:
        """
        Per-document score, zero where the field does not contain the term
        (or one of its fuzzy variants). Fuzzy variants score 1/(1+distance)
        of an exact hit; per query term the best variant counts.
        """
        scores = np.zeros(len(self.term_sets))
        if self.bm25 is None:
            return scores

        for term in terms:
            best = np.zeros(len(self.term_sets))
            for variant, distance in self.variants(term, fuzziness):
                present = np.array([variant in s for s in self.term_sets])
                variant_scores = np.asarray(self.bm25.get_scores([variant]))
                weighted = np.where(present, variant_scores, 0.0) / (1 + distance)
                best = np.maximum(best, weighted)
            scores += best
        return scores


class FullTextIndex:
    """
    In-process full-text engine evaluating a BooleanQuery over documents.

    Scoring:
    - every text field is BM25-scored on its own (BM25Plus keeps IDF positive
      on small corpora, so a present term always scores > 0)
    - multi_match takes the best boosted field score (best_fields)
    - a document must match every must clause; should clauses only add score
    - results: score descending, insertion order on ties, capped at max_results
    """

    def __init__(self, documents: Sequence[Document]):
        self._documents = list(documents)
        self._fields: Dict[str, _FieldIndex] = {
            name: _FieldIndex([analyze(getattr(d, name)) for d in self._documents])
            for name in TEXT_FIELDS
        }

    def search(self, query: BooleanQuery) -> List[Document]:
        if not self._documents:
            return []

        total = np.zeros(len(self._documents))
        required = np.ones(len(self._documents), dtype=bool)

        for clause in query.must:
            clause_scores = self._multi_match(clause)
            required &= clause_scores > 0
            total += clause_scores

        should_scores = np.zeros(len(self._documents))
        for clause in query.should:
            should_scores += self._match(clause)
        total += should_scores

        # A bool query without must clauses needs at least one should hit
        if not query.must:
            required &= should_scores > 0

        candidates = np.flatnonzero(required)
        ranked = sorted(candidates, key=lambda i: (-total[i], i))
        return [self._documents[i] for i in ranked[: query.max_results]]

    def _multi_match(self, clause: MultiMatchClause) -> np.ndarray:
        terms = analyze(clause.query)
        best = np.zeros(len(self._documents))
        for field in clause.fields:
            field_scores = self._field(field.field).score(terms, clause.fuzziness)
            best = np.maximum(best, field.boost * field_scores)
        return best

    def _match(self, clause: MatchClause) -> np.ndarray:
        return self._field(clause.field).score(analyze(clause.query), None)

    def _field(self, name: str) -> _FieldIndex:
        if name not in self._fields:
            raise ValueError(f"Unknown text field '{name}'. Expected one of {TEXT_FIELDS}.")
        return self._fields[name]
