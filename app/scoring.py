# app/scoring.py
"""Relevance scoring between a normalized query and knowledge-base entries.

This module provides:
- Scorer: the capability the ranker depends on ("score a token list against an entry")
- WeightedFieldScorer: field-weighted lexical overlap with phrase and title bonuses
- BM25Scorer: Okapi BM25 over each entry's concatenated indexable text
- get_scorer(): resolve a search mode name to a scorer for a knowledge base

Both scorers pre-tokenize entries once at construction; the knowledge base is
immutable so the token cache never goes stale.
"""

import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from rank_bm25 import BM25Okapi

from app import config
from app.knowledge import Entry
from app.knowledge import KnowledgeBase
from app.logging import get_logger
from app.normalize import normalize

log = get_logger(__name__)

# Fields in descending weight order
INDEXED_FIELDS = ("title", "keywords", "summary", "excerpt")


class SearchMode(Enum):
    """Search mode options."""

    WEIGHTED = "weighted"
    BM25 = "bm25"


class Scorer(Protocol):
    """Anything that can score a query token list against an entry."""

    def score(self, query_tokens: list[str], entry: Entry) -> float:
        """Return a non-negative relevance score."""
        ...


@dataclass(frozen=True)
class IndexedEntry:
    """Per-field token sequences and counts for one entry."""

    tokens: dict[str, list[str]]
    counts: dict[str, Counter[str]]

    @classmethod
    def from_entry(cls, entry: Entry) -> "IndexedEntry":
        tokens = {name: normalize(field_text(entry, name)) for name in INDEXED_FIELDS}
        return cls(tokens=tokens, counts={k: Counter(v) for k, v in tokens.items()})


def field_text(entry: Entry, name: str) -> str:
    """Return the raw text of an indexable field."""
    if name == "keywords":
        return " ".join(entry.keywords)
    value: str = getattr(entry, name)
    return value


def indexable_text(entry: Entry) -> str:
    """Concatenate title, summary, excerpt and keywords."""
    return " ".join(field_text(entry, name) for name in INDEXED_FIELDS)


def longest_query_run(field_tokens: list[str], query_set: frozenset[str]) -> int:
    """Length of the longest run of consecutive query tokens in a field.

    Only the query's token set is consulted, so the result does not depend on
    the order of words in the query. Runs are capped at the number of distinct
    query tokens, and inserting a query token into a field never shortens one.

    Args:
        field_tokens: Normalized field tokens.
        query_set: Distinct normalized query tokens.

    Returns:
        Longest run length (0 if no query token occurs).
    """
    best = 0
    run = 0
    for token in field_tokens:
        if token in query_set:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return min(best, len(query_set))


class WeightedFieldScorer:
    """Field-weighted lexical overlap scorer.

    score = sum over fields and distinct query tokens of
            weight[field] * min(occurrences, cap)
          + phrase bonus (multi-token queries with adjacent matches)
          + title match bonus (title tokens == query tokens)
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        weights: dict[str, float] | None = None,
        occurrence_cap: int | None = None,
        phrase_bonus: float | None = None,
        title_match_bonus: float | None = None,
    ) -> None:
        """Initialize the scorer and pre-tokenize every entry.

        Args:
            knowledge_base: Entries to index.
            weights: Per-field weights (default: config.FIELD_WEIGHTS).
            occurrence_cap: Max counted occurrences per token per field.
            phrase_bonus: Bonus for a full-query adjacent match.
            title_match_bonus: Bonus when the title is exactly the query.
        """
        self.weights = weights if weights is not None else dict(config.FIELD_WEIGHTS)
        self.occurrence_cap = (
            occurrence_cap if occurrence_cap is not None else config.FIELD_OCCURRENCE_CAP
        )
        self.phrase_bonus = (
            phrase_bonus if phrase_bonus is not None else config.PHRASE_BONUS
        )
        self.title_match_bonus = (
            title_match_bonus
            if title_match_bonus is not None
            else config.TITLE_MATCH_BONUS
        )
        self._index: dict[str, IndexedEntry] = {
            entry.id: IndexedEntry.from_entry(entry)
            for entry in knowledge_base.values()
        }

    def _indexed(self, entry: Entry) -> IndexedEntry:
        # Entries outside the indexed base are tokenized on the fly
        indexed = self._index.get(entry.id)
        if indexed is None:
            indexed = IndexedEntry.from_entry(entry)
        return indexed

    def score(self, query_tokens: list[str], entry: Entry) -> float:
        """Score an entry against normalized query tokens.

        Args:
            query_tokens: Output of normalize() for the query.
            entry: Entry to score.

        Returns:
            Score >= 0; exactly 0 when no query token occurs in any field.
        """
        # Sorted iteration keeps float summation order fixed for a given token set
        query_terms = sorted(set(query_tokens))
        if not query_terms:
            return 0.0

        indexed = self._indexed(entry)
        total = 0.0
        for name in INDEXED_FIELDS:
            counts = indexed.counts[name]
            weight = self.weights.get(name, 0.0)
            for term in query_terms:
                occurrences = counts.get(term, 0)
                if occurrences:
                    total += weight * min(occurrences, self.occurrence_cap)

        if total <= 0:
            return 0.0

        query_set = frozenset(query_terms)
        if len(query_set) >= 2:
            run = max(
                longest_query_run(indexed.tokens[name], query_set)
                for name in INDEXED_FIELDS
            )
            if run >= 2:
                total += self.phrase_bonus * run / len(query_set)

        if set(indexed.tokens["title"]) == query_set:
            total += self.title_match_bonus

        return total


class PositiveIdfBM25(BM25Okapi):
    """BM25Okapi with a strictly positive IDF.

    Okapi IDF goes negative for terms in more than half the documents, which
    in a small knowledge base can erase every real match. This uses
    log(1 + (N - df + 0.5) / (df + 0.5)) instead.
    """

    def _calc_idf(self, nd: dict[str, int]) -> None:
        for word, freq in nd.items():
            self.idf[word] = math.log(
                1 + (self.corpus_size - freq + 0.5) / (freq + 0.5)
            )


class BM25Scorer:
    """Okapi BM25 scorer over each entry's concatenated indexable text."""

    def __init__(self, knowledge_base: KnowledgeBase) -> None:
        """Build the BM25 model over every entry.

        Args:
            knowledge_base: Entries to index.
        """
        self._positions: dict[str, int] = {}
        corpus: list[list[str]] = []
        for position, entry in enumerate(knowledge_base.values()):
            self._positions[entry.id] = position
            corpus.append(normalize(indexable_text(entry)))
        self._token_sets = [set(doc) for doc in corpus]
        self.bm25 = PositiveIdfBM25(corpus)
        log.debug("bm25_index_built", document_count=len(corpus))

    def score(self, query_tokens: list[str], entry: Entry) -> float:
        """Score an entry with BM25.

        Args:
            query_tokens: Output of normalize() for the query.
            entry: Entry to score (must belong to the indexed base).

        Returns:
            Score >= 0; exactly 0 when no query token occurs in the entry.
        """
        position = self._positions.get(entry.id)
        query_terms = sorted(set(query_tokens))
        if position is None or not query_terms:
            return 0.0
        if not self._token_sets[position].intersection(query_terms):
            return 0.0

        scores = self.bm25.get_batch_scores(query_terms, [position])
        return max(0.0, float(scores[0]))


def parse_search_mode(mode: str | SearchMode) -> SearchMode:
    """Convert a mode name to a SearchMode.

    Raises:
        ValueError: If the mode is unknown.
    """
    try:
        return SearchMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in SearchMode)
        raise ValueError(f"Invalid search mode: {mode!r}. Valid modes: {valid}")


def get_scorer(mode: str | SearchMode, knowledge_base: KnowledgeBase) -> Scorer:
    """Resolve a search mode to a scorer bound to a knowledge base.

    Args:
        mode: "weighted" or "bm25" (or a SearchMode).
        knowledge_base: Entries to index.

    Returns:
        Scorer instance.

    Raises:
        ValueError: If the mode is unknown.
    """
    search_mode = parse_search_mode(mode)
    if search_mode == SearchMode.BM25:
        return BM25Scorer(knowledge_base)
    return WeightedFieldScorer(knowledge_base)
