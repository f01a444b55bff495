# app/query.py
"""Query pipeline for the Lawyer Agent.

question -> normalize -> score every entry -> rank (top-K)
         -> highlights per result -> answer + follow-ups

retrieve_legal_knowledge() and build_answer() are pure over the immutable
knowledge base; query() wraps both for the CLI and HTTP adapter and writes
the audit record.
"""

import time
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
from functools import lru_cache
from typing import Any

from app import config
from app.audit import calculate_latency_ms
from app.audit import log_query_response
from app.compose import compose_answer
from app.followups import generate_follow_ups
from app.highlight import extract_highlights
from app.knowledge import KnowledgeBase
from app.knowledge import get_knowledge_base
from app.logging import get_logger
from app.normalize import normalize
from app.ranking import Result
from app.ranking import rank
from app.scoring import Scorer
from app.scoring import SearchMode
from app.scoring import get_scorer
from app.scoring import parse_search_mode

log = get_logger(__name__)


class BlankQuestionError(ValueError):
    """Raised when a question is empty or whitespace-only."""

    def __init__(self) -> None:
        super().__init__("Question is required")


@dataclass
class Answer:
    """Composed answer text and suggested follow-up questions."""

    answer: str
    follow_ups: list[str] = field(default_factory=list)


@lru_cache(maxsize=None)
def _default_scorer(mode: SearchMode) -> Scorer:
    """Scorer bound to the process-wide knowledge base, built once per mode."""
    return get_scorer(mode, get_knowledge_base())


def resolve_scorer(
    search_mode: str | SearchMode,
    knowledge_base: KnowledgeBase | None = None,
) -> Scorer:
    """Return a scorer for a mode and knowledge base.

    Raises:
        ValueError: If the search mode is unknown.
    """
    mode = parse_search_mode(search_mode)
    if knowledge_base is None:
        return _default_scorer(mode)
    return get_scorer(mode, knowledge_base)


def retrieve_legal_knowledge(
    question: str,
    limit: int = config.DEFAULT_RESULT_LIMIT,
    *,
    search_mode: str | SearchMode = config.DEFAULT_SEARCH_MODE,
    knowledge_base: KnowledgeBase | None = None,
) -> list[Result]:
    """Find the entries most relevant to a question.

    Args:
        question: Non-empty, trimmed question text.
        limit: Maximum number of results.
        search_mode: "weighted" (default) or "bm25".
        knowledge_base: Entries to search (default: process-wide base).

    Returns:
        Results ordered by descending score then id; empty when nothing matches.

    Raises:
        ValueError: If search_mode is unknown.
    """
    kb = knowledge_base if knowledge_base is not None else get_knowledge_base()
    scorer = resolve_scorer(search_mode, knowledge_base)

    query_tokens = normalize(question)
    if not query_tokens:
        log.debug("query_has_no_terms", question=question[:50])
        return []

    entries = kb.entries
    scores = [scorer.score(query_tokens, entry) for entry in entries]
    results = rank(entries, scores, limit)

    for result in results:
        result.highlights = extract_highlights(query_tokens, result.entry)

    log.info(
        "retrieval_complete",
        question=question[:50],
        terms=query_tokens,
        matched=sum(1 for s in scores if s > config.MIN_SCORE),
        returned=len(results),
        top_id=results[0].id if results else None,
    )
    return results


def build_answer(
    question: str,
    results: list[Result],
    *,
    knowledge_base: KnowledgeBase | None = None,
) -> Answer:
    """Compose the answer text and follow-up suggestions for ranked results.

    Args:
        question: The question the results were retrieved for.
        results: Output of retrieve_legal_knowledge().
        knowledge_base: Entries considered for follow-ups (default: process-wide base).

    Returns:
        Answer with text and follow-ups.
    """
    kb = knowledge_base if knowledge_base is not None else get_knowledge_base()
    answer = compose_answer(question, results)
    follow_ups = generate_follow_ups(question, results, kb.entries)

    log.debug(
        "answer_composed",
        answer_length=len(answer),
        follow_ups=len(follow_ups),
        fallback=not results,
    )
    return Answer(answer=answer, follow_ups=follow_ups)


def query(
    question: str,
    limit: int = config.DEFAULT_RESULT_LIMIT,
    search_mode: str | SearchMode = config.DEFAULT_SEARCH_MODE,
    knowledge_base: KnowledgeBase | None = None,
) -> dict[str, Any]:
    """Answer a question end to end.

    Args:
        question: Question text (surrounding whitespace is ignored).
        limit: Maximum number of results.
        search_mode: "weighted" or "bm25".
        knowledge_base: Entries to search (default: process-wide base).

    Returns:
        Dictionary with keys answer, results (wire-shaped dicts), followUps,
        timestamp and search_mode.

    Raises:
        BlankQuestionError: If the question is empty after trimming.
        ValueError: If search_mode is unknown.
        KnowledgeBaseError: If the knowledge base cannot be loaded.
    """
    start_time = time.time()
    question = question.strip()
    if not question:
        raise BlankQuestionError()

    mode = parse_search_mode(search_mode)
    results = retrieve_legal_knowledge(
        question, limit, search_mode=mode, knowledge_base=knowledge_base
    )
    answer = build_answer(question, results, knowledge_base=knowledge_base)

    log_query_response(
        question=question,
        answer=answer.answer,
        result_ids=[r.id for r in results],
        follow_ups=answer.follow_ups,
        latency_ms=calculate_latency_ms(start_time),
        search_mode=mode.value,
    )

    return {
        "answer": answer.answer,
        "results": [r.to_dict() for r in results],
        "followUps": answer.follow_ups,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "search_mode": mode.value,
    }
