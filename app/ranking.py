# app/ranking.py
"""Result ranking: order scored entries and cut to the requested limit."""

from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from app import config
from app.knowledge import Entry


@dataclass
class Result:
    """An entry matched by one query, with its score and evidence.

    Created per query and owned by the request that produced it.
    """

    entry: Entry
    score: float
    highlights: list[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.entry.id

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the wire shape used by the API and JSON output."""
        entry = self.entry
        return {
            "id": entry.id,
            "title": entry.title,
            "summary": entry.summary,
            "excerpt": entry.excerpt,
            "citations": list(entry.citations),
            "sources": [{"label": s.label, "url": s.url} for s in entry.sources],
            "score": self.score,
            "highlights": list(self.highlights),
            "region": entry.region,
            "era": entry.era,
            "type": entry.type,
        }


def rank(
    entries: Sequence[Entry],
    scores: Sequence[float],
    limit: int,
    min_score: float | None = None,
) -> list[Result]:
    """Rank scored entries.

    Drops entries at or below the minimum score, sorts by score descending
    with entry id ascending as the tie-break, and truncates to limit.

    Args:
        entries: Candidate entries.
        scores: Score for each entry (same order as entries).
        limit: Maximum number of results.
        min_score: Cutoff (default: config.MIN_SCORE).

    Returns:
        Results without highlights, best first.
    """
    if len(entries) != len(scores):
        raise ValueError("entries and scores must have same length")
    if limit < 1:
        return []

    cutoff = config.MIN_SCORE if min_score is None else min_score
    scored = [
        (score, entry) for entry, score in zip(entries, scores) if score > cutoff
    ]
    scored.sort(key=lambda pair: (-pair[0], pair[1].id))

    results: list[Result] = []
    seen: set[str] = set()
    for score, entry in scored:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        results.append(Result(entry=entry, score=score))
        if len(results) == limit:
            break
    return results
