# app/followups.py
"""Follow-up question suggestions from thematically adjacent entries."""

from collections.abc import Iterable
from collections.abc import Sequence

from app import config
from app.knowledge import Entry
from app.ranking import Result

# Prompt template per entry type; {title} is the candidate entry's title
FOLLOW_UP_TEMPLATES = {
    "definition": "How does Black's Law Dictionary define {title}?",
    "doctrine": "Is the doctrine of {title} still applied today?",
    "statute": "Is {title} still enforced?",
    "case": "What did the court decide in {title}?",
}
DEFAULT_TEMPLATE = "Tell me more about {title}."


def shared_attributes(candidate: Entry, anchor: Entry) -> int:
    """Count how many of type, region and era two entries share."""
    return sum(
        (
            candidate.type == anchor.type,
            candidate.region == anchor.region,
            candidate.era == anchor.era,
        )
    )


def phrase_follow_up(entry: Entry) -> str:
    """Phrase an entry as a short natural-language question."""
    template = FOLLOW_UP_TEMPLATES.get(entry.type, DEFAULT_TEMPLATE)
    return template.format(title=entry.title)


def generate_follow_ups(
    query: str,
    results: Sequence[Result],
    all_entries: Iterable[Entry],
    max_follow_ups: int | None = None,
) -> list[str]:
    """Suggest related questions about entries adjacent to the top result.

    Candidates share type, region or era with the top-ranked result and are
    not among the results. More shared attributes rank first; ties keep
    knowledge-base order.

    Args:
        query: The user's question.
        results: Ranked results, best first.
        all_entries: Every knowledge-base entry in canonical order.
        max_follow_ups: Cap on suggestions (default: config.MAX_FOLLOW_UPS).

    Returns:
        Suggested questions (possibly empty).
    """
    if not results:
        return []

    cap = config.MAX_FOLLOW_UPS if max_follow_ups is None else max_follow_ups
    anchor = results[0].entry
    returned_ids = {r.entry.id for r in results}

    candidates: list[tuple[int, int, Entry]] = []
    for position, entry in enumerate(all_entries):
        if entry.id in returned_ids:
            continue
        shared = shared_attributes(entry, anchor)
        if shared > 0:
            candidates.append((shared, position, entry))
    candidates.sort(key=lambda c: (-c[0], c[1]))

    normalized_query = query.strip().lower()
    suggestions: list[str] = []
    seen: set[str] = set()
    for _, _, entry in candidates:
        if len(suggestions) >= cap:
            break
        suggestion = phrase_follow_up(entry)
        key = suggestion.lower()
        if key == normalized_query or key in seen:
            continue
        seen.add(key)
        suggestions.append(suggestion)
    return suggestions
