# app/compose.py
"""Answer composition for ranked results.

compose_answer() is the single entry point for answer text. It is a fixed
template keyed on result fields; unmatched queries get FALLBACK_ANSWER and
never any invented content.
"""

from collections.abc import Sequence

from app import config
from app.ranking import Result

FALLBACK_ANSWER = (
    "I could not find a direct match for that question in the curated knowledge "
    "base. Try rephrasing with a specific legal term, doctrine, statute, or "
    "jurisdiction."
)

DISCLAIMER = (
    "This summary is drawn from secondary reference material for research "
    "purposes and is not legal advice."
)

# Noun phrase used when introducing an entry of each type
TYPE_LABELS = {
    "definition": "dictionary definition",
    "doctrine": "legal doctrine",
    "statute": "statute",
    "case": "case",
}


def _type_label(entry_type: str) -> str:
    return TYPE_LABELS.get(entry_type, "entry")


def _sentence(text: str) -> str:
    """Strip and ensure terminal punctuation."""
    text = text.strip()
    if text and text[-1] not in ".!?":
        text += "."
    return text


def format_citations(results: Sequence[Result]) -> str:
    """Build the trailing citation line.

    Results without citations are left out; returns "" when none have any.

    Args:
        results: Results referenced by the answer.

    Returns:
        Citation line or empty string.
    """
    parts = [
        f"{r.entry.title} ({'; '.join(r.entry.citations)})"
        for r in results
        if r.entry.citations
    ]
    if not parts:
        return ""
    return "Citations: " + "; ".join(parts) + "."


def compose_answer(query: str, results: Sequence[Result]) -> str:
    """Render the answer text for a query.

    Args:
        query: The user's question (already trimmed).
        results: Ranked results, best first.

    Returns:
        Completed answer string.
    """
    if not results:
        return FALLBACK_ANSWER

    referenced = list(results[: config.MAX_SYNTHESIZED_RESULTS])
    top = referenced[0].entry

    opening = (
        f"Your question most closely concerns {top.title}, "
        f"a {_type_label(top.type)} ({top.region}; {top.era})."
    )

    synthesis = [f"In brief: {_sentence(top.summary)}"]
    for result in referenced[1:]:
        entry = result.entry
        synthesis.append(
            f"Also relevant is {entry.title} ({_type_label(entry.type)}): "
            f"{_sentence(entry.summary)}"
        )

    paragraphs = [opening + " " + " ".join(synthesis)]

    citations = format_citations(referenced)
    if citations:
        paragraphs.append(citations)

    paragraphs.append(DISCLAIMER)
    return "\n\n".join(paragraphs)
