# app/normalize.py
"""Text normalization shared by queries and knowledge-base entries.

The same function is applied to the query and to every indexable entry field,
so matching is symmetric:
- Lowercase
- Drop apostrophes ("Black's" -> "blacks")
- Replace remaining punctuation with whitespace ("quo-warranto" -> "quo warranto")
- Discard short tokens and stopwords
"""

import re

from app.config import MIN_TOKEN_LENGTH

# Articles, prepositions, conjunctions, auxiliaries, pronouns and question words.
# Legal vocabulary ("law", "act", "court", "still") is not listed.
STOPWORDS = frozenset(
    {
        # Articles
        "the",
        "an",
        # Prepositions
        "of",
        "in",
        "on",
        "at",
        "to",
        "from",
        "with",
        "about",
        "by",
        "for",
        "into",
        "over",
        "under",
        "as",
        # Conjunctions
        "and",
        "or",
        "but",
        "if",
        "whether",
        # Auxiliary and modal verbs
        "is",
        "are",
        "was",
        "were",
        "be",
        "been",
        "being",
        "do",
        "does",
        "did",
        "has",
        "have",
        "had",
        "can",
        "could",
        "will",
        "would",
        "should",
        "may",
        "might",
        "must",
        # Pronouns and demonstratives
        "it",
        "its",
        "me",
        "my",
        "we",
        "our",
        "you",
        "your",
        "this",
        "that",
        "these",
        "those",
        "there",
        # Question words
        "what",
        "which",
        "who",
        "how",
        "when",
        "where",
        "why",
    }
)

_APOSTROPHES = re.compile(r"['’]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(text: str) -> list[str]:
    """Convert raw text into an ordered sequence of comparable tokens.

    Args:
        text: Query or entry text.

    Returns:
        Tokens in their original order (duplicates preserved).

    Examples:
        >>> normalize("What does Black's Law Dictionary say about consideration?")
        ['blacks', 'law', 'dictionary', 'say', 'consideration']
        >>> normalize("Quo-Warranto")
        ['quo', 'warranto']
    """
    if not text:
        return []

    lowered = _APOSTROPHES.sub("", text.lower())
    tokens = _NON_ALNUM.sub(" ", lowered).split()
    return [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH and t not in STOPWORDS]
