# app/highlight.py
"""Highlight extraction: excerpt spans that justify a match.

Every returned highlight is a literal substring of the entry's excerpt, except
for the fallback, which is the entry's summary.
"""

import re

from app import config
from app.knowledge import Entry
from app.normalize import normalize

# Sentence or clause boundary: terminal punctuation followed by whitespace
SPAN_BOUNDARY = re.compile(r"(?<=[.;:!?])\s+")
WORD = re.compile(r"\S+")


def split_spans(text: str) -> list[str]:
    """Split text into sentence/clause spans, dropping empty pieces."""
    return [span.strip() for span in SPAN_BOUNDARY.split(text) if span.strip()]


def _clip_span(span: str, query_set: set[str], max_chars: int) -> str:
    """Cut a long span to whole words around its first matching word.

    Args:
        span: A span containing at least one query token.
        query_set: Distinct normalized query tokens.
        max_chars: Maximum length of the returned text.

    Returns:
        A substring of span no longer than max_chars (unless a single word is).
    """
    if len(span) <= max_chars:
        return span

    words = list(WORD.finditer(span))
    first_match = 0
    for i, word in enumerate(words):
        if query_set.intersection(normalize(word.group())):
            first_match = i
            break
    start = max(0, first_match - config.HIGHLIGHT_LEAD_WORDS)
    # The matching word must stay inside the window
    match_end = words[first_match].end()
    while start < first_match and match_end - words[start].start() > max_chars:
        start += 1
    begin = words[start].start()
    end = words[start].end()
    for word in words[start + 1 :]:
        if word.end() - begin > max_chars:
            break
        end = word.end()
    return span[begin:end]


def extract_highlights(
    query_tokens: list[str],
    entry: Entry,
    max_highlights: int | None = None,
    max_chars: int | None = None,
) -> list[str]:
    """Select excerpt spans that contain at least one query token.

    Args:
        query_tokens: Output of normalize() for the query.
        entry: Matched entry.
        max_highlights: Cap on returned spans (default: config.MAX_HIGHLIGHTS).
        max_chars: Cap on span length (default: config.MAX_HIGHLIGHT_CHARS).

    Returns:
        Spans in excerpt order, or [entry.summary] when none match.
    """
    limit = config.MAX_HIGHLIGHTS if max_highlights is None else max_highlights
    span_chars = config.MAX_HIGHLIGHT_CHARS if max_chars is None else max_chars
    query_set = set(query_tokens)

    highlights: list[str] = []
    if query_set:
        for span in split_spans(entry.excerpt):
            if len(highlights) >= limit:
                break
            if query_set.intersection(normalize(span)):
                highlights.append(_clip_span(span, query_set, span_chars))

    if not highlights:
        return [entry.summary]
    return highlights
