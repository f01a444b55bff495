# app/knowledge.py
"""Curated legal knowledge base.

This module provides:
- Entry/Source: immutable records for dictionary entries, doctrines, cases
  and statutes
- KnowledgeBase: read-only registry keyed by entry id, preserving file order
- load_knowledge_base(): parse and validate a JSON entries file
- get_knowledge_base(): the process-wide instance, loaded once

Integrity (required fields, known types, unique ids) is checked once at load
time. Query code assumes a valid base and never re-validates.
"""

import json
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from app.config import ENTRY_TYPES
from app.logging import get_logger

log = get_logger(__name__)

REQUIRED_TEXT_FIELDS = ("id", "title", "type", "region", "era", "summary", "excerpt")


class KnowledgeBaseError(Exception):
    """Raised when the knowledge base file is missing or malformed."""


@dataclass(frozen=True)
class Source:
    """A reference link backing an entry."""

    label: str
    url: str


@dataclass(frozen=True)
class Entry:
    """A single curated knowledge-base record."""

    id: str
    title: str
    type: str
    region: str
    era: str
    summary: str
    excerpt: str
    keywords: tuple[str, ...] = ()
    citations: tuple[str, ...] = ()
    sources: tuple[Source, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Build an entry from a raw JSON object.

        Args:
            data: Raw entry mapping.

        Returns:
            Entry instance.

        Raises:
            KnowledgeBaseError: If a field is missing or has the wrong shape.
        """
        if not isinstance(data, dict):
            raise KnowledgeBaseError(
                f"Entry must be an object, got {type(data).__name__}"
            )

        entry_id = data.get("id", "<missing id>")
        for name in REQUIRED_TEXT_FIELDS:
            value = data.get(name)
            if not isinstance(value, str) or not value.strip():
                raise KnowledgeBaseError(
                    f"Entry {entry_id!r}: field {name!r} must be a non-empty string"
                )

        if data["type"] not in ENTRY_TYPES:
            raise KnowledgeBaseError(
                f"Entry {entry_id!r}: unknown type {data['type']!r} "
                f"(expected one of {', '.join(ENTRY_TYPES)})"
            )

        keywords = _string_list(data, "keywords")
        citations = _string_list(data, "citations")

        sources = []
        for raw in data.get("sources", []):
            if (
                not isinstance(raw, dict)
                or not isinstance(raw.get("label"), str)
                or not isinstance(raw.get("url"), str)
            ):
                raise KnowledgeBaseError(
                    f"Entry {entry_id!r}: sources must be objects with 'label' and 'url'"
                )
            sources.append(Source(label=raw["label"], url=raw["url"]))

        return cls(
            id=data["id"],
            title=data["title"],
            type=data["type"],
            region=data["region"],
            era=data["era"],
            summary=data["summary"],
            excerpt=data["excerpt"],
            # dict.fromkeys keeps first-seen order while dropping repeats
            keywords=tuple(dict.fromkeys(k.lower() for k in keywords)),
            citations=tuple(citations),
            sources=tuple(sources),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to plain JSON-compatible data."""
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "region": self.region,
            "era": self.era,
            "summary": self.summary,
            "excerpt": self.excerpt,
            "keywords": list(self.keywords),
            "citations": list(self.citations),
            "sources": [{"label": s.label, "url": s.url} for s in self.sources],
        }


def _string_list(data: dict[str, Any], name: str) -> list[str]:
    """Read an optional list-of-strings field."""
    value = data.get(name, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise KnowledgeBaseError(
            f"Entry {data.get('id')!r}: field {name!r} must be a list of strings"
        )
    return value


class KnowledgeBase(Mapping[str, Entry]):
    """Read-only registry of entries keyed by id.

    Iteration follows insertion (file) order, which is also the secondary
    ordering used by the follow-up generator.
    """

    def __init__(self, entries: list[Entry]) -> None:
        """Initialize the registry.

        Args:
            entries: Entries in their canonical order.

        Raises:
            KnowledgeBaseError: If two entries share an id.
        """
        by_id: dict[str, Entry] = {}
        for entry in entries:
            if entry.id in by_id:
                raise KnowledgeBaseError(f"Duplicate entry id: {entry.id!r}")
            by_id[entry.id] = entry
        self._entries = MappingProxyType(by_id)

    def __getitem__(self, entry_id: str) -> Entry:
        return self._entries[entry_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[Entry, ...]:
        """All entries in insertion order."""
        return tuple(self._entries.values())

    def by_type(self, entry_type: str) -> list[Entry]:
        """Return entries of one category, in insertion order."""
        return [e for e in self._entries.values() if e.type == entry_type]


def load_knowledge_base(path: Path) -> KnowledgeBase:
    """Load and validate a knowledge base from a JSON file.

    The file holds either a list of entry objects or an object with an
    "entries" list.

    Args:
        path: Path to the JSON file.

    Returns:
        Validated KnowledgeBase.

    Raises:
        KnowledgeBaseError: If the file cannot be read or fails validation.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise KnowledgeBaseError(f"Knowledge base file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise KnowledgeBaseError(f"Could not read knowledge base {path}: {e}")

    if isinstance(raw, dict):
        raw = raw.get("entries")
    if not isinstance(raw, list) or not raw:
        raise KnowledgeBaseError(f"Knowledge base {path} contains no entries")

    kb = KnowledgeBase([Entry.from_dict(item) for item in raw])

    log.info(
        "knowledge_base_loaded",
        path=str(path),
        entry_count=len(kb),
        types={t: len(kb.by_type(t)) for t in ENTRY_TYPES},
    )
    return kb


@lru_cache(maxsize=1)
def get_knowledge_base() -> KnowledgeBase:
    """Return the process-wide knowledge base, loading it on first use.

    Reads app.config.KB_PATH at call time so tests can redirect it before the
    first load (and call get_knowledge_base.cache_clear() afterwards).
    """
    from app import config

    return load_knowledge_base(config.KB_PATH)
