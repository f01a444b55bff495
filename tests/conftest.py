# tests/conftest.py
"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from app.knowledge import Entry
from app.knowledge import KnowledgeBase


@pytest.fixture(autouse=True, scope="function")
def disable_audit_log(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests from appending to logs/queries.jsonl.

    Audit-specific tests re-enable it against a temporary file.
    """
    monkeypatch.setattr("app.config.AUDIT_LOG_ENABLED", False)


def _reset_knowledge_base_caches() -> None:
    from app.knowledge import get_knowledge_base
    from app.query import _default_scorer

    get_knowledge_base.cache_clear()
    _default_scorer.cache_clear()


@pytest.fixture
def kb_path(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[Path], None]]:
    """Point the process-wide knowledge base at another file.

    Yields a function taking the new path. Cached instances are dropped on
    both sides of the test so other tests see the bundled knowledge base.
    """

    def _set(path: Path) -> None:
        monkeypatch.setattr("app.config.KB_PATH", path)
        _reset_knowledge_base_caches()

    yield _set
    _reset_knowledge_base_caches()


def make_entry(entry_id: str, **overrides: Any) -> Entry:
    """Build an entry with bland defaults; override any field by keyword."""
    data: dict[str, Any] = {
        "id": entry_id,
        "title": entry_id.replace("-", " ").title(),
        "type": "definition",
        "region": "Nowhere",
        "era": "Undated",
        "summary": "A placeholder summary.",
        "excerpt": "A placeholder excerpt.",
        "keywords": [],
        "citations": [],
        "sources": [],
    }
    data.update(overrides)
    return Entry.from_dict(data)


@pytest.fixture
def entry_factory() -> Callable[..., Entry]:
    """Return the make_entry helper."""
    return make_entry


@pytest.fixture
def small_kb() -> KnowledgeBase:
    """Four entries with distinct vocabulary."""
    return KnowledgeBase(
        [
            make_entry(
                "laches",
                type="doctrine",
                region="Equity",
                era="Chancery",
                summary="Unreasonable delay bars an equitable claim.",
                excerpt=(
                    "Laches is an equitable defense. A claimant who sleeps on "
                    "their rights may lose them; prejudice to the defendant is "
                    "required."
                ),
                keywords=["delay", "equitable defense"],
                citations=["Black's Law Dictionary (11th ed. 2019)"],
            ),
            make_entry(
                "estoppel",
                type="doctrine",
                region="Equity",
                era="Modern",
                summary="A party may not contradict its earlier conduct.",
                excerpt="Estoppel prevents a party from asserting a contrary position.",
                keywords=["reliance"],
            ),
            make_entry(
                "sunday-law",
                type="statute",
                region="Massachusetts",
                era="Colonial",
                summary="Retail closing on Sunday.",
                excerpt="Stores must close on Sunday mornings. Exceptions exist.",
                keywords=["blue laws", "sunday"],
                citations=["Mass. Gen. Laws ch. 136"],
            ),
            make_entry(
                "deodand",
                type="definition",
                region="England",
                era="Medieval",
                summary="A chattel forfeited for causing death.",
                excerpt="The object that caused a death was forfeited to the Crown.",
            ),
        ]
    )


@pytest.fixture
def kb_file(tmp_path: Path) -> Callable[[Any], Path]:
    """Write arbitrary JSON to a temporary knowledge-base file."""

    def _write(content: Any) -> Path:
        path = tmp_path / "entries.json"
        path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write
