# tests/test_knowledge.py
"""Tests for knowledge-base loading and validation."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from app.config import DEFAULT_KB_PATH
from app.config import ENTRY_TYPES
from app.knowledge import Entry
from app.knowledge import KnowledgeBase
from app.knowledge import KnowledgeBaseError
from app.knowledge import get_knowledge_base
from app.knowledge import load_knowledge_base


def _raw_entry(entry_id: str = "laches", **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": entry_id,
        "title": "Laches",
        "type": "doctrine",
        "region": "Anglo-American equity",
        "era": "Equity jurisprudence",
        "summary": "Unreasonable delay bars a claim.",
        "excerpt": "Laches is an equitable defense.",
        "keywords": ["Laches", "delay", "laches"],
        "citations": ["Black's Law Dictionary (11th ed. 2019)"],
        "sources": [{"label": "Wex", "url": "https://example.org/laches"}],
    }
    data.update(overrides)
    return data


class TestEntryFromDict:
    """Tests for Entry.from_dict validation."""

    def test_valid_entry(self) -> None:
        """All fields are carried over."""
        entry = Entry.from_dict(_raw_entry())
        assert entry.id == "laches"
        assert entry.type == "doctrine"
        assert entry.citations == ("Black's Law Dictionary (11th ed. 2019)",)
        assert entry.sources[0].label == "Wex"
        assert entry.sources[0].url == "https://example.org/laches"

    def test_keywords_lowercased_and_deduplicated(self) -> None:
        """Keywords keep first-seen order without repeats."""
        entry = Entry.from_dict(_raw_entry())
        assert entry.keywords == ("laches", "delay")

    def test_optional_lists_default_empty(self) -> None:
        """Keywords, citations and sources may be omitted."""
        data = _raw_entry()
        del data["keywords"]
        del data["citations"]
        del data["sources"]
        entry = Entry.from_dict(data)
        assert entry.keywords == ()
        assert entry.citations == ()
        assert entry.sources == ()

    @pytest.mark.parametrize("field", ["id", "title", "summary", "excerpt"])
    def test_missing_required_field(self, field: str) -> None:
        """Missing required text fields are rejected."""
        data = _raw_entry()
        del data[field]
        with pytest.raises(KnowledgeBaseError, match=field):
            Entry.from_dict(data)

    def test_blank_required_field(self) -> None:
        """Whitespace-only text fields are rejected."""
        with pytest.raises(KnowledgeBaseError, match="title"):
            Entry.from_dict(_raw_entry(title="   "))

    def test_unknown_type(self) -> None:
        """Types outside ENTRY_TYPES are rejected."""
        with pytest.raises(KnowledgeBaseError, match="unknown type"):
            Entry.from_dict(_raw_entry(type="maxim"))

    def test_keywords_must_be_strings(self) -> None:
        """Non-string keywords are rejected."""
        with pytest.raises(KnowledgeBaseError, match="keywords"):
            Entry.from_dict(_raw_entry(keywords=["delay", 3]))

    def test_bad_source(self) -> None:
        """Sources need a label and url."""
        with pytest.raises(KnowledgeBaseError, match="sources"):
            Entry.from_dict(_raw_entry(sources=[{"label": "Wex"}]))

    def test_not_an_object(self) -> None:
        """Entries must be JSON objects."""
        with pytest.raises(KnowledgeBaseError):
            Entry.from_dict(["laches"])  # type: ignore[arg-type]

    def test_to_dict_round_trip(self) -> None:
        """to_dict output loads back into an equal entry."""
        entry = Entry.from_dict(_raw_entry())
        assert Entry.from_dict(entry.to_dict()) == entry


class TestKnowledgeBase:
    """Tests for the KnowledgeBase registry."""

    def test_duplicate_ids_rejected(self) -> None:
        """Two entries with one id cannot coexist."""
        entry = Entry.from_dict(_raw_entry())
        with pytest.raises(KnowledgeBaseError, match="Duplicate"):
            KnowledgeBase([entry, entry])

    def test_mapping_access_and_order(self) -> None:
        """Lookup by id; iteration follows insertion order."""
        first = Entry.from_dict(_raw_entry("b-entry"))
        second = Entry.from_dict(_raw_entry("a-entry"))
        kb = KnowledgeBase([first, second])
        assert kb["a-entry"] is second
        assert list(kb) == ["b-entry", "a-entry"]
        assert kb.entries == (first, second)
        assert len(kb) == 2
        assert "missing" not in kb

    def test_read_only(self) -> None:
        """The registry cannot be mutated."""
        kb = KnowledgeBase([Entry.from_dict(_raw_entry())])
        with pytest.raises(TypeError):
            kb["other"] = kb["laches"]  # type: ignore[index]

    def test_by_type(self) -> None:
        """by_type filters and keeps order."""
        kb = KnowledgeBase(
            [
                Entry.from_dict(_raw_entry("one", type="statute")),
                Entry.from_dict(_raw_entry("two", type="doctrine")),
                Entry.from_dict(_raw_entry("three", type="statute")),
            ]
        )
        assert [e.id for e in kb.by_type("statute")] == ["one", "three"]
        assert kb.by_type("case") == []


class TestLoadKnowledgeBase:
    """Tests for load_knowledge_base."""

    def test_load_entries_object(self, kb_file: Callable[[Any], Path]) -> None:
        """An object with an entries list is accepted."""
        kb = load_knowledge_base(kb_file({"entries": [_raw_entry()]}))
        assert list(kb) == ["laches"]

    def test_load_bare_list(self, kb_file: Callable[[Any], Path]) -> None:
        """A top-level list is accepted."""
        kb = load_knowledge_base(kb_file([_raw_entry("x"), _raw_entry("y")]))
        assert list(kb) == ["x", "y"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises KnowledgeBaseError."""
        with pytest.raises(KnowledgeBaseError, match="not found"):
            load_knowledge_base(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Unparseable JSON raises KnowledgeBaseError."""
        path = tmp_path / "entries.json"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(KnowledgeBaseError, match="Could not read"):
            load_knowledge_base(path)

    def test_empty_entries(self, kb_file: Callable[[Any], Path]) -> None:
        """A knowledge base with no entries is rejected."""
        with pytest.raises(KnowledgeBaseError, match="no entries"):
            load_knowledge_base(kb_file({"entries": []}))

    def test_duplicate_ids_in_file(self, kb_file: Callable[[Any], Path]) -> None:
        """Duplicate ids in the file are rejected at load time."""
        with pytest.raises(KnowledgeBaseError, match="Duplicate"):
            load_knowledge_base(kb_file([_raw_entry(), _raw_entry()]))


class TestBundledKnowledgeBase:
    """Tests for the knowledge base shipped with the package."""

    def test_bundled_file_loads(self) -> None:
        """The bundled entries file passes validation."""
        kb = load_knowledge_base(DEFAULT_KB_PATH)
        assert len(kb) >= 20

    def test_every_type_present(self) -> None:
        """Each entry type has at least one entry."""
        kb = load_knowledge_base(DEFAULT_KB_PATH)
        for entry_type in ENTRY_TYPES:
            assert kb.by_type(entry_type)

    def test_get_knowledge_base_is_cached(self) -> None:
        """Repeated calls return one instance."""
        assert get_knowledge_base() is get_knowledge_base()

    def test_get_knowledge_base_honors_path(
        self,
        kb_path: Callable[[Path], None],
        kb_file: Callable[[Any], Path],
    ) -> None:
        """KB_PATH is read when the cache is empty."""
        kb_path(kb_file([_raw_entry("only-entry")]))
        assert list(get_knowledge_base()) == ["only-entry"]
