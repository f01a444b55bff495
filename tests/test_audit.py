# tests/test_audit.py
"""Tests for query audit logging."""

import json
import time
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture
def audit_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Enable auditing against a temporary queries.jsonl."""
    logs_dir = tmp_path / "logs"
    audit_file = logs_dir / "queries.jsonl"

    monkeypatch.setattr("app.config.AUDIT_LOG_ENABLED", True)
    monkeypatch.setattr("app.config.LOGS_DIR", logs_dir)
    monkeypatch.setattr("app.config.AUDIT_LOG_FILE", audit_file)
    monkeypatch.setattr("app.config.AUDIT_LOG_MAX_BYTES", 10 * 1024 * 1024)
    monkeypatch.setattr("app.config.AUDIT_LOG_BACKUP_COUNT", 10)
    return audit_file


class TestAuditLogging:
    """Test query audit logging functionality."""

    @pytest.fixture(autouse=True)
    def reset_handler(self) -> Iterator[None]:
        """Reset the global audit handler around each test."""
        from app.audit import _reset_handler

        _reset_handler()
        yield
        _reset_handler()

    def test_audit_log_file_created(self, audit_file: Path) -> None:
        """Test that audit log file is created on first write."""
        from app.audit import log_query_response

        log_query_response(
            question="What is laches?",
            answer="Laches is an equitable defense.",
            result_ids=["laches"],
            follow_ups=[],
            latency_ms=12,
            search_mode="weighted",
        )

        assert audit_file.exists()
        assert audit_file.stat().st_size > 0

    def test_audit_log_json_format(self, audit_file: Path) -> None:
        """Test that audit log entries are valid JSON with every field."""
        from app.audit import log_query_response

        log_query_response(
            question="Explain champerty",
            answer="Your question most closely concerns Champerty.",
            result_ids=["champerty", "ny-judiciary-law-489"],
            follow_ups=["Is the doctrine of Maintenance still applied today?"],
            latency_ms=7,
            search_mode="bm25",
        )

        log_entry = json.loads(audit_file.read_text(encoding="utf-8").strip())

        assert "timestamp" in log_entry
        assert log_entry["question"] == "Explain champerty"
        assert log_entry["answer"] == "Your question most closely concerns Champerty."
        assert log_entry["result_ids"] == ["champerty", "ny-judiciary-law-489"]
        assert log_entry["follow_ups"] == [
            "Is the doctrine of Maintenance still applied today?"
        ]
        assert log_entry["matched"] is True
        assert log_entry["search_mode"] == "bm25"
        assert log_entry["latency_ms"] == 7

    def test_audit_log_unmatched(self, audit_file: Path) -> None:
        """Test that unmatched queries are flagged."""
        from app.audit import log_query_response

        log_query_response(
            question="xyzzyunknownlegalterm",
            answer="I could not find a direct match.",
            result_ids=[],
            follow_ups=[],
            latency_ms=1,
            search_mode="weighted",
        )

        log_entry = json.loads(audit_file.read_text(encoding="utf-8").strip())
        assert log_entry["matched"] is False
        assert log_entry["result_ids"] == []

    def test_audit_log_multiple_entries(self, audit_file: Path) -> None:
        """Test that multiple queries create separate JSONL lines."""
        from app.audit import log_query_response

        for i in range(3):
            log_query_response(
                question=f"Question {i}",
                answer=f"Answer {i}",
                result_ids=[],
                follow_ups=[],
                latency_ms=i,
                search_mode="weighted",
            )

        lines = audit_file.read_text(encoding="utf-8").strip().split("\n")
        assert len(lines) == 3
        assert [json.loads(line)["question"] for line in lines] == [
            "Question 0",
            "Question 1",
            "Question 2",
        ]

    def test_audit_log_non_ascii(self, audit_file: Path) -> None:
        """Test that section signs and curly quotes are written as-is."""
        from app.audit import log_query_response

        log_query_response(
            question="What does § 489 say?",
            answer="Black’s definition.",
            result_ids=["ny-judiciary-law-489"],
            follow_ups=[],
            latency_ms=3,
            search_mode="weighted",
        )

        content = audit_file.read_text(encoding="utf-8")
        assert "§ 489" in content
        assert "Black’s" in content

    def test_audit_disabled(
        self, audit_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that nothing is written when auditing is off."""
        from app.audit import log_query_response

        monkeypatch.setattr("app.config.AUDIT_LOG_ENABLED", False)
        log_query_response(
            question="laches",
            answer="answer",
            result_ids=["laches"],
            follow_ups=[],
            latency_ms=1,
            search_mode="weighted",
        )

        assert not audit_file.exists()

    def test_audit_failure_does_not_raise(
        self, audit_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a broken handler is logged, not raised."""
        from app import audit

        def _broken() -> None:
            raise OSError("disk full")

        monkeypatch.setattr(audit, "get_audit_file_handler", _broken)
        audit.log_query_response(
            question="laches",
            answer="answer",
            result_ids=[],
            follow_ups=[],
            latency_ms=1,
            search_mode="weighted",
        )

    def test_query_writes_audit_record(self, audit_file: Path) -> None:
        """Test that the query pipeline appends one record per question."""
        from app.query import query

        query("laches")

        log_entry = json.loads(audit_file.read_text(encoding="utf-8").strip())
        assert log_entry["question"] == "laches"
        assert log_entry["result_ids"][0] == "laches"


class TestLatencyCalculation:
    """Test latency calculation helper."""

    def test_calculate_latency_ms(self) -> None:
        """Test latency calculation returns milliseconds."""
        from app.audit import calculate_latency_ms

        start = time.time()
        time.sleep(0.01)
        latency = calculate_latency_ms(start)

        assert latency >= 10
        assert latency < 1000
        assert isinstance(latency, int)
