# app/audit.py
"""Query audit logging.

Every answered query is appended as one JSON line to logs/queries.jsonl:
question, answer, returned entry ids, follow-ups, search mode and latency.
Audit failures are logged and never fail the query.
"""

import json
import time
from datetime import datetime
from datetime import timezone
from logging.handlers import RotatingFileHandler
from typing import Any

from app.logging import get_logger

log = get_logger(__name__)

# Global file handler for audit logs (initialized on first use)
_audit_file_handler: RotatingFileHandler | None = None


def get_audit_file_handler() -> RotatingFileHandler:
    """Get or create the rotating file handler for audit logs.

    Returns:
        RotatingFileHandler instance for queries.jsonl.
    """
    global _audit_file_handler

    if _audit_file_handler is not None:
        return _audit_file_handler

    from app.config import AUDIT_LOG_BACKUP_COUNT
    from app.config import AUDIT_LOG_FILE
    from app.config import AUDIT_LOG_MAX_BYTES

    AUDIT_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

    _audit_file_handler = RotatingFileHandler(
        filename=str(AUDIT_LOG_FILE),
        maxBytes=AUDIT_LOG_MAX_BYTES,
        backupCount=AUDIT_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )

    log.info(
        "audit_log_initialized",
        file=str(AUDIT_LOG_FILE),
        max_bytes=AUDIT_LOG_MAX_BYTES,
        backups=AUDIT_LOG_BACKUP_COUNT,
    )

    return _audit_file_handler


def _reset_handler() -> None:
    """Reset the global file handler (for testing purposes only)."""
    global _audit_file_handler
    if _audit_file_handler is not None:
        _audit_file_handler.close()
    _audit_file_handler = None


def log_query_response(
    question: str,
    answer: str,
    result_ids: list[str],
    follow_ups: list[str],
    latency_ms: int,
    search_mode: str,
) -> None:
    """Append an audit record for an answered query.

    Does nothing when AUDIT_LOG_ENABLED is off.

    Args:
        question: Trimmed user question.
        answer: Composed answer text.
        result_ids: Ids of returned entries, best first.
        follow_ups: Suggested follow-up questions.
        latency_ms: Processing time in milliseconds.
        search_mode: Scorer used for retrieval.
    """
    from app.config import AUDIT_LOG_ENABLED

    if not AUDIT_LOG_ENABLED:
        return

    try:
        audit_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "question": question,
            "answer": answer,
            "result_ids": result_ids,
            "follow_ups": follow_ups,
            "matched": bool(result_ids),
            "search_mode": search_mode,
            "latency_ms": latency_ms,
        }

        handler = get_audit_file_handler()
        record_line = json.dumps(audit_entry, ensure_ascii=False)
        handler.stream.write(record_line + "\n")
        handler.stream.flush()

        log.debug(
            "query_logged",
            question_length=len(question),
            results=len(result_ids),
            latency_ms=latency_ms,
        )

    except Exception as e:
        log.error("audit_log_failed", error=str(e))


def calculate_latency_ms(start_time: float) -> int:
    """Calculate elapsed time in milliseconds.

    Args:
        start_time: Start time from time.time().

    Returns:
        Elapsed time in milliseconds as integer.
    """
    elapsed = time.time() - start_time
    return int(elapsed * 1000)
