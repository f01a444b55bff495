# app/config.py
"""Configuration constants for the Lawyer Agent retrieval engine.

Scoring weights and bonuses are fixed, documented constants. The relative
ordering of near-tied entries depends on them, so they live here rather than
inline in the scoring code. Deployment-specific values come from the
environment.
"""

import os
from pathlib import Path

# Knowledge base location (bundled JSON by default)
DEFAULT_KB_PATH = Path(__file__).parent / "data" / "entries.json"
KB_PATH = Path(os.getenv("LAWYER_AGENT_KB_PATH", str(DEFAULT_KB_PATH)))

# Valid entry categories
ENTRY_TYPES = ("definition", "doctrine", "statute", "case")

# Logging
DEBUG = os.getenv("LAWYER_AGENT_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_JSON = os.getenv("LAWYER_AGENT_LOG_JSON", "false").lower() in (
    "true",
    "1",
    "yes",
)
LOGS_DIR = Path("logs")

# Query audit log (JSON Lines)
AUDIT_LOG_ENABLED = os.getenv("LAWYER_AGENT_AUDIT_ENABLED", "true").lower() in (
    "true",
    "1",
    "yes",
)
AUDIT_LOG_FILE = LOGS_DIR / "queries.jsonl"
AUDIT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB per log file
AUDIT_LOG_BACKUP_COUNT = 5

# Normalization
MIN_TOKEN_LENGTH = 2  # shorter tokens are discarded

# Field weights for the weighted lexical scorer (title > keywords > summary > excerpt)
FIELD_WEIGHTS: dict[str, float] = {
    "title": 5.0,
    "keywords": 3.0,
    "summary": 2.0,
    "excerpt": 1.0,
}
FIELD_OCCURRENCE_CAP = 3  # Max counted occurrences of one token in one field
PHRASE_BONUS = 4.0  # Scaled by the share of the query covered by the longest run
TITLE_MATCH_BONUS = 6.0  # Title token set equals query token set

# Search modes
DEFAULT_SEARCH_MODE = "weighted"

# Ranking
MIN_SCORE = 0.0  # Entries scoring <= this are never ranked
DEFAULT_RESULT_LIMIT = 5
MAX_RESULT_LIMIT = 20

# Highlights
MAX_HIGHLIGHTS = 3
MAX_HIGHLIGHT_CHARS = 240
HIGHLIGHT_LEAD_WORDS = 4  # Words kept before the first match when a span is cut

# Answer composition
MAX_SYNTHESIZED_RESULTS = 3

# Follow-up suggestions
MAX_FOLLOW_UPS = 3
