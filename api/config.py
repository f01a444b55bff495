"""Configuration constants for the Lawyer Agent HTTP API.

This module defines configuration specific to the FastAPI layer.
Retrieval configuration remains in app/config.py.
"""

import os

# =============================================================================
# API Version
# =============================================================================

# API version for /version endpoint and OpenAPI docs
API_VERSION = "1.0.0"

# =============================================================================
# Query limits
# =============================================================================

# Results returned per question (the chat UI always shows five)
QUERY_RESULT_LIMIT = 5

# Longest accepted question, in characters
MAX_QUESTION_LENGTH = 2000

# =============================================================================
# CORS
# =============================================================================

# CORS allowed origins (comma-separated string, empty for none)
# Example: "http://localhost:3000,https://research.example.com"
_cors_origins = os.getenv("LAWYER_AGENT_CORS_ORIGINS", "")
CORS_ORIGINS: list[str] = [
    origin.strip() for origin in _cors_origins.split(",") if origin.strip()
]

# =============================================================================
# Proxy Configuration
# =============================================================================

# Trust X-Forwarded-For only when running behind a trusted reverse proxy
TRUST_PROXY_HEADERS = (
    os.getenv("LAWYER_AGENT_TRUST_PROXY_HEADERS", "false").lower() == "true"
)
