"""Pydantic models for API request/response schemas.

Contains data models for:
- Request validation (QueryRequest)
- Response serialization (QueryResponse, EntriesResponse, ErrorResponse)
- Health check responses
"""

from api.models.requests import QueryRequest
from api.models.responses import EntriesResponse
from api.models.responses import EntryDetail
from api.models.responses import EntrySummary
from api.models.responses import ErrorResponse
from api.models.responses import HealthResponse
from api.models.responses import QueryResponse
from api.models.responses import QueryResult
from api.models.responses import ReadyChecks
from api.models.responses import ReadyResponse
from api.models.responses import SourceLink
from api.models.responses import VersionResponse

__all__ = [
    # Requests
    "QueryRequest",
    # Health responses
    "HealthResponse",
    "ReadyChecks",
    "ReadyResponse",
    "VersionResponse",
    # Query responses
    "SourceLink",
    "QueryResult",
    "QueryResponse",
    # Knowledge base responses
    "EntrySummary",
    "EntryDetail",
    "EntriesResponse",
    # Error responses
    "ErrorResponse",
]
