"""Pydantic response models for the Lawyer Agent API."""

from datetime import datetime
from datetime import timezone
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

# =============================================================================
# Health & Status Responses
# =============================================================================


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = Field(default="healthy", description="Health status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Current server time (UTC)",
    )


class ReadyChecks(BaseModel):
    """Individual readiness checks."""

    knowledge_base_loaded: bool = Field(
        description="Knowledge base file loaded and validated"
    )
    entry_count: int = Field(default=0, description="Number of entries loaded")


class ReadyResponse(BaseModel):
    """Response for GET /ready endpoint."""

    status: str = Field(description="Ready status: 'ready' or 'not_ready'")
    checks: ReadyChecks = Field(description="Individual readiness check results")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Current server time (UTC)",
    )


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    api_version: str = Field(description="API version")
    engine_version: str = Field(description="Installed lawyer-agent package version")
    search_modes: list[str] = Field(description="Available scoring modes")


# =============================================================================
# Query Responses
# =============================================================================


class SourceLink(BaseModel):
    """A reference link backing an entry."""

    label: str = Field(description="Link text")
    url: str = Field(description="Link target")


class QueryResult(BaseModel):
    """A matched knowledge-base entry with its relevance evidence."""

    id: str = Field(description="Stable entry identifier")
    title: str = Field(description="Term, doctrine, case or statute title")
    summary: str = Field(description="One- to two-sentence gloss")
    excerpt: str = Field(description="Longer descriptive text")
    citations: list[str] = Field(default_factory=list, description="Citation strings")
    sources: list[SourceLink] = Field(
        default_factory=list, description="Reference links"
    )
    score: float = Field(description="Relevance score (higher is more relevant)")
    highlights: list[str] = Field(
        default_factory=list, description="Excerpt spans supporting the match"
    )
    region: str = Field(description="Jurisdiction or geographic scope")
    era: str = Field(description="Historical period or enactment era")
    type: str = Field(description="definition, doctrine, statute or case")


class QueryResponse(BaseModel):
    """Response for POST /query endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    answer: str = Field(description="Composed answer text")
    results: list[QueryResult] = Field(
        default_factory=list, description="Ranked matching entries"
    )
    follow_ups: list[str] = Field(
        default_factory=list,
        alias="followUps",
        description="Suggested related questions",
    )
    timestamp: datetime = Field(description="Response generation time (UTC)")


# =============================================================================
# Knowledge Base Responses
# =============================================================================


class EntrySummary(BaseModel):
    """Short listing of a knowledge-base entry."""

    id: str = Field(description="Stable entry identifier")
    title: str = Field(description="Entry title")
    type: str = Field(description="Entry type")
    region: str = Field(description="Jurisdiction or geographic scope")
    era: str = Field(description="Historical period or enactment era")


class EntriesResponse(BaseModel):
    """Response for GET /entries endpoint."""

    entries: list[EntrySummary] = Field(description="Entries in knowledge-base order")
    total_count: int = Field(description="Number of entries listed")


class EntryDetail(BaseModel):
    """Full knowledge-base entry for GET /entries/{entry_id}."""

    id: str
    title: str
    type: str
    region: str
    era: str
    summary: str
    excerpt: str
    keywords: list[str] = Field(default_factory=list)
    citations: list[str] = Field(default_factory=list)
    sources: list[SourceLink] = Field(default_factory=list)


# =============================================================================
# Error Responses
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(description="Human-readable error message")
    code: str = Field(description="Error code (e.g., 'QUESTION_REQUIRED')")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
    request_id: str | None = Field(default=None, description="Request ID for tracing")
