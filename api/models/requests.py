"""Pydantic request models for the Lawyer Agent API."""

from typing import Literal

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

from api.config import MAX_QUESTION_LENGTH
from api.config import QUERY_RESULT_LIMIT
from app.config import MAX_RESULT_LIMIT


class QueryRequest(BaseModel):
    """Request body for POST /query endpoint."""

    question: str = Field(
        ...,
        max_length=MAX_QUESTION_LENGTH,
        description="The legal research question",
    )
    limit: int = Field(
        default=QUERY_RESULT_LIMIT,
        ge=1,
        le=MAX_RESULT_LIMIT,
        description=f"Maximum number of entries to return (1-{MAX_RESULT_LIMIT})",
    )
    search_mode: Literal["weighted", "bm25"] = Field(
        default="weighted",
        description="Scoring: 'weighted' (field-weighted overlap) or 'bm25'",
    )

    @field_validator("question")
    @classmethod
    def question_not_empty(cls, v: str) -> str:
        """Validate question is not empty or whitespace-only."""
        if not v.strip():
            raise ValueError("Question is required")
        return v.strip()
