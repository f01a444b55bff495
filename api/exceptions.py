"""Custom exception classes for the Lawyer Agent API.

All custom exceptions inherit from APIError and include:
- HTTP status code
- Error code (for client identification)
- Human-readable message (returned as the "error" field)
- Optional details dictionary for additional context
"""

from typing import Any


class APIError(Exception):
    """Base exception for all API errors.

    Attributes:
        status_code: HTTP status code to return.
        code: Machine-readable error code (e.g., 'VALIDATION_ERROR').
        message: Human-readable error message.
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default: 500).
            code: Error code for client identification.
            details: Optional additional error context.
        """
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class ValidationError(APIError):
    """Raised when request validation fails (400 Bad Request)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=400,
            code="VALIDATION_ERROR",
            details=details,
        )


class InvalidJSONError(APIError):
    """Raised when the request body is not parseable JSON (400 Bad Request)."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Invalid JSON payload",
            status_code=400,
            code="INVALID_JSON",
            details=details,
        )


class EmptyQuestionError(APIError):
    """Raised when the question is missing, empty or whitespace-only (400)."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Question is required",
            status_code=400,
            code="QUESTION_REQUIRED",
            details=details,
        )


class EntryNotFoundError(APIError):
    """Raised when a requested knowledge-base entry does not exist (404)."""

    def __init__(self, entry_id: str) -> None:
        """Initialize entry not found error.

        Args:
            entry_id: The unknown entry id.
        """
        super().__init__(
            message=f"Unknown entry: {entry_id}",
            status_code=404,
            code="ENTRY_NOT_FOUND",
            details={"entry_id": entry_id},
        )


class ServiceUnavailableError(APIError):
    """Raised when the knowledge base cannot be loaded (503 Service Unavailable)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=503,
            code="SERVICE_UNAVAILABLE",
            details=details,
        )
