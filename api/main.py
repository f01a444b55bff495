# api/main.py
"""FastAPI application entry point for the Lawyer Agent API.

This module initializes the FastAPI application with:
- Startup loading of the knowledge base
- Request ID middleware for tracing
- Request logging middleware for observability
- CORS middleware configuration
- Global exception handlers for consistent error responses
- Health, query, and entries route registration

Every error body has the shape {"error": message, "code": code,
"request_id": id} with an optional "details" object.

Usage:
    uvicorn api.main:app --reload
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import API_VERSION
from api.config import CORS_ORIGINS
from api.exceptions import APIError
from api.exceptions import EmptyQuestionError
from api.exceptions import InvalidJSONError
from api.middleware import RequestIDMiddleware
from api.middleware import RequestLoggingMiddleware
from api.middleware import get_request_id
from api.routes import entries_router
from api.routes import health_router
from api.routes import query_router
from app.config import DEBUG
from app.knowledge import KnowledgeBaseError
from app.knowledge import get_knowledge_base
from app.logging import configure_logging
from app.logging import get_logger

log = get_logger(__name__)

# Validation error types on the question field that mean "no usable question"
QUESTION_REQUIRED_TYPES = frozenset({"missing", "value_error", "string_type"})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and load the knowledge base before serving."""
    configure_logging(debug=DEBUG)
    try:
        kb = get_knowledge_base()
        log.info("api_started", entries=len(kb), version=API_VERSION)
    except KnowledgeBaseError as e:
        # Keep serving so /health and /ready can report the failure
        log.error("knowledge_base_load_failed", error=str(e))
    yield


app = FastAPI(
    title="Lawyer Agent API",
    description=(
        "Answers plain-language legal questions from a small curated "
        "knowledge base of definitions, doctrines, statutes and cases, "
        "returning ranked entries with supporting highlights, a composed "
        "answer and follow-up questions."
    ),
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# Exception Handlers
# =============================================================================


def _build_error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build a consistent error response with request ID.

    Args:
        request: The failing request (its state holds the request ID once
            the request ID context has been reset).
        status_code: HTTP status code.
        code: Error code (e.g., 'VALIDATION_ERROR').
        message: Human-readable error message.
        details: Optional additional error context.

    Returns:
        JSONResponse with X-Request-ID header and consistent body format.
    """
    request_id = get_request_id() or getattr(request.state, "request_id", None)

    content: dict[str, Any] = {
        "error": message,
        "code": code,
    }
    if details:
        content["details"] = details
    if request_id:
        content["request_id"] = request_id

    response = JSONResponse(status_code=status_code, content=content)

    if request_id:
        response.headers["X-Request-ID"] = request_id

    return response


def _error_field(err: dict[str, Any]) -> str:
    return ".".join(str(loc) for loc in err.get("loc", []))


def _classify_validation_errors(errors: list[dict[str, Any]]) -> APIError | None:
    """Map body validation errors onto the dedicated 400 errors.

    Returns:
        InvalidJSONError when the body is not a JSON object,
        EmptyQuestionError when the question is missing, blank or not a
        string, otherwise None.
    """
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if err.get("type") == "json_invalid" or loc == ("body",):
            return InvalidJSONError()

    for err in errors:
        loc = tuple(err.get("loc", ()))
        if loc == ("body", "question") and err.get("type") in QUESTION_REQUIRED_TYPES:
            return EmptyQuestionError()

    return None


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom APIError exceptions with consistent format."""
    return _build_error_response(
        request, exc.status_code, exc.code, exc.message, exc.details
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTPException (404 for unknown paths, 405, ...) with consistent format."""
    code = f"HTTP_{exc.status_code}"
    message = str(exc.detail) if exc.detail else "An error occurred"
    return _build_error_response(request, exc.status_code, code, message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle validation errors with consistent error format.

    Malformed JSON and a missing or blank question get their own messages;
    any other invalid field is reported as VALIDATION_ERROR with per-field
    details.
    """
    errors = list(exc.errors())

    classified = _classify_validation_errors(errors)
    if classified is not None:
        return _build_error_response(
            request, classified.status_code, classified.code, classified.message
        )

    if len(errors) == 1:
        err = errors[0]
        message = (
            f"Validation error in {_error_field(err)}: "
            f"{err.get('msg', 'invalid value')}"
        )
    else:
        message = f"{len(errors)} validation errors"

    details = {
        "errors": [
            {
                "field": _error_field(err),
                "reason": err.get("msg"),
                "type": err.get("type"),
            }
            for err in errors
        ]
    }

    return _build_error_response(request, 400, "VALIDATION_ERROR", message, details)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the exception and return a generic 500 error."""
    log.exception("unhandled_exception", path=request.url.path)

    return _build_error_response(
        request,
        500,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
    )


# =============================================================================
# Middleware Configuration
# =============================================================================

if CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

# Middleware runs in reverse registration order: request ID first, then logging
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)


# =============================================================================
# Route Registration
# =============================================================================

app.include_router(health_router)
app.include_router(query_router)
app.include_router(entries_router)
