# api/middleware/request_id.py
"""Request ID middleware for request tracing.

Every response carries an X-Request-ID header. The id is reused from the
incoming header when an upstream proxy supplied one, otherwise generated.

The id is kept in a context variable so that exception handlers can put it
in error bodies, and bound into structlog's contextvars so that every log
event emitted while handling the request carries it.
"""

import uuid
from collections.abc import Awaitable
from collections.abc import Callable
from contextvars import ContextVar

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Longest upstream id we echo back; anything longer is replaced
MAX_REQUEST_ID_LENGTH = 128

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the current request ID from context.

    Returns:
        Request ID string or None if not in a request context.
    """
    return request_id_ctx.get()


def _incoming_request_id(request: Request) -> str | None:
    value = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if not value or len(value) > MAX_REQUEST_ID_LENGTH:
        return None
    return value


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request/response.

    The request ID is:
    - Taken from incoming X-Request-ID header if present and reasonably short
    - Generated as a UUID4 otherwise
    - Stored in request.state.request_id for route handlers
    - Stored in a context variable for exception handlers
    - Bound into structlog contextvars for the duration of the request
    - Added to the response as X-Request-ID header (if not already set)
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and add request ID.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in chain.

        Returns:
            Response with X-Request-ID header added.
        """
        request_id = _incoming_request_id(request) or str(uuid.uuid4())
        request.state.request_id = request_id

        token = request_id_ctx.set(request_id)
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)

            if REQUEST_ID_HEADER not in response.headers:
                response.headers[REQUEST_ID_HEADER] = request_id

            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
            request_id_ctx.reset(token)
