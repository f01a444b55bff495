# api/middleware/logging.py
"""Access logging for the Lawyer Agent API.

Each request produces a request_started event and either request_completed or
request_failed. The request id is merged in from structlog's contextvars, so
RequestIDMiddleware must wrap this middleware.
"""

import time
from collections.abc import Awaitable
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api import config as api_config
from app.logging import get_logger

log = get_logger(__name__)

# User agents are truncated to this many characters in log events
MAX_USER_AGENT_LENGTH = 100


def _get_client_ip(request: Request) -> str:
    """Return the caller's address.

    The first X-Forwarded-For hop is used only when TRUST_PROXY_HEADERS is set.
    """
    if api_config.TRUST_PROXY_HEADERS:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # "client, proxy1, proxy2"
            return forwarded_for.split(",")[0].strip()

    return request.client.host if request.client else "unknown"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency for every request.

    Register before RequestIDMiddleware; Starlette runs middleware in reverse
    registration order.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        method = request.method
        path = request.url.path
        client_ip = _get_client_ip(request)

        log.info(
            "request_started",
            method=method,
            path=path,
            client_ip=client_ip,
            user_agent=request.headers.get("User-Agent", "unknown")[
                :MAX_USER_AGENT_LENGTH
            ],
        )

        try:
            response = await call_next(request)
        except Exception as e:
            log.error(
                "request_failed",
                method=method,
                path=path,
                client_ip=client_ip,
                latency_ms=_elapsed_ms(start),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise

        log.info(
            "request_completed",
            method=method,
            path=path,
            status_code=response.status_code,
            latency_ms=_elapsed_ms(start),
        )
        return response
