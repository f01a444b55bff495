"""API middleware modules.

Contains middleware for:
- Request ID generation and tracing
- Request/response logging
"""

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.request_id import get_request_id

__all__ = ["get_request_id", "RequestIDMiddleware", "RequestLoggingMiddleware"]
