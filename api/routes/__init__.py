"""API route modules.

Contains endpoint definitions for:
- Health checks (/health, /ready, /version)
- Query operations (/query)
- Knowledge-base browsing (/entries)
"""

from api.routes.entries import router as entries_router
from api.routes.health import router as health_router
from api.routes.query import router as query_router

__all__ = ["entries_router", "health_router", "query_router"]
