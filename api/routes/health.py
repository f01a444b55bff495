"""Health and status endpoints for the Lawyer Agent API."""

from datetime import datetime
from datetime import timezone
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.config import API_VERSION
from api.models import HealthResponse
from api.models import ReadyChecks
from api.models import ReadyResponse
from api.models import VersionResponse
from app.knowledge import KnowledgeBaseError
from app.knowledge import get_knowledge_base
from app.logging import get_logger
from app.scoring import SearchMode

log = get_logger(__name__)

router = APIRouter(tags=["Health"])


def _get_engine_version() -> str:
    """Get the installed package version, or 'unknown' when not installed."""
    try:
        return package_version("lawyer-agent")
    except PackageNotFoundError:
        return "unknown"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic liveness check.

    Returns immediately without touching the knowledge base.

    Returns:
        Health status with timestamp.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse}},
)
async def ready() -> ReadyResponse | JSONResponse:
    """Readiness check: the knowledge base loads and validates.

    Returns:
        Ready status with check results; HTTP 503 when not ready.
    """
    try:
        entry_count = len(get_knowledge_base())
        loaded = True
    except KnowledgeBaseError as e:
        log.warning("readiness_check_failed", error=str(e))
        entry_count = 0
        loaded = False

    response = ReadyResponse(
        status="ready" if loaded else "not_ready",
        checks=ReadyChecks(knowledge_base_loaded=loaded, entry_count=entry_count),
        timestamp=datetime.now(timezone.utc),
    )
    if not loaded:
        return JSONResponse(status_code=503, content=response.model_dump(mode="json"))
    return response


@router.get("/version", response_model=VersionResponse)
async def version() -> VersionResponse:
    """Get API and engine version information."""
    return VersionResponse(
        api_version=API_VERSION,
        engine_version=_get_engine_version(),
        search_modes=[mode.value for mode in SearchMode],
    )
