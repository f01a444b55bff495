"""Knowledge-base browsing endpoints for the Lawyer Agent API."""

from fastapi import APIRouter
from fastapi import Query

from api.exceptions import EntryNotFoundError
from api.exceptions import ServiceUnavailableError
from api.exceptions import ValidationError
from api.models import EntriesResponse
from api.models import EntryDetail
from api.models import ErrorResponse
from api.models import EntrySummary
from app.config import ENTRY_TYPES
from app.knowledge import KnowledgeBase
from app.knowledge import KnowledgeBaseError
from app.knowledge import get_knowledge_base

router = APIRouter(
    tags=["Entries"],
    responses={
        503: {"model": ErrorResponse, "description": "Knowledge base unavailable"}
    },
)


def _knowledge_base() -> KnowledgeBase:
    try:
        return get_knowledge_base()
    except KnowledgeBaseError:
        raise ServiceUnavailableError(message="Knowledge base unavailable")


@router.get(
    "/entries",
    response_model=EntriesResponse,
    responses={400: {"model": ErrorResponse, "description": "Unknown entry type"}},
)
async def list_entries(
    type: str | None = Query(default=None, description="Filter by entry type"),
) -> EntriesResponse:
    """List knowledge-base entries in their stored order.

    Args:
        type: Optional entry type (definition, doctrine, statute, case).

    Returns:
        Entry summaries and their count.

    Raises:
        ValidationError: If type is not a known entry type (400).
    """
    kb = _knowledge_base()
    if type is None:
        entries = list(kb.entries)
    elif type in ENTRY_TYPES:
        entries = kb.by_type(type)
    else:
        raise ValidationError(
            message=f"Unknown entry type: {type}",
            details={"available_types": list(ENTRY_TYPES)},
        )

    return EntriesResponse(
        entries=[
            EntrySummary(
                id=entry.id,
                title=entry.title,
                type=entry.type,
                region=entry.region,
                era=entry.era,
            )
            for entry in entries
        ],
        total_count=len(entries),
    )


@router.get(
    "/entries/{entry_id}",
    response_model=EntryDetail,
    responses={404: {"model": ErrorResponse, "description": "Entry not found"}},
)
async def get_entry(entry_id: str) -> EntryDetail:
    """Get a single entry by id.

    Raises:
        EntryNotFoundError: If no entry has this id (404).
    """
    kb = _knowledge_base()
    if entry_id not in kb:
        raise EntryNotFoundError(entry_id)
    return EntryDetail(**kb[entry_id].to_dict())
