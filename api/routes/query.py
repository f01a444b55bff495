"""Query endpoint for the Lawyer Agent API."""

from fastapi import APIRouter

from api.exceptions import EmptyQuestionError
from api.exceptions import ServiceUnavailableError
from api.exceptions import ValidationError
from api.models import ErrorResponse
from api.models import QueryRequest
from api.models import QueryResponse
from api.models import QueryResult
from app.knowledge import KnowledgeBaseError
from app.logging import get_logger
from app.query import BlankQuestionError
from app.query import query as run_query

log = get_logger(__name__)

router = APIRouter(tags=["Query"])


@router.post(
    "/query",
    response_model=QueryResponse,
    response_model_by_alias=True,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid question"},
        503: {"model": ErrorResponse, "description": "Knowledge base unavailable"},
    },
)
async def query(request: QueryRequest) -> QueryResponse:
    """Answer a legal research question from the curated knowledge base.

    Always answers when the question is non-empty: when nothing matches, the
    answer is a fixed fallback message and results is empty.

    Args:
        request: Query request with question, limit and search mode.

    Returns:
        Answer text, ranked results, follow-up questions and a timestamp.

    Raises:
        EmptyQuestionError: If the question is blank after trimming (400).
        ValidationError: For other invalid parameters (400).
        ServiceUnavailableError: If the knowledge base cannot be loaded (503).
    """
    try:
        response = run_query(
            question=request.question,
            limit=request.limit,
            search_mode=request.search_mode,
        )
    except KnowledgeBaseError as e:
        log.error("knowledge_base_unavailable", error=str(e))
        raise ServiceUnavailableError(message="Knowledge base unavailable")
    except BlankQuestionError:
        raise EmptyQuestionError()
    except ValueError as e:
        raise ValidationError(message=str(e))

    return QueryResponse(
        answer=response["answer"],
        results=[QueryResult(**result) for result in response["results"]],
        follow_ups=response["followUps"],
        timestamp=response["timestamp"],
    )
