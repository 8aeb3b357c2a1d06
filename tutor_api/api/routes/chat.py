"""Chat endpoints."""

from fastapi import APIRouter, Depends, Request

from tutor_api.agents.tutor import TutorAgent
from tutor_api.api.errors import (
    INTERNAL_ERROR,
    MESSAGE_REQUIRED,
    PROVIDERS_UNAVAILABLE,
    PROVIDERS_UNAVAILABLE_DETAILS,
    APIError,
)
from tutor_api.core.logging import get_logger
from tutor_api.models.chat import (
    ChatRequest,
    ChatResponse,
    EnhancedChatRequest,
    EnhancedChatResponse,
    ErrorResponse,
)
from tutor_api.services.providers import AllProvidersUnavailableError

logger = get_logger(__name__)
router = APIRouter(prefix="/api/chat", tags=["chat"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing message or invalid body"},
    500: {"model": ErrorResponse, "description": "No provider could answer"},
}


def get_tutor_agent(request: Request) -> TutorAgent:
    """Return the tutor agent built at application startup."""
    return request.app.state.tutor_agent


def _require_message(payload: ChatRequest) -> None:
    if not payload.message:
        raise APIError(400, MESSAGE_REQUIRED)


@router.post("", response_model=ChatResponse, responses=ERROR_RESPONSES)
async def chat(
    payload: ChatRequest,
    agent: TutorAgent = Depends(get_tutor_agent),
) -> ChatResponse:
    """
    Answer a chemistry question.

    Args:
        payload: Chat request with message, subject and language
        agent: Tutor agent (injected)

    Raises:
        APIError: 400 if the message is missing, 500 if no provider answered
    """
    _require_message(payload)

    try:
        return await agent.chat(payload)
    except AllProvidersUnavailableError as e:
        raise APIError(500, PROVIDERS_UNAVAILABLE, PROVIDERS_UNAVAILABLE_DETAILS) from e
    except Exception as e:
        logger.error("Chat request failed", extra={"error": str(e)}, exc_info=True)
        raise APIError(500, INTERNAL_ERROR) from e


@router.post("/enhanced", response_model=EnhancedChatResponse, responses=ERROR_RESPONSES)
async def chat_enhanced(
    payload: EnhancedChatRequest,
    agent: TutorAgent = Depends(get_tutor_agent),
) -> EnhancedChatResponse:
    """
    Answer a chemistry question with a sectioned response body.

    Args:
        payload: Chat request, optionally asking for knowledge-base context
        agent: Tutor agent (injected)

    Raises:
        APIError: 400 if the message is missing, 500 if no provider answered
    """
    _require_message(payload)

    try:
        return await agent.chat_enhanced(payload)
    except AllProvidersUnavailableError as e:
        raise APIError(500, PROVIDERS_UNAVAILABLE, PROVIDERS_UNAVAILABLE_DETAILS) from e
    except Exception as e:
        logger.error("Enhanced chat request failed", extra={"error": str(e)}, exc_info=True)
        raise APIError(500, INTERNAL_ERROR) from e
