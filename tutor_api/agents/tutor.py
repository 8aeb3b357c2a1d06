"""Chemistry tutor agent: runs the provider chain and shapes its reply."""

from typing import Final

from tutor_api.core.logging import get_logger
from tutor_api.models.chat import (
    AnswerSection,
    ChatMetadata,
    ChatRequest,
    ChatResponse,
    EnhancedAnswer,
    EnhancedChatRequest,
    EnhancedChatResponse,
    EnhancedMetadata,
)
from tutor_api.models.providers import ProviderResult
from tutor_api.services.prompts import RAG_PLACEHOLDER_CONTEXT
from tutor_api.services.providers import ProviderManager

logger = get_logger(__name__)

MAIN_SECTION_TITLE: Final = "Main Explanation"
KNOWLEDGE_BASE_SOURCE: Final = "Internal Knowledge Base"

# Fixed placeholders; neither value is measured.
PROCESSING_TIME: Final = 0
CONFIDENCE_SCORE: Final = 0.95


def shape_plain(result: ProviderResult, subject: str, language: str) -> ChatResponse:
    """Map a provider result onto the plain chat envelope."""
    return ChatResponse(
        response=result.content,
        metadata=ChatMetadata(
            model=result.model,
            tokens=result.tokens,
            subject=subject,
            language=language,
        ),
    )


def shape_enhanced(result: ProviderResult, context: str) -> EnhancedChatResponse:
    """Map a provider result onto the enhanced chat envelope."""
    return EnhancedChatResponse(
        response=EnhancedAnswer(
            main_answer=result.content,
            sections=[AnswerSection(title=MAIN_SECTION_TITLE, content=result.content)],
            learn_more=[],
        ),
        metadata=EnhancedMetadata(
            model=result.model,
            processing_time=PROCESSING_TIME,
            confidence_score=CONFIDENCE_SCORE,
            sources=[KNOWLEDGE_BASE_SOURCE] if context else [],
        ),
    )


class TutorAgent:
    """
    Chemistry tutor backed by a provider fallback chain.

    Callers must validate that the request carries a non-empty message.
    """

    def __init__(self, provider_manager: ProviderManager) -> None:
        self.provider_manager = provider_manager

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Answer a question in plain mode.

        Raises:
            AllProvidersUnavailableError: If no provider could answer
        """
        message = request.message or ""
        logger.info("Processing chat request", extra={"preview": message[:50]})

        result = await self.provider_manager.generate(message)

        logger.info(
            "Chat request answered",
            extra={"provider": result.provider.value, "tokens": result.tokens},
        )
        return shape_plain(result, subject=request.subject, language=request.language)

    async def chat_enhanced(self, request: EnhancedChatRequest) -> EnhancedChatResponse:
        """
        Answer a question in enhanced mode.

        Retrieval is not implemented: ``use_rag`` only attaches a fixed
        placeholder context.

        Raises:
            AllProvidersUnavailableError: If no provider could answer
        """
        message = request.message or ""
        logger.info(
            "Processing enhanced chat request",
            extra={"preview": message[:50], "use_rag": request.use_rag},
        )

        context = RAG_PLACEHOLDER_CONTEXT if request.use_rag else ""
        result = await self.provider_manager.generate(message, context)

        logger.info(
            "Enhanced chat request answered",
            extra={"provider": result.provider.value, "tokens": result.tokens},
        )
        return shape_enhanced(result, context)
