"""Data models for the application."""

from tutor_api.models.chat import (
    AnswerSection,
    ChatMetadata,
    ChatRequest,
    ChatResponse,
    EnhancedAnswer,
    EnhancedChatRequest,
    EnhancedChatResponse,
    EnhancedMetadata,
    ErrorResponse,
)
from tutor_api.models.providers import ProviderResult, ProviderType

__all__ = [
    "AnswerSection",
    "ChatMetadata",
    "ChatRequest",
    "ChatResponse",
    "EnhancedAnswer",
    "EnhancedChatRequest",
    "EnhancedChatResponse",
    "EnhancedMetadata",
    "ErrorResponse",
    "ProviderResult",
    "ProviderType",
]
