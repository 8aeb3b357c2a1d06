"""Provider-related models and enums."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ProviderType(StrEnum):
    """Supported chat-completion providers."""

    GROQ = "groq"
    DEEPSEEK = "deepseek"


class ProviderResult(BaseModel):
    """Successful reply from a single provider call."""

    content: str = Field(description="Text of the first completion choice")
    provider: ProviderType = Field(description="Provider that produced the reply")
    model: str = Field(description="Model label reported to clients")
    tokens: int = Field(default=0, ge=0, description="Total tokens reported by the provider")
