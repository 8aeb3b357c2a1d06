"""Chat-related models."""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ChatRequest(BaseModel):
    """Request model for the plain chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(default=None, description="Student question")
    subject: str = Field(default="chemistry", description="Subject of the question")
    language: str = Field(default="si", description="Answer language code")

    @field_validator("subject", "language", mode="before")
    @classmethod
    def _null_uses_default(cls, value: object, info: ValidationInfo) -> object:
        """Treat an explicit null like an omitted field."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class EnhancedChatRequest(ChatRequest):
    """Request model for the enhanced chat endpoint."""

    use_rag: bool = Field(
        default=False,
        alias="useRAG",
        description="Request knowledge-base context (placeholder only)",
    )

    @field_validator("use_rag", mode="before")
    @classmethod
    def _null_is_false(cls, value: object) -> object:
        return False if value is None else value


class ChatMetadata(BaseModel):
    """Metadata attached to a plain chat reply."""

    model: str = Field(description="Model label of the provider that answered")
    tokens: int = Field(description="Total tokens reported by the provider")
    subject: str
    language: str


class ChatResponse(BaseModel):
    """Response model for the plain chat endpoint."""

    success: bool = True
    response: str = Field(description="Tutor's answer")
    metadata: ChatMetadata


class AnswerSection(BaseModel):
    """One titled section of an enhanced answer."""

    title: str
    content: str


class EnhancedAnswer(BaseModel):
    """Structured answer body of the enhanced endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    main_answer: str = Field(alias="mainAnswer", description="Full answer text")
    sections: list[AnswerSection] = Field(default_factory=list)
    learn_more: list[str] = Field(default_factory=list, alias="learnMore")


class EnhancedMetadata(BaseModel):
    """Metadata attached to an enhanced chat reply."""

    model_config = ConfigDict(populate_by_name=True)

    model: str = Field(description="Model label of the provider that answered")
    processing_time: int = Field(alias="processingTime")
    confidence_score: float = Field(alias="confidenceScore")
    sources: list[str] = Field(default_factory=list)


class EnhancedChatResponse(BaseModel):
    """Response model for the enhanced chat endpoint."""

    success: bool = True
    response: EnhancedAnswer
    metadata: EnhancedMetadata


class ErrorResponse(BaseModel):
    """Error envelope returned by every endpoint on failure."""

    success: bool = False
    error: str
    details: str | None = None
