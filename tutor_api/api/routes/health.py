"""Service information and health check endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from tutor_api.core.config import Settings, get_settings
from tutor_api.models.providers import ProviderType

router = APIRouter()

ENDPOINTS = [
    "POST /api/chat",
    "POST /api/chat/enhanced",
    "GET /api/health",
]

FEATURES = [
    "Groq AI (Llama 3.3 70B)",
    "DeepSeek AI (Backup)",
    "Multi-language Support",
    "Enhanced RAG (Coming Soon)",
]


class RootResponse(BaseModel):
    """Service banner response model."""

    message: str
    version: str
    endpoints: list[str]


class ProviderEnvironment(BaseModel):
    """Which provider keys are present in the environment."""

    model_config = ConfigDict(populate_by_name=True)

    groq_configured: bool = Field(alias="groqConfigured")
    deepseek_configured: bool = Field(alias="deepseekConfigured")


class HealthResponse(BaseModel):
    """Health check response model."""

    success: bool = True
    status: str
    version: str
    features: list[str]
    environment: ProviderEnvironment


@router.get("/", response_model=RootResponse, tags=["System"])
async def root(settings: Settings = Depends(get_settings)) -> RootResponse:
    """Report that the service is up and list its endpoints."""
    return RootResponse(
        message=f"{settings.app_name} is running",
        version=settings.version,
        endpoints=ENDPOINTS,
    )


@router.get("/api/health", response_model=HealthResponse, tags=["System"])
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Health check endpoint.

    Reports service status and whether each provider key is configured.
    Provider reachability is not checked.

    Args:
        settings: Application settings (injected)
    """
    return HealthResponse(
        status="running",
        version=settings.version,
        features=FEATURES,
        environment=ProviderEnvironment(
            groq_configured=settings.is_configured(ProviderType.GROQ),
            deepseek_configured=settings.is_configured(ProviderType.DEEPSEEK),
        ),
    )
