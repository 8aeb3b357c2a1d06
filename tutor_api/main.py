"""Main FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tutor_api.agents.tutor import TutorAgent
from tutor_api.api.errors import register_exception_handlers
from tutor_api.api.middleware import RequestIDMiddleware
from tutor_api.api.routes import chat_router, health_router
from tutor_api.core.config import Settings, get_settings
from tutor_api.core.logging import get_logger, setup_logging
from tutor_api.models.providers import ProviderType
from tutor_api.services.providers import ProviderManager

settings = get_settings()
setup_logging(settings)
logger = get_logger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Provider configuration is resolved once here and handed to the tutor
    agent stored on ``app.state``.

    Args:
        app_settings: Settings to use instead of the cached process settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting AI tutor backend",
            extra={
                "version": app_settings.version,
                "port": app_settings.port,
                "groq_configured": app_settings.is_configured(ProviderType.GROQ),
                "deepseek_configured": app_settings.is_configured(ProviderType.DEEPSEEK),
            },
        )
        yield
        logger.info("Shutting down AI tutor backend")

    app = FastAPI(
        title=app_settings.app_name,
        description="Chemistry tutoring chat proxy with provider fallback",
        version=app_settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        debug=app_settings.debug,
    )

    # Request ID middleware goes first so every request is tagged
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(chat_router)

    if app_settings is not settings:
        app.dependency_overrides[get_settings] = lambda: app_settings

    provider_manager = ProviderManager.from_configs(app_settings.provider_configs())
    app.state.tutor_agent = TutorAgent(provider_manager)

    logger.info(
        "FastAPI application created successfully",
        extra={"providers": [p.value for p in provider_manager.get_provider_chain()]},
    )

    return app


app = create_app()


def run() -> None:
    """Start the HTTP server."""
    import uvicorn

    uvicorn.run(
        "tutor_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
