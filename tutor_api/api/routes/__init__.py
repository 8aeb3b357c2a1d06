"""API routes."""

from tutor_api.api.routes.chat import router as chat_router
from tutor_api.api.routes.health import router as health_router

__all__ = ["chat_router", "health_router"]
