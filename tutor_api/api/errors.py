"""API error type and exception handlers rendering the error envelope."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tutor_api.core.logging import get_logger
from tutor_api.models.chat import ErrorResponse

logger = get_logger(__name__)

MESSAGE_REQUIRED = "Message is required"
INVALID_BODY = "Invalid request body"
PROVIDERS_UNAVAILABLE = "All AI models are currently unavailable"
PROVIDERS_UNAVAILABLE_DETAILS = "Please check your API keys"
INTERNAL_ERROR = "Internal server error"


class APIError(Exception):
    """Error raised by route handlers and rendered as an ``ErrorResponse``."""

    def __init__(self, status_code: int, error: str, details: str | None = None) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.status_code, exc.error, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "Rejected invalid request body",
        extra={"path": request.url.path, "errors": str(exc.errors())},
    )
    return error_response(400, INVALID_BODY)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-rendering handlers to an application."""
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
