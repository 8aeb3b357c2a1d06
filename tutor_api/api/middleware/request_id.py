"""Request ID middleware."""

import secrets
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from tutor_api.core.logging import get_logger, get_request_id, request_id_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    """Generate a request ID of the form ``req_<32 hex chars>``."""
    return f"req_{secrets.token_hex(16)}"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an ID and log its start and completion.

    The ID is taken from the incoming ``X-Request-ID`` header when present,
    stored on ``request.state`` and in a context variable for the log
    filter, and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        req_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.state.request_id = req_id
        token = request_id_context.set(req_id)

        start_time = time.perf_counter()
        logger.info(
            "Request started",
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise
        finally:
            request_id_context.reset(token)

        response.headers[REQUEST_ID_HEADER] = req_id
        logger.info(
            "Request completed",
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )

        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "generate_request_id",
    "get_request_id",
    "request_id_context",
]
