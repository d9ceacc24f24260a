"""Request context middleware for observability.

Binds a request ID and the request path to structlog contextvars for the
duration of each request.
"""

from collections.abc import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from phonebook.observability.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request context to structlog contextvars.

    The request ID is taken from the X-Request-ID header when present,
    otherwise a fresh one is generated. It is echoed back on the response.
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request and bind logging context."""
        clear_contextvars()

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_contextvars(request_id=request_id, path=request.url.path)

        logger.info("request_started", method=request.method)

        response = await call_next(request)  # type: ignore[misc]
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "request_completed",
            method=request.method,
            status_code=response.status_code,
        )

        return response  # type: ignore[no-any-return]
