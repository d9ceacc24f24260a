"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from phonebook import __version__
from phonebook.api.dependencies import get_settings, reset_dependencies
from phonebook.api.exceptions import public_message, status_for
from phonebook.api.models.errors import ErrorCode
from phonebook.api.models.phones import MutationResponse
from phonebook.api.routes import register_routes
from phonebook.config.settings import Settings
from phonebook.documents.exceptions import PhonebookError, ValidationError
from phonebook.observability.logging import get_logger, setup_logging
from phonebook.observability.middleware import RequestContextMiddleware
from phonebook.observability.tracing import setup_tracing

logger = get_logger(__name__)


def _error_response(
    status_code: int,
    message: str,
    code: ErrorCode,
    invalid: list[str] | None = None,
) -> JSONResponse:
    body = MutationResponse(success=False, message=message, code=code, invalid=invalid)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Close the shared store client on shutdown."""
    yield
    await reset_dependencies()
    logger.info("app_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from config/ and the environment
            when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="Phonebook API",
        description="Named phone lists stored as JSON documents in a GitHub repository",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)
    register_routes(app, metrics_enabled=settings.observability.metrics.enabled)

    tracing = settings.observability.tracing
    if tracing.enabled:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        setup_tracing(service_name=tracing.service_name, otlp_endpoint=tracing.otlp_endpoint)
        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        debug=settings.debug,
        store_backend=settings.store.backend,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Every failure is rendered in the same shape as mutation responses:
    ``{"success": false, "message": ..., "code": ...}``.
    """

    @app.exception_handler(PhonebookError)
    async def phonebook_error_handler(request: Request, exc: PhonebookError) -> JSONResponse:
        """Handle domain errors escaping a route."""
        status_code, code = status_for(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "api_error",
            error_code=code.value,
            error_type=type(exc).__name__,
            message=exc.message,
            path=request.url.path,
        )

        invalid = exc.invalid if isinstance(exc, ValidationError) else None
        return _error_response(status_code, public_message(exc), code, invalid)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed request bodies."""
        logger.warning("request_validation_error", errors=exc.errors(), path=request.url.path)
        return _error_response(400, "Request validation failed", ErrorCode.INVALID_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle routing errors such as 404 and 405."""
        logger.warning("http_error", status_code=exc.status_code, path=request.url.path)
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return _error_response(exc.status_code, message, ErrorCode.INVALID_REQUEST)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(500, "Internal server error", ErrorCode.INTERNAL_ERROR)

    logger.debug("exception_handlers_registered")


def main() -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "phonebook.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
    )
