"""API route registration."""

from fastapi import FastAPI

from phonebook.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, *, metrics_enabled: bool = True) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        metrics_enabled: Whether to expose /metrics
    """
    from phonebook.api.routes.health import metrics_router
    from phonebook.api.routes.health import router as health_router
    from phonebook.api.routes.phones import router as phones_router

    app.include_router(phones_router, tags=["Phones"])
    app.include_router(health_router, tags=["Health"])
    if metrics_enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered", metrics_enabled=metrics_enabled)
