"""Health check and metrics endpoints."""

from typing import Literal

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from phonebook import __version__
from phonebook.api.dependencies import SettingsDep
from phonebook.api.models.health import ComponentHealth, HealthResponse
from phonebook.config import get_credentials
from phonebook.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


def _check_document_store(backend: str) -> ComponentHealth:
    """Check that the store can be built; no remote call is made."""
    if backend == "inmemory":
        return ComponentHealth(
            name="document_store",
            status="degraded",
            message="Using in-memory store; data is not persisted",
        )

    missing = get_credentials().missing
    if missing:
        return ComponentHealth(
            name="document_store",
            status="unhealthy",
            message=f"Missing configuration: {', '.join(missing)}",
        )
    return ComponentHealth(name="document_store", status="healthy")


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Check service health status."""
    logger.debug("health_check_request")

    components = [_check_document_store(settings.store.backend)]

    overall_status: Literal["healthy", "degraded", "unhealthy"]
    if any(c.status == "unhealthy" for c in components):
        overall_status = "unhealthy"
    elif any(c.status == "degraded" for c in components):
        overall_status = "degraded"
    else:
        overall_status = "healthy"

    logger.debug("health_check_completed", status=overall_status)

    return HealthResponse(
        status=overall_status,
        version=__version__,
        components=components,
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Get Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
