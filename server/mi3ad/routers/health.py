"""Health check router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.database import utcnow
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import HealthResponse, HealthStatus
from ..workers.manager import worker_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/health", tags=["health"])


def overall_status(workers: dict[str, bool]) -> HealthStatus:
    """A partly running worker set means some simulation has stopped."""
    if settings.workers_enabled and any(workers.values()) and not all(workers.values()):
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


@router.post("/ping", response_model=HealthResponse)
async def health_ping() -> JSONResponse:
    """
    Health check endpoint.

    Returns service status, server time and the state of each simulation worker.
    """
    workers = worker_manager.get_worker_status()
    response_data = HealthResponse(
        status=overall_status(workers),
        service=SERVICE_NAME,
        timestamp=utcnow(),
        version=SERVICE_VERSION,
        workers_enabled=settings.workers_enabled,
        workers=workers,
    )

    logger.debug("Health check requested", extra={"status": response_data.status.value})

    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )
