"""
Todo API Backend: Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the active storage backend (SELECT 1, or a container read for
       Cosmos DB) and reports the result.

Status levels:
    - healthy:   storage reachable (HTTP 200)
    - unhealthy: storage unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from todoapi import __version__
from todoapi.config import settings
from todoapi.schemas.todo import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Storage unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    storage = getattr(request.app.state, "storage", None)
    storage_ok = storage is not None and await storage.ping()

    if not storage_ok:
        logger.warning("Health check: storage unreachable")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if storage_ok else "unhealthy",
        version=__version__,
        provider=settings.database_provider,
        storage="connected" if storage_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
