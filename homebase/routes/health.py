"""
Homebase Backend: Health Check Route
====================================

What:  GET /health for container health checks and load balancers.
How:   Runs SELECT 1 through the application's Database component.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200 so the body is readable;
                 probes should look at `status`)
"""

import time

from fastapi import APIRouter, Request

from homebase import __version__
from homebase.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    database = request.app.state.database
    connected = await database.ping()

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
