"""
Yolomy Products Backend — Health Check Route
=============================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the database through the process-wide connection handle.

Status levels:
    - healthy:   database answered the ping
    - unhealthy: database unreachable (still HTTP 200, the body says why)
"""

import logging
import time

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from yolomy import __version__
from yolomy.database import DatabaseConnection, get_database
from yolomy.schemas.product import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    database: DatabaseConnection = Depends(get_database),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await run_in_threadpool(database.ping)
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
