"""
StudyMate Backend — Liveness and Health Routes
================================================

What:  GET /        plain-text liveness response (process is up)
       GET /health  JSON readiness report (MongoDB reachable?)
Who:   Called by uptime monitors, Docker health checks and load balancers.

Status levels for /health:
    - healthy:   MongoDB answered a ping (HTTP 200)
    - unhealthy: MongoDB unreachable or never connected (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app import __version__
from app.database import ping_store
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

LIVENESS_MESSAGE = "Study Partner Server is running successfully!"

# Initialized once when the module loads
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def root() -> str:
    return LIVENESS_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "MongoDB unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Ping MongoDB and report aggregate status.

    Reads the client from app.state directly rather than through
    get_database: an uninitialized store is a health result, not an error.
    """
    db_status = "connected"
    overall = "healthy"

    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        db_status = "disconnected"
        overall = "unhealthy"
    else:
        try:
            await ping_store(client)
        except Exception as e:
            db_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
