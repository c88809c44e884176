"""
Tienda API: Root and Health Check Routes
========================================

What:  GET / (liveness banner) and GET /health (store connectivity).
Why:   Hosting platforms probe `/` to decide whether the service is up;
       `/health` additionally proves the store answers.

Status levels (/health):
    - healthy:   store answered SELECT 1 (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text

from tienda import __version__
from tienda.database import Database, get_database
from tienda.schemas.common import HealthResponse, RootResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get("/", response_model=RootResponse, summary="Liveness banner")
async def root() -> RootResponse:
    return RootResponse(ok=True, mensaje="API funcionando")


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    """
    Probe the store with a lightweight query.

    Runs on a pooled connection directly, outside the per-request session,
    so a failing probe leaves no session state behind.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
