"""
Health check endpoints.
"""

import time

import aiosqlite
from fastapi import APIRouter

from inventory_pos import __version__
from inventory_pos.application.dto.responses import HealthResponse
from inventory_pos.config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from inventory_pos.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000
        database = f"sqlite ({latency:.2f}ms)"
        status = "healthy"

    except (aiosqlite.Error, OSError) as e:
        logger.warning("database_health_failed", error=str(e))
        database = f"sqlite unavailable: {e}"
        status = "unhealthy"

    return HealthResponse(
        status=status,
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )
