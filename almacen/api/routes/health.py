"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from almacen import __version__
from almacen.application.dto.responses import HealthResponse, ProviderHealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


async def _probe_database() -> ProviderHealthResponse:
    from almacen.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.perf_counter()
        available = await pool.ping()
        return ProviderHealthResponse(
            name="sqlite",
            available=available,
            latency_ms=(time.perf_counter() - start) * 1000,
        )
    except Exception as e:
        return ProviderHealthResponse(name="sqlite", available=False, error=str(e))


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Service health with a database check.

    Reports "unhealthy" when the database cannot answer a trivial query.
    """
    db_status = await _probe_database()
    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
