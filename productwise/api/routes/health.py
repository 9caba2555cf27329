"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from productwise import __version__
from productwise.application.dto.responses import HealthResponse, ProviderHealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


def _uptime() -> float:
    return time.monotonic() - _started_at


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service liveness and uptime."""
    return HealthResponse(status="healthy", version=__version__, uptime_seconds=_uptime())


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database readiness.

    Borrows a pooled connection and reads the applied schema version, so a
    database that was never migrated reports as unhealthy.
    """
    from productwise.infrastructure.storage.sqlite import get_pool

    started = time.perf_counter()
    try:
        pool = await get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT MAX(version) FROM schema_migrations")
            row = await cursor.fetchone()
        database = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
            schema_version=row[0] if row else None,
        )
    except Exception as e:
        database = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if database.available else "unhealthy",
        version=__version__,
        uptime_seconds=_uptime(),
        database=database,
    )
