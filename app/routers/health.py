# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter, Request
from pydantic import BaseModel

from app.dependencies import CacheDep, SettingsDep
from lib.mongodb_client import ping_mongodb
from lib.utils import to_iso8601, utc_now

APP_VERSION = "0.1.0"

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    cache: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=to_iso8601(utc_now()),
        version=APP_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request, settings: SettingsDep, cache: CacheDep):
    """
    Readiness check endpoint.

    Pings MongoDB and, when enabled, Redis. A disabled cache does not make
    the service degraded.
    """
    database_ok = await ping_mongodb(request.app.state.mongodb_client)
    checks = ChecksResponse(
        database="healthy" if database_ok else "unhealthy",
        cache="disabled",
    )

    cache_ok = True
    if settings.REDIS_ENABLED:
        cache_ok = await cache.ping()
        checks.cache = "healthy" if cache_ok else "unhealthy"

    return ReadinessResponse(
        status="ready" if database_ok and cache_ok else "degraded",
        checks=checks,
        timestamp=to_iso8601(utc_now()),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=to_iso8601(utc_now()),
    )
