# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


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
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Reads one row from the contacts table; "degraded" if it can't be read.
    """
    from lib.supabase_client import SupabaseClient

    checks = ChecksResponse(database="unknown")

    try:
        client = SupabaseClient.get_client()
        client.table(settings.CONTACTS_TABLE).select("id").limit(1).execute()
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
