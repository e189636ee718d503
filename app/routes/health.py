# =============================================================================
# app/routes/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import ContextDep
from lib.database import DatabaseError
from lib.logger import format_timestamp

router = APIRouter(tags=["Health"])


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=HealthResponse)
async def health_check(ctx: ContextDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=format_timestamp(),
        environment=ctx.env.NODE_ENV,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(ctx: ContextDep):
    """
    Readiness check endpoint.

    Reports whether the database client can be created.
    """
    try:
        ctx.db.get_client()
        database = "healthy"
    except DatabaseError as e:
        ctx.logger.warn({"code": e.code, "error": e.message}, "Database not ready")
        database = f"unhealthy: {e.code}"

    return ReadinessResponse(
        status="ready" if database == "healthy" else "degraded",
        database=database,
        timestamp=format_timestamp(),
    )
