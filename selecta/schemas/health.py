"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /api/health. database is reported by the database backend only."""

    status: str = Field(default="healthy", description="healthy or unhealthy")
    timestamp: str = Field(..., description="Server time, ISO-8601 UTC")
    uptime: float = Field(..., description="Seconds since startup")
    database: str | None = Field(
        default=None, description="connected or disconnected"
    )
