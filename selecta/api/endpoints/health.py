"""Health check endpoint. Probes the registration store when the database backend is active."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from selecta.api.dependencies import get_app_settings, get_registration_service
from selecta.application.use_cases.registrations import RegistrationService
from selecta.core.config import Settings
from selecta.schemas.health import HealthResponse
from selecta.shared.utils import to_iso_z, utc_now

router = APIRouter()


@router.get(
    "",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    service: Annotated[RegistrationService, Depends(get_registration_service)],
) -> HealthResponse | JSONResponse:
    """Return status, server time and uptime; 503 when the database probe fails."""
    started_at = getattr(request.app.state, "started_at", None)
    health = HealthResponse(
        timestamp=to_iso_z(utc_now()),
        uptime=round(time.monotonic() - started_at, 3) if started_at is not None else 0.0,
    )
    if not settings.uses_database:
        return health

    if await service.is_store_healthy():
        health.database = "connected"
        return health
    health.status = "unhealthy"
    health.database = "disconnected"
    return JSONResponse(status_code=503, content=health.model_dump())
