"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See selecta.core.lifespan and
selecta.core.exception_handlers.

Settings are resolved inside create_app() so that tests can pass their
own Settings (or set env and clear the get_settings cache) first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from selecta.api import build_api_router
from selecta.core.config import Settings, get_settings
from selecta.core.exception_handlers import register_exception_handlers
from selecta.core.lifespan import create_lifespan
from selecta.middleware import AccessLogMiddleware, RequestIDMiddleware
from selecta.shared.telemetry import TelemetryConfig, set_telemetry


def _endpoint_index(settings: Settings) -> dict[str, str]:
    endpoints = {
        "register": "POST /api/register",
        "registrations": "GET /api/registrations",
        "health": "GET /api/health",
    }
    if settings.uses_database:
        endpoints["registration"] = "GET /api/registrations/:homepassId"
    return endpoints


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        settings: Settings to build with; defaults to get_settings().
    """
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: access log → request ID → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(AccessLogMiddleware)

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        set_telemetry(telemetry)
        # Instrumentation adds middleware, so it must happen before startup.
        telemetry.instrument_fastapi(app)

    app.include_router(
        build_api_router(include_lookup=settings.uses_database), prefix="/api"
    )

    @app.get("/")
    def root() -> dict:
        """Service banner listing the available endpoints."""
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "endpoints": _endpoint_index(settings),
        }

    return app


app = create_app()
