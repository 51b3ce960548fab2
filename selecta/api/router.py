"""API router aggregation.

Includes all endpoint modules under /api. The Homepass ID lookup route is
included only when the registration store supports lookups.
"""

from fastapi import APIRouter

from selecta.api.endpoints import health, registrations


def build_api_router(*, include_lookup: bool) -> APIRouter:
    """Return the /api router for the configured backend."""
    api_router = APIRouter()
    api_router.include_router(health.router, prefix="/health", tags=["health"])
    api_router.include_router(registrations.router, tags=["registrations"])
    if include_lookup:
        api_router.include_router(registrations.lookup_router, tags=["registrations"])
    return api_router
