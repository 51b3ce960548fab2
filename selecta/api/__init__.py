"""HTTP API: routers, endpoints and dependencies."""

from selecta.api.router import build_api_router

__all__ = ["build_api_router"]
