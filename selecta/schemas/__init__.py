"""Pydantic request/response schemas for the HTTP API."""

from selecta.schemas.health import HealthResponse
from selecta.schemas.registration import (
    LocationSchema,
    RegisterResponse,
    RegistrationDetailResponse,
    RegistrationItem,
    RegistrationListResponse,
    RegistrationReceipt,
)

__all__ = [
    "HealthResponse",
    "LocationSchema",
    "RegisterResponse",
    "RegistrationDetailResponse",
    "RegistrationItem",
    "RegistrationListResponse",
    "RegistrationReceipt",
]
