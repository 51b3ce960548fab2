"""Presentation-layer dependency injection (composition root).

The registration store and upload store are created and opened in the
application lifespan and kept on app.state; routes receive them (and the
RegistrationService built from them) through these dependencies.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from selecta.application.interfaces import IFileStore, IRegistrationStore
from selecta.application.use_cases.registrations import RegistrationService
from selecta.core.config import Settings, get_settings
from selecta.domain.exceptions import StoreUnavailableException


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with (falls back to the process settings)."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_registration_store(request: Request) -> IRegistrationStore:
    """Registration store opened at startup.

    Raises:
        StoreUnavailableException: Lifespan has not opened a store (or already closed it).
    """
    store = getattr(request.app.state, "registration_store", None)
    if store is None:
        raise StoreUnavailableException("Registration store is not initialized")
    return store


def get_file_store(request: Request) -> IFileStore:
    file_store = getattr(request.app.state, "file_store", None)
    if file_store is None:
        raise StoreUnavailableException("Upload store is not initialized")
    return file_store


def get_registration_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[IRegistrationStore, Depends(get_registration_store)],
    file_store: Annotated[IFileStore, Depends(get_file_store)],
) -> RegistrationService:
    """Build RegistrationService; the database backend requires the house photo and rejects duplicates."""
    return RegistrationService(
        store,
        file_store,
        require_house_photo=settings.uses_database,
        max_file_size=settings.max_file_size,
    )
