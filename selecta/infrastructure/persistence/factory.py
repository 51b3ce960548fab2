"""Registration store factory: creates the database or file backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from selecta.application.interfaces.repositories import IRegistrationStore
from selecta.core.constants import (
    REGISTRATION_BACKEND_DATABASE,
    REGISTRATION_BACKEND_FILE,
)

if TYPE_CHECKING:
    from selecta.core.config import Settings


class StoreFactory:
    """Factory for registration store instances based on configuration."""

    @staticmethod
    def create_registration_store(settings: "Settings | None" = None) -> IRegistrationStore:
        """Create (but do not open) the configured registration store.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            SqlRegistrationStore or JsonLinesRegistrationStore.

        Raises:
            ValueError: Unknown backend.
        """
        from selecta.core.config import get_settings

        s = settings or get_settings()
        backend = s.registration_backend.lower()

        if backend == REGISTRATION_BACKEND_DATABASE:
            from selecta.infrastructure.persistence.repositories.registration_repo import (
                SqlRegistrationStore,
            )

            return SqlRegistrationStore(
                s.sqlalchemy_url(),
                pool_size=s.db_pool_size,
                max_overflow=s.db_max_overflow,
                echo=s.database_echo,
            )
        if backend == REGISTRATION_BACKEND_FILE:
            from selecta.infrastructure.persistence.repositories.jsonl_registration_store import (
                JsonLinesRegistrationStore,
            )

            return JsonLinesRegistrationStore(s.data_dir)
        raise ValueError(
            f"Unknown registration backend: {backend}. Supported: 'database', 'file'"
        )
