"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from selecta.application.dtos.registration import (
        RegistrationCreate,
        RegistrationPage,
        RegistrationRecord,
    )


class IRegistrationStore(Protocol):
    """Protocol for registration persistence (relational table or JSON-lines log).

    supports_lookup is False for backends without exists/get_by_homepass_id;
    callers must not rely on uniqueness there.
    """

    supports_lookup: bool

    async def open(self) -> None:
        """Acquire resources (pool, directories). Failure here is fatal at startup."""

    async def close(self) -> None:
        """Release resources acquired by open()."""

    async def ping(self) -> None:
        """Round-trip a connectivity probe; raise on failure."""

    async def exists(self, homepass_id: str) -> bool:
        """Return True if a registration with this Homepass ID is stored."""

    async def insert(self, registration: RegistrationCreate) -> RegistrationRecord:
        """Persist a registration; return the stored read-model."""

    async def list(self, page: int, page_size: int) -> RegistrationPage:
        """Return one page of registrations with the overall total."""

    async def get_by_homepass_id(self, homepass_id: str) -> RegistrationRecord | None:
        """Return the registration with this exact Homepass ID, or None."""
