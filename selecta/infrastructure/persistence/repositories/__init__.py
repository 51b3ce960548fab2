"""Registration stores: relational (SqlRegistrationStore) and JSON-lines (JsonLinesRegistrationStore)."""

from selecta.infrastructure.persistence.repositories.jsonl_registration_store import (
    JsonLinesRegistrationStore,
)
from selecta.infrastructure.persistence.repositories.registration_repo import (
    SqlRegistrationStore,
)

__all__ = ["JsonLinesRegistrationStore", "SqlRegistrationStore"]
