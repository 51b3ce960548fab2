"""Persistence models: ORM entities."""

from selecta.infrastructure.persistence.models.registration import Registration

__all__ = ["Registration"]
