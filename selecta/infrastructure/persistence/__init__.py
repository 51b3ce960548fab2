"""Persistence: ORM models, registration stores and the store factory.

The database backend needs SQLAlchemy with an async driver (asyncpg for
PostgreSQL); the file backend only needs aiofiles.
"""

from selecta.infrastructure.persistence.factory import StoreFactory

__all__ = ["StoreFactory"]
