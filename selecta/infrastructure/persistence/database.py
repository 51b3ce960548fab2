"""Persistence: async engine factory and Base for SQLAlchemy ORM.

The engine is owned by SqlRegistrationStore (created in open(), disposed
in close()); nothing here holds process-wide connection state.
Schema for deployed databases is managed by Alembic migrations; the
store can also create it on open() for development and tests.
"""

import logging
from typing import Any

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def create_db_engine(
    url: URL | str,
    *,
    pool_size: int = 10,
    max_overflow: int = 0,
    echo: bool = False,
) -> AsyncEngine:
    """Create the async engine with a bounded connection pool.

    Pool sizing is skipped for SQLite, whose dialect manages its own pool.
    """
    url = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=3600,
        )
    logger.debug(
        "Creating database engine for %s",
        url.render_as_string(hide_password=True),
    )
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to engine (no expire on commit, explicit transactions)."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
