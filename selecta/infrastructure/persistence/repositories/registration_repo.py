"""Relational registration store. Returns application DTOs."""

from __future__ import annotations

import logging

from sqlalchemy import func, select, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from selecta.application.dtos.registration import (
    Location,
    RegistrationCreate,
    RegistrationPage,
    RegistrationRecord,
)
from selecta.domain.exceptions import DuplicateRegistrationException
from selecta.infrastructure.exceptions import (
    RegistrationDecodeError,
    RegistrationReadError,
    RegistrationWriteError,
    StoreNotOpenError,
)
from selecta.infrastructure.persistence.database import (
    Base,
    create_db_engine,
    create_session_factory,
)
from selecta.infrastructure.persistence.models.registration import Registration
from selecta.shared.utils import ensure_utc

logger = logging.getLogger(__name__)


def _create_to_registration(r: RegistrationCreate) -> Registration:
    """Map RegistrationCreate (write-model) to ORM Registration for persistence."""
    return Registration(
        homepass_id=r.homepass_id,
        customer_name=r.customer_name,
        phone_number=r.phone_number,
        latitude=r.location.lat,
        longitude=r.location.lng,
        address=r.location.address,
        ktp_file_name=r.ktp_file_name,
        house_photo_file_name=r.house_photo_file_name,
        submitted_at=r.submitted_at,
    )


def _registration_to_record(r: Registration) -> RegistrationRecord:
    """Map ORM Registration to RegistrationRecord, rejecting rows with missing required values."""
    submitted_at = ensure_utc(r.submitted_at)
    if (
        submitted_at is None
        or r.latitude is None
        or r.longitude is None
        or not r.homepass_id
    ):
        raise RegistrationDecodeError(
            f"registrations.id={r.id}", "missing required column value"
        )
    return RegistrationRecord(
        id=r.id,
        homepass_id=r.homepass_id,
        customer_name=r.customer_name,
        phone_number=r.phone_number,
        location=Location(
            lat=float(r.latitude),
            lng=float(r.longitude),
            address=r.address,
        ),
        ktp_file_name=r.ktp_file_name,
        house_photo_file_name=r.house_photo_file_name,
        submitted_at=submitted_at,
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class SqlRegistrationStore:
    """Registration store backed by the `registrations` table.

    Owns its engine and connection pool: open() creates them (and the
    schema when create_schema is set) and probes connectivity; close()
    disposes the pool. Each operation runs in its own session.
    """

    supports_lookup = True

    def __init__(
        self,
        url: URL | str,
        *,
        pool_size: int = 10,
        max_overflow: int = 0,
        echo: bool = False,
        create_schema: bool = True,
    ) -> None:
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.echo = echo
        self.create_schema = create_schema
        self.engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    def _session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._sessions is None:
            raise StoreNotOpenError(type(self).__name__)
        return self._sessions

    async def open(self) -> None:
        """Create engine and session factory, create schema if enabled, then ping."""
        if self._sessions is not None:
            return
        self.engine = create_db_engine(
            self.url,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            echo=self.echo,
        )
        self._sessions = create_session_factory(self.engine)
        if self.create_schema:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        await self.ping()
        logger.info("Registration database ready")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self._sessions = None

    async def ping(self) -> None:
        """Run SELECT 1 on a pooled connection; raises on failure."""
        if self.engine is None:
            raise StoreNotOpenError(type(self).__name__)
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def exists(self, homepass_id: str) -> bool:
        try:
            async with self._session_factory()() as session:
                result = await session.execute(
                    select(Registration.id)
                    .where(Registration.homepass_id == homepass_id)
                    .limit(1)
                )
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise RegistrationReadError("exists", str(e)) from e

    async def insert(self, registration: RegistrationCreate) -> RegistrationRecord:
        """Insert one row; return it with id and server timestamps.

        A unique violation on homepass_id (two identical submissions racing
        past the existence check) raises DuplicateRegistrationException.

        Raises:
            DuplicateRegistrationException: homepass_id already stored.
            RegistrationWriteError: Any other database failure.
        """
        orm = _create_to_registration(registration)
        try:
            async with self._session_factory()() as session:
                async with session.begin():
                    session.add(orm)
                    await session.flush()
                    await session.refresh(orm)
        except IntegrityError as e:
            if await self.exists(registration.homepass_id):
                raise DuplicateRegistrationException(registration.homepass_id) from e
            raise RegistrationWriteError(registration.homepass_id, str(e.orig)) from e
        except SQLAlchemyError as e:
            raise RegistrationWriteError(registration.homepass_id, str(e)) from e
        return _registration_to_record(orm)

    async def list(self, page: int, page_size: int) -> RegistrationPage:
        """Return one page (newest submission first) plus the total row count."""
        offset = (page - 1) * page_size
        try:
            async with self._session_factory()() as session:
                result = await session.execute(
                    select(Registration)
                    .order_by(Registration.submitted_at.desc(), Registration.id.desc())
                    .offset(offset)
                    .limit(page_size)
                )
                rows = list(result.scalars().all())
                total = await session.scalar(select(func.count(Registration.id))) or 0
        except SQLAlchemyError as e:
            raise RegistrationReadError("list", str(e)) from e
        return RegistrationPage(
            items=[_registration_to_record(r) for r in rows],
            total=total,
            page=page,
            page_size=page_size,
        )

    async def get_by_homepass_id(self, homepass_id: str) -> RegistrationRecord | None:
        try:
            async with self._session_factory()() as session:
                result = await session.execute(
                    select(Registration).where(Registration.homepass_id == homepass_id)
                )
                row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RegistrationReadError("get_by_homepass_id", str(e)) from e
        return _registration_to_record(row) if row else None
