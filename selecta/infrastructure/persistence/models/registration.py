"""Registration ORM model. One row per accepted submission; never updated by the API."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from selecta.infrastructure.persistence.database import Base


class Registration(Base):
    """Registration entity. Table: registrations. homepass_id is unique.

    created_at/updated_at are filled by the database server.
    """

    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    homepass_id: Mapped[str] = mapped_column(String(17), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(13), nullable=False)
    latitude: Mapped[float] = mapped_column(
        Numeric(10, 8, asdecimal=False), nullable=False
    )
    longitude: Mapped[float] = mapped_column(
        Numeric(11, 8, asdecimal=False), nullable=False
    )
    address: Mapped[str] = mapped_column(Text, nullable=False)
    ktp_file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    house_photo_file_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ux_registrations_homepass_id", "homepass_id", unique=True),
        Index("ix_registrations_submitted_at", "submitted_at"),
    )
