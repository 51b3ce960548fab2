"""Registration API schemas (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from selecta.application.dtos.registration import RegistrationRecord
from selecta.shared.utils import to_iso_z


class CamelModel(BaseModel):
    """Base for response bodies: snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationSchema(CamelModel):
    lat: float
    lng: float
    address: str


class RegistrationItem(CamelModel):
    """Stored registration as returned by the list and lookup endpoints.

    id, createdAt and updatedAt are present only for the database backend.
    """

    id: int | None = None
    homepass_id: str
    customer_name: str
    phone_number: str
    location: LocationSchema
    ktp_file_name: str | None = None
    house_photo_file_name: str | None = None
    submitted_at: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("submitted_at", "created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime | None) -> str | None:
        return to_iso_z(value) if value is not None else None

    @classmethod
    def from_record(cls, record: RegistrationRecord) -> "RegistrationItem":
        return cls(
            id=record.id,
            homepass_id=record.homepass_id,
            customer_name=record.customer_name,
            phone_number=record.phone_number,
            location=LocationSchema(
                lat=record.location.lat,
                lng=record.location.lng,
                address=record.location.address,
            ),
            ktp_file_name=record.ktp_file_name,
            house_photo_file_name=record.house_photo_file_name,
            submitted_at=record.submitted_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class RegistrationReceipt(CamelModel):
    """data of a successful POST /api/register."""

    homepass_id: str
    customer_name: str
    submitted_at: datetime
    reference_id: str
    ktp_file_name: str | None = None
    house_photo_file_name: str | None = None

    @field_serializer("submitted_at")
    def _serialize_submitted_at(self, value: datetime) -> str:
        return to_iso_z(value)


class RegisterResponse(CamelModel):
    success: bool = True
    message: str
    data: RegistrationReceipt


class RegistrationListResponse(CamelModel):
    """Listing body. total, page and totalPages are set only when paginated."""

    success: bool = True
    data: list[RegistrationItem] = Field(default_factory=list)
    count: int
    total: int | None = None
    page: int | None = None
    total_pages: int | None = None


class RegistrationDetailResponse(CamelModel):
    success: bool = True
    data: RegistrationItem
