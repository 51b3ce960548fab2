"""DTOs for registration use cases (no dependency on ORM or HTTP)."""

import math
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Location:
    """Geolocation of the registered house."""

    lat: float
    lng: float
    address: str


@dataclass(frozen=True)
class RegistrationInput:
    """Validated and normalized form fields (customer_name already trimmed)."""

    homepass_id: str
    customer_name: str
    phone_number: str
    location: Location


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded document, fully read into memory."""

    field: str
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class RegistrationCreate:
    """Input for persisting a registration (write-model). Service builds this; store persists it."""

    homepass_id: str
    customer_name: str
    phone_number: str
    location: Location
    ktp_file_name: str | None
    house_photo_file_name: str | None
    submitted_at: datetime


@dataclass(frozen=True)
class RegistrationRecord:
    """Registration read-model. id, created_at and updated_at are only set by the database backend."""

    homepass_id: str
    customer_name: str
    phone_number: str
    location: Location
    ktp_file_name: str | None
    house_photo_file_name: str | None
    submitted_at: datetime
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class RegistrationPage:
    """One page of registrations. page_size is None when the backend returns everything."""

    items: list[RegistrationRecord]
    total: int
    page: int = 1
    page_size: int | None = None

    @property
    def total_pages(self) -> int:
        if not self.page_size:
            return 1 if self.total else 0
        return math.ceil(self.total / self.page_size)
