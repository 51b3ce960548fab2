"""File-backed registration store: append-only JSON-lines log plus per-submission snapshots.

Layout under data_dir:
    registrations.jsonl                  one compact JSON object per line
    registration_<iso-timestamp>.json    pretty-printed copy of each submission

There is no uniqueness check and no pagination; list() returns the whole
log. Appends are not coordinated between processes.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import aiofiles
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from selecta.application.dtos.registration import (
    Location,
    RegistrationCreate,
    RegistrationPage,
    RegistrationRecord,
)
from selecta.core.constants import (
    REGISTRATION_LOG_FILENAME,
    REGISTRATION_SNAPSHOT_PREFIX,
)
from selecta.infrastructure.exceptions import (
    RegistrationDecodeError,
    RegistrationReadError,
    RegistrationWriteError,
    StoreOperationNotSupportedError,
)
from selecta.shared.utils import parse_iso, to_iso_z

logger = logging.getLogger(__name__)

_BACKEND = "file"


class LocationDocument(BaseModel):
    lat: float = Field(strict=True)
    lng: float = Field(strict=True)
    address: str


class RegistrationDocument(BaseModel):
    """One registration as written to the log and snapshots (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    homepass_id: str
    customer_name: str
    phone_number: str
    location: LocationDocument
    ktp_file_name: str | None = None
    house_photo_file_name: str | None = None
    submitted_at: datetime

    @field_validator("submitted_at", mode="before")
    @classmethod
    def submitted_at_utc(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_iso(v)
        return v

    @field_serializer("submitted_at")
    def serialize_submitted_at(self, v: datetime) -> str:
        return to_iso_z(v)

    @classmethod
    def from_registration(cls, r: RegistrationCreate | RegistrationRecord) -> RegistrationDocument:
        return cls(
            homepass_id=r.homepass_id,
            customer_name=r.customer_name,
            phone_number=r.phone_number,
            location=LocationDocument(
                lat=r.location.lat, lng=r.location.lng, address=r.location.address
            ),
            ktp_file_name=r.ktp_file_name,
            house_photo_file_name=r.house_photo_file_name,
            submitted_at=r.submitted_at,
        )

    def to_record(self) -> RegistrationRecord:
        return RegistrationRecord(
            homepass_id=self.homepass_id,
            customer_name=self.customer_name,
            phone_number=self.phone_number,
            location=Location(
                lat=self.location.lat,
                lng=self.location.lng,
                address=self.location.address,
            ),
            ktp_file_name=self.ktp_file_name,
            house_photo_file_name=self.house_photo_file_name,
            submitted_at=self.submitted_at,
        )


def registration_to_document(r: RegistrationCreate | RegistrationRecord) -> dict[str, Any]:
    """Serialize to the camelCase shape written to the log and snapshots."""
    return RegistrationDocument.from_registration(r).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )


def decode_log_line(line: str, source: str) -> RegistrationRecord:
    """Decode one log line into a RegistrationRecord.

    Raises:
        RegistrationDecodeError: If the line is not JSON of the registration shape.
    """
    try:
        return RegistrationDocument.model_validate_json(line).to_record()
    except ValidationError as e:
        raise RegistrationDecodeError(source, str(e)) from e


def snapshot_filename(r: RegistrationCreate) -> str:
    """registration_<timestamp>.json with ':' and '.' of the ISO time replaced by '-'."""
    stamp = to_iso_z(r.submitted_at).replace(":", "-").replace(".", "-")
    return f"{REGISTRATION_SNAPSHOT_PREFIX}{stamp}.json"


class JsonLinesRegistrationStore:
    """Registration store writing to the local data directory."""

    supports_lookup = False

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir).resolve()
        self.log_path = self.data_dir / REGISTRATION_LOG_FILENAME

    async def open(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True, mode=0o750)
        logger.info("Registration log at %s", self.log_path)

    async def close(self) -> None:
        """Nothing to release; files are opened per operation."""

    async def ping(self) -> None:
        """Always healthy."""

    async def exists(self, homepass_id: str) -> bool:
        raise StoreOperationNotSupportedError("exists", _BACKEND)

    async def get_by_homepass_id(self, homepass_id: str) -> RegistrationRecord | None:
        raise StoreOperationNotSupportedError("get_by_homepass_id", _BACKEND)

    async def insert(self, registration: RegistrationCreate) -> RegistrationRecord:
        """Write the snapshot file, then append one compact line to the log.

        Raises:
            RegistrationWriteError: On any I/O failure.
        """
        doc = registration_to_document(registration)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True, mode=0o750)
            snapshot_path = self.data_dir / snapshot_filename(registration)
            async with aiofiles.open(snapshot_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(doc, indent=2, ensure_ascii=False))
            line = json.dumps(doc, separators=(",", ":"), ensure_ascii=False) + "\n"
            async with aiofiles.open(self.log_path, "a", encoding="utf-8") as f:
                await f.write(line)
        except OSError as e:
            logger.error("Data save error for %s: %s", registration.homepass_id, e)
            raise RegistrationWriteError(registration.homepass_id, str(e)) from e
        return RegistrationRecord(
            homepass_id=registration.homepass_id,
            customer_name=registration.customer_name,
            phone_number=registration.phone_number,
            location=registration.location,
            ktp_file_name=registration.ktp_file_name,
            house_photo_file_name=registration.house_photo_file_name,
            submitted_at=registration.submitted_at,
        )

    async def list(self, page: int = 1, page_size: int = 0) -> RegistrationPage:
        """Return every logged registration in append order; pagination arguments are ignored.

        Raises:
            RegistrationDecodeError: A non-blank line is not a registration object.
            RegistrationReadError: The log could not be read.
        """
        if not self.log_path.exists():
            return RegistrationPage(items=[], total=0)
        try:
            async with aiofiles.open(self.log_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise RegistrationReadError("list", str(e)) from e
        items: list[RegistrationRecord] = []
        for lineno, line in enumerate(content.splitlines(), start=1):
            if not line.strip():
                continue
            source = f"{REGISTRATION_LOG_FILENAME}:{lineno}"
            items.append(decode_log_line(line, source))
        return RegistrationPage(items=items, total=len(items))
