"""Registration operations: submit (write pipeline) and query (list, lookup, health)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from selecta.application.dtos.registration import (
    RegistrationCreate,
    RegistrationPage,
    RegistrationRecord,
    UploadedFile,
)
from selecta.application.interfaces.repositories import IRegistrationStore
from selecta.application.interfaces.storage import IFileStore
from selecta.application.services.registration_validator import (
    validate_registration,
    validate_uploaded_file,
)
from selecta.core.constants import (
    DEFAULT_MAX_FILE_SIZE,
    HOUSE_PHOTO_FILE_PREFIX,
    HOUSE_PHOTO_MIME_TYPES,
    KTP_FILE_PREFIX,
    KTP_MIME_TYPES,
)
from selecta.domain.exceptions import (
    DuplicateRegistrationException,
    FileSaveException,
    InvalidLocationFormatException,
    MissingFieldsException,
    RegistrationNotFoundException,
    RegistrationReadException,
    RegistrationSaveException,
)
from selecta.infrastructure.exceptions import PersistenceException, StorageException
from selecta.shared.utils import generate_reference_id, utc_now_ms

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("homepassId", "customerName", "phoneNumber", "location")
KTP_FIELD = "ktpFile"
HOUSE_PHOTO_FIELD = "housePhotoFile"


@dataclass(frozen=True)
class RegistrationForm:
    """Raw multipart submission. Any value may be missing (None)."""

    homepass_id: str | None
    customer_name: str | None
    phone_number: str | None
    location: str | None
    ktp_file: UploadedFile | None
    house_photo_file: UploadedFile | None = None


@dataclass(frozen=True)
class RegistrationResult:
    """Accepted registration plus the display-only reference ID."""

    record: RegistrationRecord
    reference_id: str


class RegistrationService:
    """Validates, stores uploads and persists registrations; reads them back.

    require_house_photo makes the house photo mandatory (database backend);
    without it only the KTP upload is taken. Duplicate Homepass IDs are
    rejected only when the store supports lookups.
    """

    def __init__(
        self,
        store: IRegistrationStore,
        file_store: IFileStore,
        *,
        require_house_photo: bool = False,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        self.store = store
        self.file_store = file_store
        self.require_house_photo = require_house_photo
        self.max_file_size = max_file_size

    @property
    def required_fields(self) -> list[str]:
        fields = [*TEXT_FIELDS, KTP_FIELD]
        if self.require_house_photo:
            fields.append(HOUSE_PHOTO_FIELD)
        return fields

    def _check_required(self, form: RegistrationForm) -> UploadedFile:
        """Return the KTP upload once every required part is present."""
        present = [form.homepass_id, form.customer_name, form.phone_number, form.location]
        if self.require_house_photo:
            present.append(form.house_photo_file)
        if form.ktp_file is None or not all(present):
            raise MissingFieldsException(self.required_fields)
        return form.ktp_file

    @staticmethod
    def _parse_location(raw: str) -> object:
        try:
            return json.loads(raw)
        except ValueError as e:
            # JSONDecodeError, or an integer literal past the int digit limit.
            raise InvalidLocationFormatException() from e

    async def _store_upload(self, upload: UploadedFile, prefix: str) -> str:
        try:
            return await self.file_store.store(upload.content, upload.filename, prefix)
        except StorageException as e:
            logger.error("File save error (%s): %s", upload.field, e.message)
            raise FileSaveException() from e

    async def register(self, form: RegistrationForm) -> RegistrationResult:
        """Run the submission pipeline; the first failing step raises.

        Steps: required fields, location JSON, field validation, duplicate
        check (database flavour), per-file validation, file storage, record
        insert. Files already written are left in place when a later step
        fails.

        Raises:
            MissingFieldsException, InvalidLocationFormatException,
            RegistrationValidationException, DuplicateRegistrationException,
            FileValidationException, FileSaveException,
            RegistrationSaveException.
        """
        ktp_file = self._check_required(form)
        location = self._parse_location(form.location or "")
        data = validate_registration(
            {
                "homepassId": form.homepass_id,
                "customerName": form.customer_name,
                "phoneNumber": form.phone_number,
                "location": location,
            }
        )

        if self.store.supports_lookup:
            try:
                duplicate = await self.store.exists(data.homepass_id)
            except PersistenceException as e:
                logger.error("Duplicate check failed for %s: %s", data.homepass_id, e.message)
                raise RegistrationSaveException() from e
            if duplicate:
                raise DuplicateRegistrationException(data.homepass_id)

        validate_uploaded_file(ktp_file, KTP_MIME_TYPES, self.max_file_size)
        house_photo = form.house_photo_file if self.require_house_photo else None
        if house_photo is not None:
            validate_uploaded_file(house_photo, HOUSE_PHOTO_MIME_TYPES, self.max_file_size)

        ktp_file_name = await self._store_upload(ktp_file, KTP_FILE_PREFIX)
        house_photo_file_name = None
        if house_photo is not None:
            house_photo_file_name = await self._store_upload(
                house_photo, HOUSE_PHOTO_FILE_PREFIX
            )

        create = RegistrationCreate(
            homepass_id=data.homepass_id,
            customer_name=data.customer_name,
            phone_number=data.phone_number,
            location=data.location,
            ktp_file_name=ktp_file_name,
            house_photo_file_name=house_photo_file_name,
            submitted_at=utc_now_ms(),
        )
        try:
            record = await self.store.insert(create)
        except PersistenceException as e:
            logger.error("Data save error for %s: %s", create.homepass_id, e.message)
            raise RegistrationSaveException() from e

        logger.info("Registration accepted: homepass_id=%s", record.homepass_id)
        return RegistrationResult(record=record, reference_id=generate_reference_id())

    async def list_registrations(self, page: int, page_size: int) -> RegistrationPage:
        """Return a page of registrations (the file backend returns all of them)."""
        try:
            return await self.store.list(page, page_size)
        except PersistenceException as e:
            logger.error("Get registrations error: %s", e.message)
            raise RegistrationReadException(e.message) from e

    async def get_registration(self, homepass_id: str) -> RegistrationRecord:
        """Return the registration with this exact Homepass ID.

        Raises:
            RegistrationNotFoundException: No such registration.
            RegistrationReadException: The store failed.
        """
        try:
            record = await self.store.get_by_homepass_id(homepass_id)
        except PersistenceException as e:
            logger.error("Get registration error for %s: %s", homepass_id, e.message)
            raise RegistrationReadException(e.message) from e
        if record is None:
            raise RegistrationNotFoundException(homepass_id)
        return record

    async def is_store_healthy(self) -> bool:
        """Round-trip the store's connectivity probe."""
        try:
            await self.store.ping()
        except Exception as e:
            logger.warning("Store health probe failed: %s", e)
            return False
        return True
