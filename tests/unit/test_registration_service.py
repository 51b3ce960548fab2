"""Tests for RegistrationService.register pipeline ordering and error translation."""

import json

import pytest

from selecta.application.dtos.registration import (
    RegistrationCreate,
    RegistrationPage,
    RegistrationRecord,
    UploadedFile,
)
from selecta.application.use_cases.registrations import (
    RegistrationForm,
    RegistrationService,
)
from selecta.domain.exceptions import (
    DuplicateRegistrationException,
    FileSaveException,
    FileValidationException,
    InvalidLocationFormatException,
    MissingFieldsException,
    RegistrationNotFoundException,
    RegistrationReadException,
    RegistrationSaveException,
    RegistrationValidationException,
)
from selecta.infrastructure.exceptions import (
    RegistrationReadError,
    RegistrationWriteError,
    StorageUploadError,
)


class FakeStore:
    """In-memory registration store."""

    def __init__(self, supports_lookup: bool = True, fail_insert: bool = False) -> None:
        self.supports_lookup = supports_lookup
        self.fail_insert = fail_insert
        self.fail_reads = False
        self.rows: list[RegistrationCreate] = []

    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def ping(self) -> None:
        if self.fail_reads:
            raise ConnectionError("down")

    async def exists(self, homepass_id: str) -> bool:
        return any(r.homepass_id == homepass_id for r in self.rows)

    async def insert(self, registration: RegistrationCreate) -> RegistrationRecord:
        if self.fail_insert:
            raise RegistrationWriteError(registration.homepass_id, "disk full")
        self.rows.append(registration)
        return RegistrationRecord(
            id=len(self.rows),
            homepass_id=registration.homepass_id,
            customer_name=registration.customer_name,
            phone_number=registration.phone_number,
            location=registration.location,
            ktp_file_name=registration.ktp_file_name,
            house_photo_file_name=registration.house_photo_file_name,
            submitted_at=registration.submitted_at,
        )

    async def list(self, page: int, page_size: int) -> RegistrationPage:
        if self.fail_reads:
            raise RegistrationReadError("list", "boom")
        return RegistrationPage(items=[], total=0, page=page, page_size=page_size)

    async def get_by_homepass_id(self, homepass_id: str) -> RegistrationRecord | None:
        if self.fail_reads:
            raise RegistrationReadError("get_by_homepass_id", "boom")
        return None


class FakeFileStore:
    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.saved: list[str] = []

    async def store(self, file_bytes: bytes, original_name: str, prefix: str) -> str:
        if prefix == self.fail_on:
            raise StorageUploadError(original_name, "read-only file system")
        name = f"{prefix}_{len(self.saved)}.bin"
        self.saved.append(name)
        return name


def _upload(field: str, content_type: str = "image/jpeg", size: int = 16) -> UploadedFile:
    return UploadedFile(field=field, filename="f.jpg", content_type=content_type, content=b"x" * size)


def _form(**overrides: object) -> RegistrationForm:
    values: dict[str, object] = {
        "homepass_id": "AB12-CD345-H00001",
        "customer_name": "Budi Santoso",
        "phone_number": "081234567890",
        "location": json.dumps({"lat": -6.2, "lng": 106.8, "address": "Jl. Sudirman"}),
        "ktp_file": _upload("ktpFile"),
        "house_photo_file": _upload("housePhotoFile"),
    }
    values.update(overrides)
    return RegistrationForm(**values)


def _service(
    store: FakeStore | None = None,
    files: FakeFileStore | None = None,
    *,
    database: bool = True,
) -> RegistrationService:
    return RegistrationService(
        store or FakeStore(supports_lookup=database),
        files or FakeFileStore(),
        require_house_photo=database,
    )


class TestRegisterPipeline:
    async def test_success_stores_both_files_and_record(self) -> None:
        store, files = FakeStore(), FakeFileStore()
        result = await _service(store, files).register(_form())

        assert files.saved == ["ktp_0.bin", "house_1.bin"]
        assert result.record.ktp_file_name == "ktp_0.bin"
        assert result.record.house_photo_file_name == "house_1.bin"
        assert result.reference_id.startswith("NSF-")
        assert len(store.rows) == 1

    async def test_file_backend_ignores_house_photo(self) -> None:
        store, files = FakeStore(supports_lookup=False), FakeFileStore()
        result = await _service(store, files, database=False).register(
            _form(house_photo_file=None)
        )
        assert files.saved == ["ktp_0.bin"]
        assert result.record.house_photo_file_name is None

    @pytest.mark.parametrize(
        "field", ["homepass_id", "customer_name", "phone_number", "location", "ktp_file"]
    )
    async def test_missing_field(self, field: str) -> None:
        with pytest.raises(MissingFieldsException):
            await _service().register(_form(**{field: None}))

    async def test_empty_string_counts_as_missing(self) -> None:
        with pytest.raises(MissingFieldsException):
            await _service().register(_form(customer_name=""))

    async def test_house_photo_required_for_database_backend(self) -> None:
        with pytest.raises(MissingFieldsException) as exc_info:
            await _service().register(_form(house_photo_file=None))
        assert "housePhotoFile" in exc_info.value.details

    async def test_location_must_be_json(self) -> None:
        with pytest.raises(InvalidLocationFormatException):
            await _service().register(_form(location="{lat: 1"))

    async def test_oversized_integer_literal_is_a_location_format_error(self) -> None:
        raw = '{"lat": 1' + "0" * 5000 + ', "lng": 1, "address": "x"}'
        with pytest.raises(InvalidLocationFormatException):
            await _service().register(_form(location=raw))

    async def test_coordinate_overflow_is_a_validation_error(self) -> None:
        raw = '{"lat": 1' + "0" * 400 + ', "lng": 1, "address": "x"}'
        files = FakeFileStore()
        with pytest.raises(RegistrationValidationException) as exc_info:
            await _service(files=files).register(_form(location=raw))
        assert exc_info.value.issues[0]["path"] == ["location", "lat"]
        assert files.saved == []

    async def test_validation_runs_before_any_file_is_saved(self) -> None:
        files = FakeFileStore()
        with pytest.raises(RegistrationValidationException):
            await _service(files=files).register(_form(phone_number="123"))
        assert files.saved == []

    async def test_duplicate_rejected_before_files_are_saved(self) -> None:
        store, files = FakeStore(), FakeFileStore()
        service = _service(store, files)
        await service.register(_form())
        files.saved.clear()

        with pytest.raises(DuplicateRegistrationException):
            await service.register(_form())
        assert files.saved == []

    async def test_file_backend_accepts_repeated_homepass_id(self) -> None:
        store = FakeStore(supports_lookup=False)
        service = _service(store, database=False)
        await service.register(_form())
        await service.register(_form())
        assert len(store.rows) == 2

    async def test_bad_house_photo_type_names_field(self) -> None:
        with pytest.raises(FileValidationException) as exc_info:
            await _service().register(
                _form(house_photo_file=_upload("housePhotoFile", "application/pdf"))
            )
        assert exc_info.value.field == "housePhotoFile"

    async def test_second_file_failure_keeps_first(self) -> None:
        """The KTP already written is not rolled back when the house photo fails."""
        files = FakeFileStore(fail_on="house")
        with pytest.raises(FileSaveException):
            await _service(files=files).register(_form())
        assert files.saved == ["ktp_0.bin"]

    async def test_persist_failure(self) -> None:
        with pytest.raises(RegistrationSaveException):
            await _service(FakeStore(fail_insert=True)).register(_form())


class TestReads:
    async def test_list_read_failure(self) -> None:
        store = FakeStore()
        store.fail_reads = True
        with pytest.raises(RegistrationReadException):
            await _service(store).list_registrations(1, 50)

    async def test_get_unknown(self) -> None:
        with pytest.raises(RegistrationNotFoundException):
            await _service().get_registration("UNKNOWN-ID")

    async def test_store_health_check(self) -> None:
        store = FakeStore()
        service = _service(store)
        assert await service.is_store_healthy() is True
        store.fail_reads = True
        assert await service.is_store_healthy() is False
