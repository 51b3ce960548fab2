"""Tests for registration field and upload validation."""

import pytest

from selecta.application.dtos.registration import Location, UploadedFile
from selecta.application.services.registration_validator import (
    validate_customer_name,
    validate_homepass_id,
    validate_location,
    validate_phone,
    validate_registration,
    validate_uploaded_file,
)
from selecta.core.constants import (
    DEFAULT_MAX_FILE_SIZE,
    HOUSE_PHOTO_MIME_TYPES,
    KTP_MIME_TYPES,
)
from selecta.domain.exceptions import (
    FileValidationException,
    RegistrationValidationException,
)


def _messages(issues: list[dict]) -> list[str]:
    return [i["message"] for i in issues]


class TestHomepassId:
    @pytest.mark.parametrize(
        "value",
        ["AB12-CD345-H00001", "0000-00000-H99999", "ZZZZ-ZZZZZ-H12345"],
    )
    def test_accepts_canonical_ids(self, value: str) -> None:
        assert validate_homepass_id(value) == []

    @pytest.mark.parametrize(
        "value",
        [
            "ab12-cd345-h00001",  # lowercase
            "AB12-CD345-X00001",  # wrong literal
            "AB12-CD345-H0001",  # 4 digits
            "AB12CD345H00001",  # no separators
            "AB12-CD345-H00001 ",  # trailing space
            "XAB12-CD345-H00001",  # extra leading char
            "",
        ],
    )
    def test_rejects_malformed_ids(self, value: str) -> None:
        issues = validate_homepass_id(value)
        assert _messages(issues) == ["Format Homepass ID tidak valid"]
        assert issues[0]["path"] == ["homepassId"]

    def test_non_string_is_type_issue(self) -> None:
        issues = validate_homepass_id(12345)
        assert issues[0]["code"] == "invalid_type"


class TestPhone:
    @pytest.mark.parametrize("value", ["0812345678", "081234567890", "0812345678901"])
    def test_accepts_10_to_13_digits(self, value: str) -> None:
        assert validate_phone(value) == []

    def test_nine_digits_too_short(self) -> None:
        assert _messages(validate_phone("081234567")) == ["Nomor handphone minimal 10 digit"]

    def test_fourteen_digits_too_long(self) -> None:
        assert _messages(validate_phone("08123456789012")) == [
            "Nomor handphone maksimal 13 digit"
        ]

    def test_letters_rejected(self) -> None:
        assert _messages(validate_phone("08123abc4567")) == [
            "Nomor handphone harus dimulai dengan 0 dan hanya berisi angka"
        ]

    def test_must_start_with_zero(self) -> None:
        assert _messages(validate_phone("6281234567890")) == [
            "Nomor handphone harus dimulai dengan 0 dan hanya berisi angka"
        ]

    def test_non_string_is_type_issue(self) -> None:
        issues = validate_phone(81234567890)
        assert issues == [
            {"path": ["phoneNumber"], "message": "phoneNumber harus berupa teks", "code": "invalid_type"}
        ]


class TestCustomerName:
    def test_trimmed_length_counts(self) -> None:
        assert _messages(validate_customer_name("  A  ")) == ["Nama minimal 2 karakter"]

    def test_bounds(self) -> None:
        assert validate_customer_name("Al") == []
        assert validate_customer_name("x" * 100) == []
        assert _messages(validate_customer_name("x" * 101)) == ["Nama maksimal 100 karakter"]


class TestLocation:
    def test_valid_location(self) -> None:
        assert validate_location({"lat": -6.2, "lng": 106, "address": "Jl. Merdeka"}) == []

    def test_empty_address(self) -> None:
        issues = validate_location({"lat": 1.0, "lng": 2.0, "address": ""})
        assert _messages(issues) == ["Alamat tidak boleh kosong"]
        assert issues[0]["path"] == ["location", "address"]

    def test_non_numeric_coordinates(self) -> None:
        issues = validate_location({"lat": "1.0", "lng": True, "address": "x"})
        assert [i["path"] for i in issues] == [["location", "lat"], ["location", "lng"]]

    def test_non_object(self) -> None:
        issues = validate_location([1, 2])
        assert issues[0]["path"] == ["location"]

    def test_integer_too_large_for_float(self) -> None:
        issues = validate_location({"lat": 10**400, "lng": 106.8, "address": "x"})
        assert issues == [
            {"path": ["location", "lat"], "message": "lat harus berupa angka", "code": "invalid_type"}
        ]

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_coordinates(self, value: float) -> None:
        issues = validate_location({"lat": -6.2, "lng": value, "address": "x"})
        assert [i["path"] for i in issues] == [["location", "lng"]]

    def test_coordinates_outside_geographic_range(self) -> None:
        issues = validate_location({"lat": 100.0, "lng": -180.5, "address": "x"})
        assert issues == [
            {
                "path": ["location", "lat"],
                "message": "Latitude harus antara -90 dan 90",
                "code": "too_big",
            },
            {
                "path": ["location", "lng"],
                "message": "Longitude harus antara -180 dan 180",
                "code": "too_small",
            },
        ]

    def test_range_edges_accepted(self) -> None:
        assert validate_location({"lat": -90, "lng": 180, "address": "x"}) == []

    def test_missing_keys(self) -> None:
        issues = validate_location({"address": "Jl. Merdeka"})
        assert _messages(issues) == ["lat harus berupa angka", "lng harus berupa angka"]


class TestValidateRegistration:
    def test_returns_normalized_input(self) -> None:
        result = validate_registration(
            {
                "homepassId": "AB12-CD345-H00001",
                "customerName": "  Siti Aminah ",
                "phoneNumber": "081234567890",
                "location": {"lat": -6, "lng": 106.5, "address": "Jl. Kebon Jeruk"},
            }
        )
        assert result.customer_name == "Siti Aminah"
        assert result.location == Location(lat=-6.0, lng=106.5, address="Jl. Kebon Jeruk")
        assert isinstance(result.location.lat, float)

    def test_collects_issues_from_every_field(self) -> None:
        with pytest.raises(RegistrationValidationException) as exc_info:
            validate_registration(
                {
                    "homepassId": "bad",
                    "customerName": "A",
                    "phoneNumber": "123",
                    "location": {"lat": 1, "lng": 2, "address": ""},
                }
            )
        paths = {tuple(i["path"]) for i in exc_info.value.issues}
        assert ("homepassId",) in paths
        assert ("customerName",) in paths
        assert ("phoneNumber",) in paths
        assert ("location", "address") in paths
        assert exc_info.value.error_code == "VALIDATION_ERROR"


class TestValidateUploadedFile:
    def _file(self, content_type: str, size: int, field: str = "ktpFile") -> UploadedFile:
        return UploadedFile(
            field=field, filename="doc", content_type=content_type, content=b"x" * size
        )

    @pytest.mark.parametrize(
        "content_type", ["image/jpeg", "image/jpg", "image/png", "application/pdf"]
    )
    def test_ktp_accepts_images_and_pdf(self, content_type: str) -> None:
        validate_uploaded_file(self._file(content_type, 10), KTP_MIME_TYPES, DEFAULT_MAX_FILE_SIZE)

    def test_ktp_rejects_other_types(self) -> None:
        with pytest.raises(FileValidationException) as exc_info:
            validate_uploaded_file(self._file("image/gif", 10), KTP_MIME_TYPES, DEFAULT_MAX_FILE_SIZE)
        assert exc_info.value.details == {
            "field": "ktpFile",
            "message": "Format file tidak valid. Gunakan JPG, PNG, atau PDF.",
        }

    def test_house_photo_rejects_pdf(self) -> None:
        with pytest.raises(FileValidationException) as exc_info:
            validate_uploaded_file(
                self._file("application/pdf", 10, field="housePhotoFile"),
                HOUSE_PHOTO_MIME_TYPES,
                DEFAULT_MAX_FILE_SIZE,
            )
        assert exc_info.value.field == "housePhotoFile"
        assert exc_info.value.details["message"] == "Format file tidak valid. Gunakan JPG atau PNG."

    def test_exactly_at_ceiling_is_accepted(self) -> None:
        validate_uploaded_file(
            self._file("image/png", DEFAULT_MAX_FILE_SIZE), KTP_MIME_TYPES, DEFAULT_MAX_FILE_SIZE
        )

    def test_one_byte_over_ceiling_is_rejected(self) -> None:
        with pytest.raises(FileValidationException) as exc_info:
            validate_uploaded_file(
                self._file("image/png", DEFAULT_MAX_FILE_SIZE + 1),
                KTP_MIME_TYPES,
                DEFAULT_MAX_FILE_SIZE,
            )
        assert exc_info.value.details["message"] == "Ukuran file terlalu besar. Maksimal 5MB."
