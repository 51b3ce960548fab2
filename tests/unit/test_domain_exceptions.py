"""Tests for domain exceptions (error_code, message, details, envelope)."""

from selecta.domain.exceptions import (
    DuplicateRegistrationException,
    FileSaveException,
    FileValidationException,
    InvalidLocationFormatException,
    MissingFieldsException,
    RegistrationNotFoundException,
    RegistrationSaveException,
    RegistrationValidationException,
    SelectaException,
)
from selecta.infrastructure.exceptions import (
    PersistenceException,
    RegistrationWriteError,
    StoreOperationNotSupportedError,
)


def test_selecta_exception_default_error_code() -> None:
    """Base SelectaException uses class name as error_code when not provided."""
    exc = SelectaException("Something failed")
    assert exc.error_code == "SelectaException"
    assert exc.to_dict() == {"success": False, "error": "Something failed"}


def test_envelope_includes_details_when_set() -> None:
    exc = SelectaException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"success": False, "error": "Oops", "details": {"key": "value"}}


def test_missing_fields_lists_required() -> None:
    exc = MissingFieldsException(["homepassId", "ktpFile"])
    assert exc.error_code == "MISSING_FIELDS"
    assert exc.to_dict() == {
        "success": False,
        "error": "Missing required fields",
        "details": "All fields (homepassId, ktpFile) are required",
    }


def test_validation_exception_keeps_issues() -> None:
    issues = [{"path": ["phoneNumber"], "message": "x", "code": "too_small"}]
    exc = RegistrationValidationException(issues)
    assert exc.issues == issues
    assert exc.details == issues


def test_file_validation_names_field() -> None:
    exc = FileValidationException("ktpFile", "too big")
    assert exc.field == "ktpFile"
    assert exc.details == {"field": "ktpFile", "message": "too big"}


def test_error_codes() -> None:
    assert InvalidLocationFormatException().error_code == "INVALID_LOCATION_FORMAT"
    assert DuplicateRegistrationException("A").error_code == "DUPLICATE_REGISTRATION"
    assert RegistrationNotFoundException("A").message == "Registration not found"
    assert FileSaveException().message == "Failed to save files"
    assert RegistrationSaveException().message == "Failed to save registration data"


def test_persistence_errors_share_base() -> None:
    assert isinstance(RegistrationWriteError("A", "io"), PersistenceException)
    exc = StoreOperationNotSupportedError("exists", "file")
    assert isinstance(exc, PersistenceException)
    assert exc.details == {"operation": "exists", "backend": "file"}
