"""Domain exceptions for the Selecta registration service.

Defines domain-level exceptions that represent rejected submissions and
failed pipeline steps. These exceptions are independent of infrastructure
concerns. Presentation layer maps them to HTTP responses in exception
handlers using error_code.
"""

from typing import Any


class SelectaException(Exception):
    """Base exception for all Selecta application errors.

    Attributes:
        message: Short human-readable error (rendered as "error").
        error_code: Machine-readable error code, used for status mapping.
        details: Additional error context (string, dict or list of issues).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Short human-readable error.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the uniform error envelope."""
        body: dict[str, Any] = {"success": False, "error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingFieldsException(SelectaException):
    """Raised when a mandatory form field or upload is absent."""

    def __init__(self, required: list[str]) -> None:
        super().__init__(
            "Missing required fields",
            "MISSING_FIELDS",
            f"All fields ({', '.join(required)}) are required",
        )


class InvalidLocationFormatException(SelectaException):
    """Raised when the location form field is not valid JSON."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid location format",
            "INVALID_LOCATION_FORMAT",
            "Location must be valid JSON",
        )


class RegistrationValidationException(SelectaException):
    """Raised when one or more registration fields fail validation.

    details carries every issue found, not only the first one.
    """

    def __init__(self, issues: list[dict[str, Any]]) -> None:
        """Initialize with the collected field issues.

        Args:
            issues: Issues as {"path": [...], "message": str, "code": str}.
        """
        self.issues = issues
        super().__init__("Validation failed", "VALIDATION_ERROR", issues)


class FileValidationException(SelectaException):
    """Raised when an uploaded file has a disallowed type or is too large."""

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with the offending form field and the reason.

        Args:
            field: Form field name of the upload (e.g. 'ktpFile').
            reason: Human-readable reason.
        """
        self.field = field
        super().__init__(
            "File validation failed",
            "FILE_VALIDATION_ERROR",
            {"field": field, "message": reason},
        )


class DuplicateRegistrationException(SelectaException):
    """Raised when a registration with the same Homepass ID already exists."""

    def __init__(self, homepass_id: str) -> None:
        super().__init__(
            "Duplicate registration",
            "DUPLICATE_REGISTRATION",
            f"Homepass ID {homepass_id} sudah terdaftar",
        )


class RegistrationNotFoundException(SelectaException):
    """Raised when a Homepass ID lookup finds nothing."""

    def __init__(self, homepass_id: str) -> None:
        super().__init__(
            "Registration not found",
            "REGISTRATION_NOT_FOUND",
            f"No registration for Homepass ID {homepass_id}",
        )


class FileSaveException(SelectaException):
    """Raised when an uploaded file could not be written."""

    def __init__(self) -> None:
        super().__init__(
            "Failed to save files",
            "FILE_SAVE_ERROR",
            "Internal server error during file upload",
        )


class RegistrationSaveException(SelectaException):
    """Raised when the registration record could not be persisted."""

    def __init__(self) -> None:
        super().__init__(
            "Failed to save registration data",
            "REGISTRATION_SAVE_ERROR",
            "Internal server error during data storage",
        )


class RegistrationReadException(SelectaException):
    """Raised when stored registrations could not be read back."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Failed to retrieve registrations",
            "REGISTRATION_READ_ERROR",
            reason,
        )


class StoreUnavailableException(SelectaException):
    """Raised when the persistence store cannot be reached."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Registration store unavailable",
            "SERVICE_UNAVAILABLE",
            reason,
        )
