"""Infrastructure exceptions for file storage and persistence backends.

They extend SelectaException so unhandled ones still render as the
uniform JSON envelope; the registration service translates them into the
pipeline-step exceptions (file save failed, data save failed, ...).
"""

from selecta.domain.exceptions import SelectaException


class StorageException(SelectaException):
    """Base exception for upload storage operations."""


class StorageUploadError(StorageException):
    """Writing an uploaded file failed."""

    def __init__(self, file_name: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_name}",
            "STORAGE_UPLOAD_ERROR",
            {"file_name": file_name, "reason": reason},
        )


class PersistenceException(SelectaException):
    """Base exception for registration store operations."""


class RegistrationWriteError(PersistenceException):
    """Inserting or appending a registration failed."""

    def __init__(self, homepass_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to persist registration: {homepass_id}",
            "PERSISTENCE_WRITE_ERROR",
            {"homepass_id": homepass_id, "reason": reason},
        )


class RegistrationDecodeError(PersistenceException):
    """A stored row or log line does not have the expected registration shape."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(
            f"Malformed registration record in {source}: {reason}",
            "PERSISTENCE_DECODE_ERROR",
            {"source": source, "reason": reason},
        )


class StoreNotOpenError(PersistenceException):
    """The store was used before open() or after close()."""

    def __init__(self, store: str) -> None:
        super().__init__(
            f"{store} is not open",
            "STORE_NOT_OPEN",
            {"store": store},
        )


class StoreOperationNotSupportedError(PersistenceException):
    """The backend does not implement this operation (e.g. lookups on the log store)."""

    def __init__(self, operation: str, backend: str) -> None:
        super().__init__(
            f"Operation '{operation}' not supported by {backend} backend",
            "STORE_NOT_SUPPORTED",
            {"operation": operation, "backend": backend},
        )


class RegistrationReadError(PersistenceException):
    """Reading registrations back from the store failed."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Failed to read registrations ({operation})",
            "PERSISTENCE_READ_ERROR",
            {"operation": operation, "reason": reason},
        )
