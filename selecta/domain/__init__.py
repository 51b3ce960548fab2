"""Domain layer: exceptions for rejected submissions and failed pipeline steps.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

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
    SelectaException,
    StoreUnavailableException,
)

__all__ = [
    "DuplicateRegistrationException",
    "FileSaveException",
    "FileValidationException",
    "InvalidLocationFormatException",
    "MissingFieldsException",
    "RegistrationNotFoundException",
    "RegistrationReadException",
    "RegistrationSaveException",
    "RegistrationValidationException",
    "SelectaException",
    "StoreUnavailableException",
]
