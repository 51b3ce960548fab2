"""Application DTOs (plain dataclasses, no ORM or HTTP types)."""

from selecta.application.dtos.registration import (
    Location,
    RegistrationCreate,
    RegistrationInput,
    RegistrationPage,
    RegistrationRecord,
    UploadedFile,
)

__all__ = [
    "Location",
    "RegistrationCreate",
    "RegistrationInput",
    "RegistrationPage",
    "RegistrationRecord",
    "UploadedFile",
]
