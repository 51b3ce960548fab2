"""Registration use cases: submit, list, look up, health probe."""

from selecta.application.use_cases.registrations.registration_operations import (
    RegistrationForm,
    RegistrationResult,
    RegistrationService,
)

__all__ = ["RegistrationForm", "RegistrationResult", "RegistrationService"]
