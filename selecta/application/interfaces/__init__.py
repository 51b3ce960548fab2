"""Application interfaces (ports): store and upload storage protocols."""

from selecta.application.interfaces.repositories import IRegistrationStore
from selecta.application.interfaces.storage import IFileStore

__all__ = ["IFileStore", "IRegistrationStore"]
