"""Upload storage interface (port) for the application layer."""

from typing import Protocol


class IFileStore(Protocol):
    """Protocol for persisting raw upload bytes under a generated name."""

    async def store(self, file_bytes: bytes, original_name: str, prefix: str) -> str:
        """Write file_bytes and return the generated name ({prefix}_{millis}{ext})."""
