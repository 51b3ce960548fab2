"""Local filesystem storage for uploaded documents with atomic writes."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from selecta.infrastructure.exceptions import StorageUploadError
from selecta.shared.utils.generators import generate_upload_name

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Writes uploads into upload_dir under generated names.

    Names are {prefix}_{millis}{ext}; two uploads with the same prefix in
    the same millisecond collide and the later one replaces the earlier.
    Writes use temp file + rename so readers never see partial files.
    """

    def __init__(self, upload_dir: str | Path) -> None:
        """Initialize the store. The directory is created lazily on first write.

        Args:
            upload_dir: Directory that receives the uploads.
        """
        self.upload_dir = Path(upload_dir).resolve()

    def _ensure_dir(self) -> Path:
        # exist_ok: concurrent requests may race to create it.
        self.upload_dir.mkdir(parents=True, exist_ok=True, mode=0o750)
        return self.upload_dir

    def path_for(self, generated_name: str) -> Path:
        """Return the on-disk path of a stored upload."""
        return self.upload_dir / generated_name

    async def store(self, file_bytes: bytes, original_name: str, prefix: str) -> str:
        """Persist file_bytes and return the generated name.

        Raises:
            StorageUploadError: On any I/O failure (no retry).
        """
        generated = generate_upload_name(original_name, prefix)
        try:
            target_dir = self._ensure_dir()
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_dir, prefix=".tmp_", suffix=Path(generated).suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_bytes)
                os.chmod(temp_path, 0o640)
                await aiofiles.os.replace(temp_path, target_dir / generated)
            finally:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
        except OSError as e:
            logger.error("File save error for %s: %s", generated, e)
            raise StorageUploadError(generated, str(e)) from e
        logger.debug("Stored upload %s (%d bytes)", generated, len(file_bytes))
        return generated
