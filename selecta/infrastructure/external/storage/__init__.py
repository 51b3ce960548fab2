"""Upload storage: local filesystem backend.

LocalFileStore implements IFileStore (store(file_bytes, original_name, prefix)).
"""

from selecta.infrastructure.external.storage.local_storage import LocalFileStore

__all__ = ["LocalFileStore"]
