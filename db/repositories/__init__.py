"""
Repository layer exports.
"""

from db.repositories.errors import FileStorageError, StoreError, UploadTooLargeError
from db.repositories.storage import TempUploadStorage, file_extension
from db.repositories.types import StoredUpload

__all__ = [
    "TempUploadStorage",
    "StoredUpload",
    "file_extension",
    "StoreError",
    "FileStorageError",
    "UploadTooLargeError",
]
