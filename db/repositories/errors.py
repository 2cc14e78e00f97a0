"""
Repository-layer exceptions for store and temp-upload flows.
"""

from __future__ import annotations


class StoreError(Exception):
    """Raised when a store query or insert fails."""


class FileStorageError(Exception):
    """Raised when writing or deleting a temporary upload fails."""


class UploadTooLargeError(FileStorageError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int) -> None:
        super().__init__(f"File exceeds the {limit_bytes} byte upload limit.")
        self.limit_bytes = limit_bytes
