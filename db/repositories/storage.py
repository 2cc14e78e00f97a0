"""
Temporary on-disk storage for uploaded KPI files.

Uploads are spooled here only for the duration of one ingestion request;
the ingestion service deletes them afterwards.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import BinaryIO

from db.repositories.errors import FileStorageError, UploadTooLargeError
from db.repositories.types import StoredUpload

_CHUNK_SIZE = 64 * 1024


def file_extension(file_name: str) -> str:
    """
    Return the lowercase extension of ``file_name`` without the dot.
    """

    return Path(file_name).suffix.lower().lstrip(".")


class TempUploadStorage:
    """
    Local filesystem spool for uploads, bounded by ``max_bytes``.
    """

    def __init__(self, root_dir: str | Path = "uploads", *, max_bytes: int = 10 * 1024 * 1024) -> None:
        self._root_dir = Path(root_dir)
        self._max_bytes = max_bytes

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    def ensure_root(self) -> None:
        try:
            self._root_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileStorageError(f"Cannot create upload directory {self._root_dir}.") from exc

    def save(self, *, file_name: str, stream: BinaryIO) -> StoredUpload:
        """
        Copy ``stream`` into a uniquely named temp file.

        The client file name never becomes part of the path.
        """

        self.ensure_root()
        target = self._root_dir / uuid.uuid4().hex
        written = 0
        try:
            with target.open("wb") as handle:
                while True:
                    chunk = stream.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self._max_bytes:
                        raise UploadTooLargeError(self._max_bytes)
                    handle.write(chunk)
        except UploadTooLargeError:
            self.delete(target)
            raise
        except OSError as exc:
            self.delete(target)
            raise FileStorageError("Failed to write uploaded file to temp storage.") from exc

        return StoredUpload(
            original_name=file_name,
            path=target,
            extension=file_extension(file_name),
            size_bytes=written,
        )

    def delete(self, path: str | Path) -> None:
        target = Path(path)
        if not target.exists():
            return
        try:
            target.unlink()
        except OSError as exc:
            raise FileStorageError("Failed to delete temporary upload.") from exc
