"""
app/domain/errors.py

Failures raised while turning an uploaded file into KPI rows.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for parse-side ingestion failures."""


class UnsupportedFormatError(IngestionError):
    """Raised for file extensions other than csv, xlsx and xls."""

    def __init__(self, extension: str) -> None:
        super().__init__("Unsupported file format")
        self.extension = extension


class FileParseError(IngestionError):
    """Raised when file content cannot be decoded or is structurally broken."""


class EmptyResultError(IngestionError):
    """Raised when no row survives the date-presence filter."""

    def __init__(self) -> None:
        super().__init__("No valid data found in file")
