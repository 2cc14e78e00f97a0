"""
app/domain package marker.
"""

from app.domain.errors import EmptyResultError, FileParseError, IngestionError, UnsupportedFormatError
from app.domain.kpi_snapshot import (
    DEFAULT_KPI_VALUES,
    KpiSnapshotInput,
    RawCell,
    RawRow,
    UploadSummary,
)

__all__ = [
    "DEFAULT_KPI_VALUES",
    "EmptyResultError",
    "FileParseError",
    "IngestionError",
    "KpiSnapshotInput",
    "RawCell",
    "RawRow",
    "UnsupportedFormatError",
    "UploadSummary",
]
