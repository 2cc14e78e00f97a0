"""
Model package exports.

Import all SQLAlchemy models here so ``KpiStore.create_all`` registers
every table without extra imports.
"""

from db.models.kpi_snapshot import KPI_METRIC_FIELDS, KpiSnapshot
from db.models.upload_record import UploadRecord, UploadStatus

__all__ = [
    "KPI_METRIC_FIELDS",
    "KpiSnapshot",
    "UploadRecord",
    "UploadStatus",
]
