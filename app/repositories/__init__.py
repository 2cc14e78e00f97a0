"""
app/repositories package marker.
"""

from app.repositories.kpi_snapshot_repository import KpiSnapshotRepository
from app.repositories.upload_history_repository import UploadHistoryRepository

__all__ = [
    "KpiSnapshotRepository",
    "UploadHistoryRepository",
]
