"""
app/schemas package marker.
"""

from app.schemas.health import HealthResponse
from app.schemas.kpi import KpiSnapshotResponse, KpiValuesResponse
from app.schemas.upload import UploadRecordResponse, UploadSummaryResponse

__all__ = [
    "HealthResponse",
    "KpiSnapshotResponse",
    "KpiValuesResponse",
    "UploadRecordResponse",
    "UploadSummaryResponse",
]
