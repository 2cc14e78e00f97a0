"""
app/services package marker.
"""

from app.services.kpi_ingestion_service import KpiIngestionService

__all__ = [
    "KpiIngestionService",
]
