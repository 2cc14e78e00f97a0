"""
app/api/routers package marker.
"""

from app.api.routers.kpi_router import router as kpi_router
from app.api.routers.upload_router import router as upload_router

__all__ = [
    "kpi_router",
    "upload_router",
]
