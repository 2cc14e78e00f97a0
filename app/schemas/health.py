"""
app/schemas/health.py
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: datetime
    database: str
