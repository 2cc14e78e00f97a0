"""
app/schemas/upload.py

Response schemas for upload endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UploadSummaryResponse(BaseModel):
    """
    API response for one processed upload.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = "File processed successfully"
    records_processed: int = Field(..., ge=0, alias="recordsProcessed")
    filename: str


class UploadRecordResponse(BaseModel):
    """
    API response model for one upload-history entry.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    records_count: int | None = None
    upload_date: datetime
    status: str
