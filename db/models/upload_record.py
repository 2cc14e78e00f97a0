"""
db/models/upload_record.py

Provenance row written once per successfully ingested upload batch.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class UploadStatus:
    SUCCESS = "success"


class UploadRecord(Base):
    __tablename__ = "upload_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Client-supplied original file name; display only",
    )
    records_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    upload_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=UploadStatus.SUCCESS,
        server_default=UploadStatus.SUCCESS,
    )

    __table_args__ = (
        Index("ix_upload_history_upload_date", "upload_date"),
    )
    __mapper_args__ = {"eager_defaults": True}
