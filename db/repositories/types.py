"""
Typed DTOs used by the temp-upload storage flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoredUpload:
    """
    Metadata produced after an upload has been spooled to the temp dir.
    """

    original_name: str
    path: Path
    extension: str
    size_bytes: int
