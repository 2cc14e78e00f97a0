"""
app/mappers package marker.
"""

from app.mappers.column_normalizer import (
    CANONICAL_FIELDS,
    KNOWN_COLUMN_LABELS,
    normalize_column_name,
    normalize_row,
)

__all__ = [
    "CANONICAL_FIELDS",
    "KNOWN_COLUMN_LABELS",
    "normalize_column_name",
    "normalize_row",
]
