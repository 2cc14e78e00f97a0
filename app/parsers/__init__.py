"""
app/parsers package marker.
"""

from app.parsers.kpi_file_parser import SUPPORTED_EXTENSIONS, KpiFileParser, has_date_value

__all__ = [
    "KpiFileParser",
    "SUPPORTED_EXTENSIONS",
    "has_date_value",
]
