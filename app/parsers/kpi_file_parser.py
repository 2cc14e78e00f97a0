"""
app/parsers/kpi_file_parser.py

Decodes uploaded CSV / Excel files into loosely typed row mappings.

Only rows that carry a value under a date-like column survive parsing;
everything else is dropped silently before normalization.
"""

from __future__ import annotations

import csv
import logging
import numbers
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd

from app.domain.errors import EmptyResultError, FileParseError, UnsupportedFormatError
from app.domain.kpi_snapshot import RawCell, RawRow

logger = logging.getLogger(__name__)

CSV_EXTENSION = "csv"
EXCEL_ENGINES: dict[str, str] = {
    "xlsx": "openpyxl",
    "xls": "xlrd",
}
SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({CSV_EXTENSION, *EXCEL_ENGINES})

DATE_KEY_MARKERS: tuple[str, ...] = ("fecha", "date")


def is_blank(value: RawCell) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_date_key(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in DATE_KEY_MARKERS)


def has_date_value(row: RawRow) -> bool:
    """
    Return True when a column whose name contains "fecha" or "date"
    (any case) holds a non-empty value.
    """

    return any(is_date_key(key) and not is_blank(value) for key, value in row.items())


class KpiFileParser:
    """
    Dispatches on file extension and returns date-bearing rows in file order.
    """

    def parse(self, path: str | Path, extension: str) -> list[RawRow]:
        extension = extension.lower().lstrip(".")
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(extension)
        if extension == CSV_EXTENSION:
            rows = self._read_csv(Path(path))
        else:
            rows = self._read_excel(Path(path), engine=EXCEL_ENGINES[extension])

        kept = [row for row in rows if has_date_value(row)]
        dropped = len(rows) - len(kept)
        if dropped:
            logger.info("Dropped %d row(s) without a date value", dropped)
        if not kept:
            raise EmptyResultError()
        return kept

    def _read_csv(self, path: Path) -> list[RawRow]:
        rows: list[RawRow] = []
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as handle:
                reader = csv.DictReader(handle)
                for raw_row in reader:
                    rows.append(_clean_csv_row(raw_row))
        except UnicodeDecodeError as exc:
            raise FileParseError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise FileParseError(f"Invalid CSV format: {exc}") from exc
        return rows

    def _read_excel(self, path: Path, *, engine: str) -> list[RawRow]:
        try:
            with pd.ExcelFile(path, engine=engine) as workbook:
                sheet_names = list(workbook.sheet_names)
                if not sheet_names:
                    raise FileParseError("Workbook contains no sheets.")
                if len(sheet_names) > 1:
                    logger.warning(
                        "Only the first sheet %r is read; ignoring %s",
                        sheet_names[0],
                        ", ".join(repr(name) for name in sheet_names[1:]),
                    )
                frame = workbook.parse(sheet_names[0], dtype=object, keep_default_na=False)
        except FileParseError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise FileParseError(f"Unable to read spreadsheet: {exc}") from exc

        columns = [str(column) for column in frame.columns]
        rows: list[RawRow] = []
        for values in frame.itertuples(index=False, name=None):
            row = {column: _cell_from_excel(value) for column, value in zip(columns, values)}
            if all(value is None for value in row.values()):
                continue
            rows.append(row)
        return rows


def _clean_csv_row(raw_row: dict[str | None, Any]) -> RawRow:
    row: RawRow = {}
    for key, value in raw_row.items():
        # Surplus fields without a header land under the None key.
        if key is None:
            continue
        if value is None or not str(value).strip():
            row[key] = None
        else:
            row[key] = str(value)
    return row


def _cell_from_excel(value: Any) -> RawCell:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        if pd.isna(value):
            return None
        if isinstance(value, datetime):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Real):
        if pd.isna(value):
            return None
        return float(value)
    text = str(value)
    return text if text.strip() else None
