from __future__ import annotations

import io
from pathlib import Path

import pytest

from db.repositories.errors import UploadTooLargeError
from db.repositories.storage import TempUploadStorage, file_extension


@pytest.mark.parametrize(
    "name, expected",
    [
        ("kpis.CSV", "csv"),
        ("reporte.final.xlsx", "xlsx"),
        ("viejo.xls", "xls"),
        ("sin_extension", ""),
    ],
)
def test_file_extension(name: str, expected: str) -> None:
    assert file_extension(name) == expected


def test_save_spools_content_under_generated_name(tmp_path: Path) -> None:
    storage = TempUploadStorage(tmp_path / "spool", max_bytes=1024)

    stored = storage.save(file_name="../../etc/kpis.csv", stream=io.BytesIO(b"Fecha\n2024-01-31\n"))

    assert stored.path.parent == tmp_path / "spool"
    assert stored.path.read_bytes() == b"Fecha\n2024-01-31\n"
    assert stored.original_name == "../../etc/kpis.csv"
    assert stored.extension == "csv"
    assert stored.size_bytes == 17


def test_save_rejects_oversized_upload_and_leaves_nothing(tmp_path: Path) -> None:
    storage = TempUploadStorage(tmp_path, max_bytes=10)

    with pytest.raises(UploadTooLargeError):
        storage.save(file_name="big.csv", stream=io.BytesIO(b"x" * 11))

    assert list(tmp_path.iterdir()) == []


def test_delete_is_idempotent(tmp_path: Path) -> None:
    storage = TempUploadStorage(tmp_path)
    stored = storage.save(file_name="kpis.csv", stream=io.BytesIO(b"Fecha\n"))

    storage.delete(stored.path)
    storage.delete(stored.path)

    assert not stored.path.exists()
