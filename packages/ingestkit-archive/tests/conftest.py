"""Shared test fixtures for ingestkit-archive tests.

Workbooks are generated with openpyxl and zipped in memory, so no test
depends on files checked into the repository.
"""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Sequence
from typing import Any

import openpyxl
import pytest

from ingestkit_archive.config import ArchiveProcessorConfig

# (sheet title, rows)
SheetRows = tuple[str, Sequence[Sequence[Any]]]


def make_xlsx_bytes(sheets: Sequence[SheetRows] | None = None) -> bytes:
    """Build an .xlsx workbook in memory.

    Defaults to one sheet named ``Data`` with a header and three rows.
    """
    if sheets is None:
        sheets = [("Data", [["Name", "Age"], ["Alice", 30], ["Bob", 25], ["Carol", 41]])]

    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for title, rows in sheets:
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(list(row))

    buf = io.BytesIO()
    wb.save(buf)
    wb.close()
    return buf.getvalue()


def make_zip_bytes(
    members: Sequence[tuple[str, bytes]],
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """Build a ZIP archive in memory from ``(name, data)`` pairs.

    Names ending in ``/`` are written as directory entries.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=compression) as zf:
        for name, data in members:
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def default_config() -> ArchiveProcessorConfig:
    """Return a default ArchiveProcessorConfig."""
    return ArchiveProcessorConfig()


@pytest.fixture
def xlsx_factory() -> Callable[..., bytes]:
    """Factory fixture returning .xlsx bytes for the given sheet specs."""
    return make_xlsx_bytes


@pytest.fixture
def zip_factory() -> Callable[..., bytes]:
    """Factory fixture returning ZIP bytes for the given members."""
    return make_zip_bytes


@pytest.fixture
def valid_xlsx() -> bytes:
    """One sheet: header + 3 data rows."""
    return make_xlsx_bytes()


@pytest.fixture
def corrupt_xlsx() -> bytes:
    """Bytes with an .xlsx name but no readable workbook inside."""
    return b"this is not a spreadsheet" * 10
