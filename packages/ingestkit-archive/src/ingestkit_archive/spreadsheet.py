"""Tolerant ``.xlsx`` parser producing the in-memory :class:`Workbook` model.

Implements a two-tier parsing strategy on raw member bytes:

1. **openpyxl** ``data_only=True`` -- cached formula values, date cells
   materialised as ``datetime`` via number-format detection, chart sheets
   kept as empty sheets.
2. **pandas** ``ExcelFile.parse`` (``header=None``) -- used only when openpyxl
   cannot open the workbook at all.

Both tiers feed the same normalisation: empty cells and empty strings
become ``None``, rows are padded to the sheet width, and rows with no
values are dropped.  Failure is coarse-grained: if no tier can read the
workbook, :class:`~ingestkit_archive.errors.UnreadableSpreadsheet` is
raised for the whole entry.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Sequence
from typing import Any

import openpyxl
import pandas as pd
from openpyxl.worksheet.worksheet import Worksheet

from ingestkit_archive.errors import ErrorCode, UnreadableSpreadsheet
from ingestkit_archive.models import CellValue, ParserUsed, Sheet, Workbook

logger = logging.getLogger("ingestkit_archive")

# Encrypted OOXML packages and legacy .xls files are OLE2 compound documents
_OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def parse_workbook(data: bytes, entry_name: str | None = None) -> Workbook:
    """Parse raw ``.xlsx`` bytes into a :class:`Workbook`.

    Parameters
    ----------
    data:
        Raw bytes of one archive member.
    entry_name:
        Member name, used only for log and error context.

    Returns
    -------
    Workbook
        Sheet names in workbook order and the normalised sheet grids.

    Raises
    ------
    UnreadableSpreadsheet
        If the bytes are empty, encrypted, or not readable by any parser.
    """
    if not data:
        raise UnreadableSpreadsheet(
            "Spreadsheet is empty (0 bytes)",
            code=ErrorCode.E_PARSE_EMPTY,
            entry_name=entry_name,
        )

    if data[: len(_OLE2_MAGIC)] == _OLE2_MAGIC:
        raise UnreadableSpreadsheet(
            "Workbook is an OLE2 compound file: password-protected or legacy .xls",
            code=ErrorCode.E_PARSE_PASSWORD,
            entry_name=entry_name,
        )

    try:
        return _parse_with_openpyxl(data)
    except Exception as exc:
        primary_error = exc
        logger.debug(
            "ingestkit_archive | entry=%s | openpyxl could not open workbook: %s "
            "| trying pandas fallback",
            entry_name,
            exc,
        )

    try:
        return _parse_with_pandas(data)
    except Exception as exc:
        logger.debug(
            "ingestkit_archive | entry=%s | pandas fallback failed: %s",
            entry_name,
            exc,
            exc_info=True,
        )
        raise UnreadableSpreadsheet(
            f"All parsers failed: {primary_error}",
            entry_name=entry_name,
        ) from exc


# ------------------------------------------------------------------
# Tier 1: openpyxl
# ------------------------------------------------------------------


def _parse_with_openpyxl(data: bytes) -> Workbook:
    wb = openpyxl.load_workbook(io.BytesIO(data), data_only=True)
    try:
        sheet_names = list(wb.sheetnames)
        sheets: dict[str, Sheet] = {}
        for name in sheet_names:
            ws = wb[name]
            if not isinstance(ws, Worksheet):
                # Chartsheet: counted, but holds no cells
                sheets[name] = Sheet(name=name)
                continue
            sheets[name] = Sheet(
                name=name,
                rows=normalize_rows(ws.iter_rows(values_only=True)),
            )
    finally:
        wb.close()

    return Workbook(sheet_names=sheet_names, sheets=sheets, parser_used=ParserUsed.OPENPYXL)


# ------------------------------------------------------------------
# Tier 2: pandas
# ------------------------------------------------------------------


def _parse_with_pandas(data: bytes) -> Workbook:
    with pd.ExcelFile(io.BytesIO(data)) as xls:
        # read_excel only yields worksheets; the book also lists chartsheets
        sheet_names = [str(name) for name in xls.book.sheetnames]
        frames = xls.parse(sheet_name=None, header=None)

    sheets: dict[str, Sheet] = {name: Sheet(name=name) for name in sheet_names}
    for name, df in frames.items():
        name = str(name)
        raw_rows = (
            [_from_pandas(v) for v in row]
            for row in df.itertuples(index=False, name=None)
        )
        sheets[name] = Sheet(name=name, rows=normalize_rows(raw_rows))

    return Workbook(
        sheet_names=sheet_names, sheets=sheets, parser_used=ParserUsed.PANDAS_FALLBACK
    )


def _from_pandas(value: Any) -> Any:
    """Convert a pandas/numpy scalar to the plain Python equivalent."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, pd.Timedelta):
        return value.to_pytimedelta()
    if isinstance(value, float) and pd.isna(value):
        return None
    if hasattr(value, "item"):
        value = value.item()
        if isinstance(value, float) and pd.isna(value):
            return None
    return value


# ------------------------------------------------------------------
# Normalisation
# ------------------------------------------------------------------


def normalize_cell(value: Any) -> CellValue:
    """Map empty strings to ``None``; every other value passes through."""
    if isinstance(value, str) and value == "":
        return None
    return value


def normalize_rows(rows: Iterable[Sequence[Any]]) -> list[list[CellValue]]:
    """Drop blank rows and pad the rest to a common width.

    A row is blank when every cell is ``None`` after :func:`normalize_cell`.
    """
    kept: list[list[CellValue]] = []
    width = 0
    for row in rows:
        cells = [normalize_cell(v) for v in row]
        if all(c is None for c in cells):
            continue
        kept.append(cells)
        width = max(width, len(cells))

    return [cells + [None] * (width - len(cells)) for cells in kept]
