"""Structural statistics for a parsed workbook."""

from __future__ import annotations

from ingestkit_archive.models import Workbook, WorkbookStats


def estimate_data_rows(row_count: int) -> int:
    """Rows after the header: the first row of a non-empty sheet is excluded."""
    return max(0, row_count - 1)


def summarize(workbook: Workbook) -> WorkbookStats:
    """Count sheets and estimate data rows across every sheet.

    Blank rows were already removed by the parser, so a sheet whose first
    physical row is blank uses its first non-blank row as the header.
    Sheets listed in ``sheet_names`` without a grid contribute zero rows
    but still count as sheets.
    """
    estimated_rows = 0
    for name in workbook.sheet_names:
        sheet = workbook.sheets.get(name)
        if sheet is None:
            continue
        estimated_rows += estimate_data_rows(sheet.row_count)

    return WorkbookStats(sheets=len(workbook.sheet_names), estimated_rows=estimated_rows)
