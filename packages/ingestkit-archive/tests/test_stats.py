"""Tests for ingestkit_archive.stats."""

from __future__ import annotations

import pytest

from ingestkit_archive.models import Sheet, Workbook
from ingestkit_archive.stats import estimate_data_rows, summarize


def _workbook(*sheets: tuple[str, int]) -> Workbook:
    """Build a Workbook whose sheets have the given row counts."""
    return Workbook(
        sheet_names=[name for name, _ in sheets],
        sheets={
            name: Sheet(name=name, rows=[[i] for i in range(count)])
            for name, count in sheets
        },
    )


class TestEstimateDataRows:

    @pytest.mark.parametrize("row_count, expected", [(0, 0), (1, 0), (2, 1), (101, 100)])
    def test_header_excluded(self, row_count, expected):
        assert estimate_data_rows(row_count) == expected


class TestSummarize:

    def test_header_plus_three(self):
        stats = summarize(_workbook(("Data", 4)))
        assert stats.sheets == 1
        assert stats.estimated_rows == 3

    def test_empty_sheet_contributes_zero(self):
        stats = summarize(_workbook(("Empty", 0), ("Full", 6)))
        assert stats.sheets == 2
        assert stats.estimated_rows == 5

    def test_header_only_sheets(self):
        stats = summarize(_workbook(("A", 1), ("B", 1), ("C", 1)))
        assert stats.sheets == 3
        assert stats.estimated_rows == 0

    def test_sums_across_sheets(self):
        stats = summarize(_workbook(("A", 10), ("B", 3), ("C", 0)))
        assert stats.estimated_rows == 9 + 2

    def test_no_sheets(self):
        stats = summarize(Workbook(sheet_names=[], sheets={}))
        assert stats.sheets == 0
        assert stats.estimated_rows == 0

    def test_sheet_name_without_grid_still_counted(self):
        wb = Workbook(sheet_names=["Chart", "Data"], sheets={"Data": Sheet(name="Data", rows=[["h"], [1]])})
        stats = summarize(wb)
        assert stats.sheets == 2
        assert stats.estimated_rows == 1
