"""Pydantic data models and enumerations for ingestkit-archive.

Covers the in-memory workbook model produced by the spreadsheet parser,
the per-workbook statistics, and the report types surfaced to callers.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from ingestkit_archive.errors import IngestError

CellValue = Union[str, bool, int, float, datetime, date, time, timedelta, None]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ParserUsed(str, Enum):
    """Which parser successfully processed a workbook in the fallback chain."""

    OPENPYXL = "openpyxl"
    PANDAS_FALLBACK = "pandas_fallback"


# ---------------------------------------------------------------------------
# Workbook Model
# ---------------------------------------------------------------------------


class Sheet(BaseModel):
    """A single worksheet with blank rows already removed.

    Every row is padded to the same width; missing cells are ``None``.
    """

    name: str
    rows: list[list[CellValue]] = []

    @property
    def row_count(self) -> int:
        return len(self.rows)


class Workbook(BaseModel):
    """Parsed workbook: sheet names in workbook order plus the sheet grids."""

    sheet_names: list[str]
    sheets: dict[str, Sheet]
    parser_used: ParserUsed = ParserUsed.OPENPYXL


class WorkbookStats(BaseModel):
    """Structural summary of one workbook."""

    sheets: int = Field(ge=0)
    estimated_rows: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class FileReport(BaseModel):
    """Summary of one successfully parsed archive member.

    ``estimated_rows`` serialises as ``estimatedRows`` when dumped with
    ``by_alias=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    sheets: int = Field(ge=0)
    estimated_rows: int = Field(ge=0, alias="estimatedRows")


class EntryFailure(BaseModel):
    """A selected member that was skipped because it could not be processed."""

    name: str
    code: str
    message: str


class EntryOutcome(BaseModel):
    """Result of attempting one entry: exactly one of report / failure is set."""

    name: str
    report: FileReport | None = None
    failure: EntryFailure | None = None
    warnings: list[IngestError] = []

    @property
    def ok(self) -> bool:
        return self.report is not None


class BatchReport(BaseModel):
    """Final result of :meth:`ArchiveRouter.ingest`.

    ``files`` holds one report per successfully parsed entry, in archive
    member order.  Skipped entries are listed in ``failures``.
    """

    files: list[FileReport] = []
    failures: list[EntryFailure] = []
    entries_selected: int = 0
    ingest_key: str = ""
    warnings: list[str] = []
    error_details: list[IngestError] = []
    processing_time_seconds: float = 0.0
