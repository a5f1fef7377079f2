"""ingestkit-archive -- ZIP-of-.xlsx upload validation for the ingestkit framework.

Public API re-exports for convenient access.
"""

from ingestkit_archive.archive import ArchiveEntry, ArchiveReader, open_archive
from ingestkit_archive.config import ArchiveProcessorConfig
from ingestkit_archive.errors import (
    ArchiveIngestException,
    ArchiveTooLarge,
    CorruptArchive,
    EmptyUpload,
    ErrorCode,
    IngestError,
    MissingInput,
    NoMatchingFiles,
    UnreadableSpreadsheet,
)
from ingestkit_archive.models import (
    BatchReport,
    EntryFailure,
    EntryOutcome,
    FileReport,
    ParserUsed,
    Sheet,
    Workbook,
    WorkbookStats,
)
from ingestkit_archive.responses import build_error_response, build_success_response
from ingestkit_archive.router import ArchiveRouter
from ingestkit_archive.security import ArchiveSecurityScanner
from ingestkit_archive.selector import ACCEPTED_SUFFIX, is_accepted_name, select_entries
from ingestkit_archive.spreadsheet import parse_workbook
from ingestkit_archive.stats import estimate_data_rows, summarize

__all__ = [
    # Router
    "ArchiveRouter",
    # Pipeline stages
    "ArchiveSecurityScanner",
    "ArchiveReader",
    "ArchiveEntry",
    "open_archive",
    "ACCEPTED_SUFFIX",
    "is_accepted_name",
    "select_entries",
    "parse_workbook",
    "summarize",
    "estimate_data_rows",
    # Models
    "Workbook",
    "Sheet",
    "ParserUsed",
    "WorkbookStats",
    "FileReport",
    "EntryFailure",
    "EntryOutcome",
    "BatchReport",
    # Responses
    "build_success_response",
    "build_error_response",
    # Errors
    "ErrorCode",
    "IngestError",
    "ArchiveIngestException",
    "MissingInput",
    "EmptyUpload",
    "ArchiveTooLarge",
    "CorruptArchive",
    "NoMatchingFiles",
    "UnreadableSpreadsheet",
    # Config
    "ArchiveProcessorConfig",
]
