"""Error codes, structured error model, and raisable exceptions for ingestkit-archive.

``ErrorCode`` contains every error/warning code relevant to archive
ingestion.  ``IngestError`` extends ``BaseIngestError`` with an
``entry_name`` field for location context.  The ``ArchiveIngestException``
hierarchy wraps an ``IngestError`` so pipeline failures can be raised and
caught in control flow.
"""

from __future__ import annotations

from enum import Enum

from ingestkit_core.errors import BaseIngestError


class ErrorCode(str, Enum):
    """Error codes for archive ingestion.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal, ``W_`` prefix = warning.
    """

    # Upload
    E_UPLOAD_MISSING = "E_UPLOAD_MISSING"
    E_UPLOAD_EMPTY = "E_UPLOAD_EMPTY"

    # Security
    E_SECURITY_TOO_LARGE = "E_SECURITY_TOO_LARGE"
    E_SECURITY_BAD_MAGIC = "E_SECURITY_BAD_MAGIC"

    # Archive
    E_ARCHIVE_CORRUPT = "E_ARCHIVE_CORRUPT"
    E_ARCHIVE_NO_MATCHING_FILES = "E_ARCHIVE_NO_MATCHING_FILES"

    # Per-entry parse
    E_PARSE_CORRUPT = "E_PARSE_CORRUPT"
    E_PARSE_PASSWORD = "E_PARSE_PASSWORD"
    E_PARSE_EMPTY = "E_PARSE_EMPTY"
    E_ENTRY_TOO_LARGE = "E_ENTRY_TOO_LARGE"

    # Warnings (non-fatal)
    W_LARGE_ARCHIVE = "W_LARGE_ARCHIVE"
    W_PARSER_FALLBACK = "W_PARSER_FALLBACK"
    W_ENTRY_SKIPPED = "W_ENTRY_SKIPPED"


class IngestError(BaseIngestError):
    """Structured error with archive-specific location context.

    Extends the core ``BaseIngestError`` with an ``entry_name`` field
    naming the archive member that caused the issue, if any.
    """

    entry_name: str | None = None


class ArchiveIngestException(Exception):
    """Raisable exception wrapping an :class:`IngestError`.

    Subclasses fix the ``ErrorCode`` for one failure category.  The
    structured error is available as ``.error`` for inspection and
    serialization.
    """

    default_code: ErrorCode = ErrorCode.E_ARCHIVE_CORRUPT
    default_stage: str | None = None
    terminal: bool = True

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        entry_name: str | None = None,
        stage: str | None = None,
    ) -> None:
        self.error = IngestError(
            code=code or self.default_code,
            message=message,
            entry_name=entry_name,
            stage=stage or self.default_stage,
            recoverable=not self.terminal,
        )
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage

    @property
    def recoverable(self) -> bool:
        return self.error.recoverable


class MissingInput(ArchiveIngestException):
    """No archive payload was supplied at all."""

    default_code = ErrorCode.E_UPLOAD_MISSING
    default_stage = "security"


class EmptyUpload(ArchiveIngestException):
    """The archive payload is zero bytes long."""

    default_code = ErrorCode.E_UPLOAD_EMPTY
    default_stage = "security"


class ArchiveTooLarge(ArchiveIngestException):
    """The archive payload exceeds ``max_archive_size_mb``."""

    default_code = ErrorCode.E_SECURITY_TOO_LARGE
    default_stage = "security"


class CorruptArchive(ArchiveIngestException):
    """The payload is not a readable ZIP container."""

    default_code = ErrorCode.E_ARCHIVE_CORRUPT
    default_stage = "open"


class NoMatchingFiles(ArchiveIngestException):
    """The archive is valid but holds no ``.xlsx`` members."""

    default_code = ErrorCode.E_ARCHIVE_NO_MATCHING_FILES
    default_stage = "select"


class UnreadableSpreadsheet(ArchiveIngestException):
    """A single member could not be read as a workbook.

    Never terminal: the orchestrator records it and moves on to the next
    entry.
    """

    default_code = ErrorCode.E_PARSE_CORRUPT
    default_stage = "parse"
    terminal = False
