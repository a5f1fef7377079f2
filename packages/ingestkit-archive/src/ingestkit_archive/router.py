"""ArchiveRouter -- orchestrator and public API for the ingestkit-archive pipeline.

Routes an uploaded ZIP archive through the ingestion pipeline:

1. Security scan via :class:`ArchiveSecurityScanner`.
2. Compute deterministic :class:`IngestKey` for deduplication.
3. Open the archive via :class:`ArchiveReader`.
4. Select ``.xlsx`` members via :func:`select_entries`.
5. Per entry: read, parse via :func:`parse_workbook`, summarize via
   :func:`summarize`.
6. Assemble and return :class:`BatchReport`.

Failures in steps 1-4 abort the request by raising an
:class:`ArchiveIngestException` subclass.  Failures in step 5 are isolated
per entry: the entry is recorded in ``BatchReport.failures`` and the next
entry is attempted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable

from ingestkit_core.idempotency import compute_ingest_key

from ingestkit_archive.archive import ArchiveEntry, ArchiveReader
from ingestkit_archive.config import ArchiveProcessorConfig
from ingestkit_archive.errors import (
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
)
from ingestkit_archive.security import ArchiveSecurityScanner
from ingestkit_archive.selector import ACCEPTED_SUFFIX, select_entries
from ingestkit_archive.spreadsheet import parse_workbook
from ingestkit_archive.stats import summarize

logger = logging.getLogger("ingestkit_archive")

_SECURITY_EXCEPTIONS = {
    ErrorCode.E_UPLOAD_MISSING: MissingInput,
    ErrorCode.E_UPLOAD_EMPTY: EmptyUpload,
    ErrorCode.E_SECURITY_TOO_LARGE: ArchiveTooLarge,
    ErrorCode.E_SECURITY_BAD_MAGIC: CorruptArchive,
}


class ArchiveRouter:
    """Top-level orchestrator for the ingestkit-archive pipeline.

    Parameters
    ----------
    config:
        Pipeline configuration.  Uses defaults when *None*.
    """

    def __init__(self, config: ArchiveProcessorConfig | None = None) -> None:
        self._config = config or ArchiveProcessorConfig()
        self._security_scanner = ArchiveSecurityScanner(self._config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def ingest(self, data: bytes | None) -> BatchReport:
        """Validate every ``.xlsx`` member of an uploaded archive.

        Parameters
        ----------
        data:
            Raw archive bytes as extracted from the upload.

        Returns
        -------
        BatchReport
            One :class:`FileReport` per member that parsed, in member order.

        Raises
        ------
        MissingInput, EmptyUpload, ArchiveTooLarge, CorruptArchive, NoMatchingFiles
            Terminal, request-level failures.
        """
        overall_start = time.monotonic()
        config = self._config

        # ==============================================================
        # Step 1: Security Scan
        # ==============================================================
        security_errors = self._security_scanner.scan(data)
        fatal_errors = [e for e in security_errors if e.code.startswith("E_")]
        warnings = [e for e in security_errors if not e.code.startswith("E_")]

        if fatal_errors:
            first = fatal_errors[0]
            logger.error(
                "ingestkit_archive | code=%s | detail=%s", first.code, first.message
            )
            raise _SECURITY_EXCEPTIONS[ErrorCode(first.code)](
                first.message, code=ErrorCode(first.code)
            )

        assert data is not None

        # ==============================================================
        # Step 2: Compute Ingest Key
        # ==============================================================
        ingest_key = compute_ingest_key(
            data,
            parser_version=config.parser_version,
            tenant_id=config.tenant_id,
        ).key

        # ==============================================================
        # Step 3-5: Open, Select, Process Entries
        # ==============================================================
        try:
            reader = ArchiveReader(data)
        except CorruptArchive as exc:
            logger.error(
                "ingestkit_archive | ingest_key=%s | code=%s | detail=%s",
                ingest_key[:8],
                exc.code,
                exc.message,
            )
            raise

        with reader:
            entries = reader.entries()
            selected = select_entries(entries)

            if not selected:
                logger.error(
                    "ingestkit_archive | ingest_key=%s | code=%s | members=%d",
                    ingest_key[:8],
                    ErrorCode.E_ARCHIVE_NO_MATCHING_FILES.value,
                    len(entries),
                )
                raise NoMatchingFiles(
                    f"No {ACCEPTED_SUFFIX} files found in archive"
                )

            outcomes = self.ingest_entries(selected)

        # ==============================================================
        # Step 6: Assemble Result
        # ==============================================================
        files = [o.report for o in outcomes if o.report is not None]
        failures = [o.failure for o in outcomes if o.failure is not None]
        entry_warnings = [w for o in outcomes for w in o.warnings]
        all_warnings = warnings + entry_warnings

        elapsed = time.monotonic() - overall_start
        logger.info(
            "ingestkit_archive | ingest_key=%s | selected=%d | parsed=%d | "
            "skipped=%d | time=%.1fs",
            ingest_key[:8],
            len(selected),
            len(files),
            len(failures),
            elapsed,
        )

        return BatchReport(
            files=files,
            failures=failures,
            entries_selected=len(selected),
            ingest_key=ingest_key,
            warnings=[w.code for w in all_warnings],
            error_details=all_warnings,
            processing_time_seconds=elapsed,
        )

    async def aingest(self, data: bytes | None) -> BatchReport:
        """Async wrapper around :meth:`ingest`.

        Offloads the synchronous ``ingest()`` call to a thread via
        ``asyncio.to_thread()``.
        """
        return await asyncio.to_thread(self.ingest, data)

    def ingest_entries(self, entries: Iterable[ArchiveEntry]) -> list[EntryOutcome]:
        """Attempt every entry once, in order, isolating failures per entry."""
        return [self._process_entry(entry) for entry in entries]

    # ------------------------------------------------------------------
    # Per-entry processing
    # ------------------------------------------------------------------

    def _process_entry(self, entry: ArchiveEntry) -> EntryOutcome:
        try:
            self._check_entry_size(entry)
            data = entry.read_bytes()
        except UnreadableSpreadsheet as exc:
            return self._failed(entry, exc.code, exc.message)
        except Exception as exc:
            return self._failed(
                entry,
                ErrorCode.E_PARSE_CORRUPT.value,
                f"Cannot extract archive member: {exc}",
            )

        try:
            workbook = parse_workbook(data, entry_name=entry.name)
        except UnreadableSpreadsheet as exc:
            return self._failed(entry, exc.code, exc.message)

        stats = summarize(workbook)

        warnings: list[IngestError] = []
        if workbook.parser_used is ParserUsed.PANDAS_FALLBACK:
            warnings.append(
                IngestError(
                    code=ErrorCode.W_PARSER_FALLBACK,
                    message=f"Entry '{entry.name}' parsed via pandas fallback",
                    entry_name=entry.name,
                    stage="parse",
                    recoverable=True,
                )
            )

        logger.debug(
            "ingestkit_archive | entry=%s | sheets=%d | rows=%d | parser=%s",
            entry.name,
            stats.sheets,
            stats.estimated_rows,
            workbook.parser_used.value,
        )

        return EntryOutcome(
            name=entry.name,
            report=FileReport(
                name=entry.name,
                sheets=stats.sheets,
                estimated_rows=stats.estimated_rows,
            ),
            warnings=warnings,
        )

    def _check_entry_size(self, entry: ArchiveEntry) -> None:
        max_bytes = self._config.max_entry_size_mb * 1024 * 1024
        if entry.file_size > max_bytes:
            raise UnreadableSpreadsheet(
                f"Uncompressed size {entry.file_size} bytes exceeds limit of "
                f"{max_bytes} bytes ({self._config.max_entry_size_mb} MB)",
                code=ErrorCode.E_ENTRY_TOO_LARGE,
                entry_name=entry.name,
                stage="extract",
            )

    def _failed(self, entry: ArchiveEntry, code: str, message: str) -> EntryOutcome:
        if self._config.log_entry_failures:
            logger.warning(
                "ingestkit_archive | entry=%s | code=%s | detail=%s",
                entry.name,
                code,
                message,
            )
        return EntryOutcome(
            name=entry.name,
            failure=EntryFailure(name=entry.name, code=code, message=message),
            warnings=[
                IngestError(
                    code=ErrorCode.W_ENTRY_SKIPPED,
                    message=f"Entry '{entry.name}' skipped: {code}",
                    entry_name=entry.name,
                    stage="parse",
                    recoverable=True,
                )
            ],
        )
