"""Tests for ingestkit_archive.errors."""

from __future__ import annotations

import pytest

from ingestkit_core.errors import BaseIngestError

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


class TestErrorCode:
    """ErrorCode enum values must equal their names."""

    def test_all_values_equal_names(self):
        for member in ErrorCode:
            assert member.value == member.name

    def test_all_have_prefix(self):
        for member in ErrorCode:
            assert member.value.startswith(("E_", "W_"))

    def test_shared_parse_codes_present(self):
        assert ErrorCode.E_PARSE_CORRUPT.value == "E_PARSE_CORRUPT"
        assert ErrorCode.E_PARSE_PASSWORD.value == "E_PARSE_PASSWORD"
        assert ErrorCode.E_PARSE_EMPTY.value == "E_PARSE_EMPTY"


class TestIngestError:
    """IngestError serialisation and fields."""

    def test_round_trip(self):
        err = IngestError(
            code=ErrorCode.E_PARSE_CORRUPT,
            message="bad workbook",
            stage="parse",
            entry_name="reports/A.xlsx",
        )
        restored = IngestError(**err.model_dump())
        assert restored.code == ErrorCode.E_PARSE_CORRUPT.value
        assert restored.message == "bad workbook"
        assert restored.entry_name == "reports/A.xlsx"

    def test_entry_name_default_none(self):
        err = IngestError(code=ErrorCode.E_ARCHIVE_CORRUPT, message="corrupt")
        assert err.entry_name is None

    def test_inherits_from_base_ingest_error(self):
        err = IngestError(code=ErrorCode.E_ARCHIVE_CORRUPT, message="corrupt")
        assert isinstance(err, BaseIngestError)


class TestExceptions:
    """Raisable wrappers carry a structured IngestError."""

    @pytest.mark.parametrize(
        "exc_type, code, stage",
        [
            (MissingInput, ErrorCode.E_UPLOAD_MISSING, "security"),
            (EmptyUpload, ErrorCode.E_UPLOAD_EMPTY, "security"),
            (ArchiveTooLarge, ErrorCode.E_SECURITY_TOO_LARGE, "security"),
            (CorruptArchive, ErrorCode.E_ARCHIVE_CORRUPT, "open"),
            (NoMatchingFiles, ErrorCode.E_ARCHIVE_NO_MATCHING_FILES, "select"),
            (UnreadableSpreadsheet, ErrorCode.E_PARSE_CORRUPT, "parse"),
        ],
    )
    def test_default_code_and_stage(self, exc_type, code, stage):
        exc = exc_type("boom")
        assert exc.code == code.value
        assert exc.stage == stage
        assert exc.message == "boom"
        assert str(exc) == "boom"
        assert isinstance(exc, ArchiveIngestException)

    def test_terminal_exceptions_not_recoverable(self):
        for exc_type in (MissingInput, EmptyUpload, ArchiveTooLarge, CorruptArchive, NoMatchingFiles):
            assert exc_type("x").recoverable is False

    def test_unreadable_spreadsheet_is_recoverable(self):
        exc = UnreadableSpreadsheet("x", entry_name="A.xlsx")
        assert exc.recoverable is True
        assert exc.error.entry_name == "A.xlsx"

    def test_code_override(self):
        exc = CorruptArchive("bad magic", code=ErrorCode.E_SECURITY_BAD_MAGIC)
        assert exc.code == ErrorCode.E_SECURITY_BAD_MAGIC.value

    def test_can_raise_and_catch(self):
        with pytest.raises(ArchiveIngestException) as exc_info:
            raise NoMatchingFiles("nothing here")
        assert exc_info.value.error.code == ErrorCode.E_ARCHIVE_NO_MATCHING_FILES.value
