"""Response shaping for the HTTP layer that fronts :class:`ArchiveRouter`.

The HTTP framework itself lives outside this package.  These helpers turn
a :class:`BatchReport` or a raised exception into ``(status, body)`` pairs
whose bodies are plain JSON-serialisable dicts.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from ingestkit_archive.errors import (
    ArchiveIngestException,
    ArchiveTooLarge,
    EmptyUpload,
    MissingInput,
    NoMatchingFiles,
)
from ingestkit_archive.models import BatchReport
from ingestkit_archive.selector import ACCEPTED_SUFFIX

logger = logging.getLogger("ingestkit_archive")

_CLIENT_ERRORS: dict[type[ArchiveIngestException], tuple[HTTPStatus, str]] = {
    MissingInput: (HTTPStatus.BAD_REQUEST, "Missing zip file"),
    EmptyUpload: (HTTPStatus.BAD_REQUEST, "Zip file is empty"),
    NoMatchingFiles: (HTTPStatus.BAD_REQUEST, f"No {ACCEPTED_SUFFIX} files found in archive"),
    ArchiveTooLarge: (HTTPStatus.REQUEST_ENTITY_TOO_LARGE, "Zip file is too large"),
}

_GENERIC_ERROR = "Failed to process upload"


def build_success_response(report: BatchReport) -> tuple[int, dict[str, Any]]:
    """Shape a successful batch as ``{"ok": True, "files": [...], "skipped": [...]}``."""
    body: dict[str, Any] = {
        "ok": True,
        "files": [f.model_dump(by_alias=True) for f in report.files],
        "skipped": [f.model_dump() for f in report.failures],
    }
    return HTTPStatus.OK.value, body


def build_error_response(exc: BaseException) -> tuple[int, dict[str, Any]]:
    """Shape a terminal failure as ``{"error": ..., "details"?: ...}``.

    User-correctable upload problems map to 4xx with a fixed message.
    Corrupt archives and unexpected exceptions map to 500 with the cause
    in ``details``.
    """
    for exc_type, (status, message) in _CLIENT_ERRORS.items():
        if isinstance(exc, exc_type):
            body: dict[str, Any] = {"error": message}
            if isinstance(exc, ArchiveTooLarge):
                body["details"] = exc.message
            return status.value, body

    if not isinstance(exc, ArchiveIngestException):
        logger.exception("ingestkit_archive | unexpected error", exc_info=exc)

    return HTTPStatus.INTERNAL_SERVER_ERROR.value, {
        "error": _GENERIC_ERROR,
        "details": str(exc),
    }
