"""Pre-flight security scanner for uploaded archives.

Validates presence, emptiness, size, and ZIP signature bytes before the
archive is opened.
"""

from __future__ import annotations

import logging

from ingestkit_archive.config import ArchiveProcessorConfig
from ingestkit_archive.errors import ErrorCode, IngestError

logger = logging.getLogger("ingestkit_archive")

# Local file header, end of central directory (empty archive), spanned marker
_ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


class ArchiveSecurityScanner:
    """Run pre-flight security checks on an in-memory archive.

    Returns a list of errors/warnings.  Fatal errors (``E_*`` codes)
    mean the upload should not be processed further.
    """

    def __init__(self, config: ArchiveProcessorConfig) -> None:
        self.config = config

    def scan(self, data: bytes | None) -> list[IngestError]:
        """Run all pre-flight checks.

        Returns
        -------
        list[IngestError]
            A list of errors/warnings.  Fatal errors have codes starting
            with ``E_``.
        """
        errors: list[IngestError] = []

        # --- 1. Payload present ---
        if data is None:
            errors.append(
                IngestError(
                    code=ErrorCode.E_UPLOAD_MISSING,
                    message="No archive payload supplied",
                    stage="security",
                )
            )
            return errors

        # --- 2. Empty payload ---
        size = len(data)
        if size == 0:
            errors.append(
                IngestError(
                    code=ErrorCode.E_UPLOAD_EMPTY,
                    message="Archive payload is empty (0 bytes)",
                    stage="security",
                )
            )
            return errors

        # --- 3. Size limit ---
        max_bytes = self.config.max_archive_size_mb * 1024 * 1024
        if size > max_bytes:
            errors.append(
                IngestError(
                    code=ErrorCode.E_SECURITY_TOO_LARGE,
                    message=(
                        f"Archive size {size} bytes exceeds limit of "
                        f"{max_bytes} bytes ({self.config.max_archive_size_mb} MB)"
                    ),
                    stage="security",
                )
            )
            return errors

        # --- 4. Large archive warning ---
        large_threshold = self.config.large_archive_warning_mb * 1024 * 1024
        if size > large_threshold:
            errors.append(
                IngestError(
                    code=ErrorCode.W_LARGE_ARCHIVE,
                    message=(
                        f"Archive is {size / (1024 * 1024):.1f} MB "
                        f"(> {self.config.large_archive_warning_mb} MB)"
                    ),
                    stage="security",
                    recoverable=True,
                )
            )

        # --- 5. ZIP signature ---
        if data[:4] not in _ZIP_MAGICS:
            errors.append(
                IngestError(
                    code=ErrorCode.E_SECURITY_BAD_MAGIC,
                    message="Payload does not start with a ZIP signature",
                    stage="security",
                )
            )
            return errors

        return errors
