"""Archive reader -- list the members of an in-memory ZIP container.

Wraps :mod:`zipfile` over a :class:`io.BytesIO` buffer.  Member bytes are
decompressed lazily by :meth:`ArchiveEntry.read_bytes`, so listing an
archive never inflates its contents.  Any compression method supported by
the interpreter's ``zipfile`` (stored, deflate, bzip2, lzma) is accepted.
"""

from __future__ import annotations

import io
import logging
import zipfile

from pydantic import BaseModel, PrivateAttr

from ingestkit_archive.errors import CorruptArchive

logger = logging.getLogger("ingestkit_archive")

_OPEN_ERRORS = (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError, EOFError)


class ArchiveEntry(BaseModel):
    """One member of an opened archive."""

    name: str
    is_directory: bool
    file_size: int
    compress_size: int

    _archive: zipfile.ZipFile | None = PrivateAttr(default=None)
    _info: zipfile.ZipInfo | None = PrivateAttr(default=None)

    @classmethod
    def from_zipinfo(cls, archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> ArchiveEntry:
        entry = cls(
            name=info.filename,
            is_directory=info.is_dir(),
            file_size=info.file_size,
            compress_size=info.compress_size,
        )
        entry._archive = archive
        entry._info = info
        return entry

    def read_bytes(self) -> bytes:
        """Decompress and return the member's raw bytes.

        Raises whatever :meth:`zipfile.ZipFile.read` raises (bad CRC,
        unsupported compression, closed archive); callers isolate these
        per entry.
        """
        if self._archive is None or self._info is None:
            raise ValueError(f"Entry '{self.name}' is not bound to an open archive")
        return self._archive.read(self._info)


class ArchiveReader:
    """Open raw bytes as a ZIP container and enumerate its members.

    Usable as a context manager; :meth:`close` releases the underlying
    ``ZipFile``.  Entries can only be read while the reader is open.

    Raises
    ------
    CorruptArchive
        If *data* is not a structurally valid ZIP container.
    """

    def __init__(self, data: bytes) -> None:
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data))
        except _OPEN_ERRORS as exc:
            raise CorruptArchive(f"Archive is corrupted: {exc}") from exc

    def entries(self) -> list[ArchiveEntry]:
        """Return one :class:`ArchiveEntry` per member, in central-directory order."""
        return [ArchiveEntry.from_zipinfo(self._zip, info) for info in self._zip.infolist()]

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> ArchiveReader:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def open_archive(data: bytes) -> list[ArchiveEntry]:
    """List the members of *data*.

    The archive is closed before returning, so the entries describe the
    members but cannot be read.  Use :class:`ArchiveReader` to read them.
    """
    with ArchiveReader(data) as reader:
        entries = reader.entries()
    logger.debug("ingestkit_archive | opened archive | members=%d", len(entries))
    return entries
