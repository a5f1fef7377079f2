"""Entry selection -- keep archive members that look like ``.xlsx`` workbooks."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ingestkit_archive.archive import ArchiveEntry

ACCEPTED_SUFFIX = ".xlsx"


def is_accepted_name(name: str) -> bool:
    """Return True if *name* is non-empty and ends with ``.xlsx`` (case-insensitive)."""
    return bool(name) and name.lower().endswith(ACCEPTED_SUFFIX)


def select_entries(
    entries: Iterable[ArchiveEntry],
    predicate: Callable[[str], bool] = is_accepted_name,
) -> list[ArchiveEntry]:
    """Filter *entries* to non-directory members whose name passes *predicate*.

    Input order is preserved.  An empty result is a normal outcome, not an
    error; the orchestrator decides what an empty selection means.
    """
    return [e for e in entries if not e.is_directory and predicate(e.name)]
