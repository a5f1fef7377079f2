"""Deterministic ingest-key computation for deduplication.

This module provides :func:`compute_ingest_key`, which produces an
:class:`~ingestkit_core.models.IngestKey` from an in-memory upload.  The
resulting key is fully deterministic: identical content, parser version,
and tenant ID will always yield the same :pyattr:`IngestKey.key` digest.

The package **provides** the key but does **not** enforce any
deduplication policy -- that responsibility belongs to the caller.
"""

from __future__ import annotations

import hashlib

from ingestkit_core.models import IngestKey


def compute_ingest_key(
    data: bytes,
    parser_version: str,
    tenant_id: str | None = None,
    source_uri: str | None = None,
) -> IngestKey:
    """Compute a deterministic ingest key for deduplication.

    Computes a SHA-256 content hash of *data* and combines it with the
    parser version and optional identifiers to produce an
    :class:`IngestKey`.

    Parameters
    ----------
    data:
        Raw bytes of the uploaded payload.
    parser_version:
        Parser version string (e.g. ``"ingestkit_archive:1.0.0"``).
    tenant_id:
        Optional tenant identifier for multi-tenant scenarios.
    source_uri:
        Optional override for the source URI stored in the key.  When
        *None*, ``upload:sha256:<content_hash>`` is used, since uploads
        have no filesystem location.

    Returns
    -------
    IngestKey
        A populated :class:`IngestKey` whose :pyattr:`~IngestKey.key`
        property yields the composite SHA-256 hex digest.
    """
    content_hash = hashlib.sha256(data).hexdigest()

    if source_uri is None:
        source_uri = f"upload:sha256:{content_hash}"

    return IngestKey(
        content_hash=content_hash,
        source_uri=source_uri,
        parser_version=parser_version,
        tenant_id=tenant_id,
    )
