"""ingestkit-core -- Shared primitives for the ingestkit framework.

Re-exports all public types: errors, models, and utilities.
"""

from ingestkit_core.errors import BaseIngestError, CoreErrorCode
from ingestkit_core.idempotency import compute_ingest_key
from ingestkit_core.models import IngestKey

__all__ = [
    # Errors
    "CoreErrorCode",
    "BaseIngestError",
    # Models
    "IngestKey",
    # Idempotency
    "compute_ingest_key",
]
