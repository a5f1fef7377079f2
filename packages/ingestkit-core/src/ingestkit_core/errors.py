"""Shared error codes and base error model for the ingestkit framework.

``CoreErrorCode`` contains the parse error codes common to all ingestkit
packages.  ``BaseIngestError`` is a Pydantic model that each package extends
with its own location field (e.g. ``entry_name`` for archive members).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class CoreErrorCode(str, Enum):
    """Error codes shared across all ingestkit packages.

    Each package maintains its own *complete* ``ErrorCode`` enum that includes
    both the shared codes here and package-specific codes.  Values equal their
    names so they are stable strings suitable for metrics and alerting.
    """

    E_PARSE_CORRUPT = "E_PARSE_CORRUPT"
    E_PARSE_PASSWORD = "E_PARSE_PASSWORD"
    E_PARSE_EMPTY = "E_PARSE_EMPTY"


class BaseIngestError(BaseModel):
    """Base structured error with code, message, and context.

    Each package extends this model with a location field specific to its
    input type.  The ``code`` field is typed as ``str`` so it accepts any
    package-specific ``ErrorCode`` enum member.
    """

    code: str
    message: str
    stage: str | None = None
    recoverable: bool = False
