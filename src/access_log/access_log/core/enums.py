from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles a provisioned badge holder can have."""

    ADMIN = "admin"
    USER = "user"
    GUARD = "guard"
    STAFF = "staff"


class ScanResult(str, Enum):
    """Outcome of resolving one badge scan.

    Values double as the ``action`` field of the scan response, except
    UNKNOWN_USER which is reported through ``userFound: false``.
    """

    UNKNOWN_USER = "unknown"
    DUPLICATE_IGNORED = "ignored"
    SESSION_OPENED = "timeIn"
    SESSION_CLOSED = "timeOut"
