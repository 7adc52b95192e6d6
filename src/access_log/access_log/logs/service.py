from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..core.exceptions import NotFound
from ..store.repository import RecordStore
from .model import AttendanceLog, LogFilter


class LogService:
    """Use case: read attendance logs (listing with filters, lookup by id)."""

    def __init__(self, store: RecordStore):
        self._store = store

    def list_logs(
        self,
        *,
        badge_id: Optional[str] = None,
        scanner_id: Optional[str] = None,
        time_from: Optional[str] = None,
        time_to: Optional[str] = None,
    ) -> Sequence[AttendanceLog]:
        log_filter = LogFilter(
            badge_id=badge_id or None,
            scanner_id=scanner_id or None,
            time_from=parse_iso_datetime(time_from, "from"),
            time_to=parse_iso_datetime(time_to, "to"),
        )
        return self._store.list_logs(log_filter)

    def get_log(self, log_id: str) -> AttendanceLog:
        log = self._store.get_log_by_id(log_id)
        if not log:
            raise NotFound("Log not found.")
        return log
