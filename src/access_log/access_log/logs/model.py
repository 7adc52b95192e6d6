from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one badge session on one scanner.

    ``user_name`` is a snapshot taken when the session opened; later renames of
    the user do not touch existing logs.
    """

    log_id: str
    time_in: datetime
    time_out: Optional[datetime]
    user_name: str
    user_id_number: str
    rfid_scanner_id: str

    @property
    def is_open(self) -> bool:
        return self.time_out is None

    def to_dict(self) -> dict:
        return {
            "_id": self.log_id,
            "timeIn": to_iso(self.time_in),
            "timeOut": to_iso(self.time_out),
            "userName": self.user_name,
            "userIdNumber": self.user_id_number,
            "rfidScannerId": self.rfid_scanner_id,
        }


@dataclass(frozen=True)
class LogFilter:
    """Query for listing logs; ``time_from``/``time_to`` bound time-in inclusively."""

    badge_id: Optional[str] = None
    scanner_id: Optional[str] = None
    time_from: Optional[datetime] = None
    time_to: Optional[datetime] = None

    def matches(self, log: AttendanceLog) -> bool:
        if self.badge_id and log.user_id_number != self.badge_id:
            return False
        if self.scanner_id and log.rfid_scanner_id != self.scanner_id:
            return False
        if self.time_from is not None and log.time_in < self.time_from:
            return False
        if self.time_to is not None and log.time_in > self.time_to:
            return False
        return True
