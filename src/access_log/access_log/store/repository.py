from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from ..logs.model import AttendanceLog, LogFilter
from ..users.model import User


class RecordStore(Protocol):
    """Repository interface over users and attendance logs.

    Note (DIP): the scan resolver, the daily sweep and the services depend on
    this interface only. The MongoDB and in-memory stores honour the same
    contract, so callers never check which one is active.
    """

    # Users

    def list_users(self) -> Sequence[User]:
        """All users, newest ``date_created`` first."""

        raise NotImplementedError

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_user_by_badge(self, badge_id: str) -> Optional[User]:
        """Case-insensitive lookup by badge identifier."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        id_number: str,
        role: Role,
        password_hash: Optional[str] = None,
    ) -> User:
        raise NotImplementedError

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        role: Optional[Role] = None,
        password_hash: Optional[str] = None,
    ) -> Optional[User]:
        """Apply the given fields; ``None`` leaves a field untouched."""

        raise NotImplementedError

    def delete_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    # Logs

    def list_logs(self, log_filter: Optional[LogFilter] = None) -> Sequence[AttendanceLog]:
        """Matching logs, newest time-in first, capped at ``LOG_LIST_LIMIT``."""

        raise NotImplementedError

    def get_log_by_id(self, log_id: str) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def create_log(
        self,
        *,
        time_in: datetime,
        user_name: str,
        user_id_number: str,
        rfid_scanner_id: str,
        time_out: Optional[datetime] = None,
    ) -> AttendanceLog:
        raise NotImplementedError

    def find_open_log(self, badge_id: str, scanner_id: str) -> Optional[AttendanceLog]:
        """Open log for the pair, most recent time-in first if several exist."""

        raise NotImplementedError

    def save_log(self, log: AttendanceLog) -> AttendanceLog:
        raise NotImplementedError

    def close_open_logs(self, cutoff: datetime) -> int:
        """Set ``time_out = cutoff`` on every open log with ``time_in <= cutoff``.

        Logs opened after the cutoff stay open. Returns how many were closed.
        """

        raise NotImplementedError
