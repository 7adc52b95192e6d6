from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence

from ..core.enums import Role
from ..logs.model import AttendanceLog, LogFilter
from ..users.model import User
from .repository import RecordStore


class SwitchingRecordStore(RecordStore):
    """Sends each call to the durable store while ``probe()`` says the
    database is connected, otherwise to the volatile store.

    The probe runs per call, so a process started without a database keeps
    working and would pick the durable store up once a connection exists.
    """

    def __init__(self, durable: RecordStore, volatile: RecordStore, *, probe: Callable[[], bool]):
        self._durable = durable
        self._volatile = volatile
        self._probe = probe

    def active(self) -> RecordStore:
        return self._durable if self._probe() else self._volatile

    def list_users(self) -> Sequence[User]:
        return self.active().list_users()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.active().get_user_by_id(user_id)

    def get_user_by_badge(self, badge_id: str) -> Optional[User]:
        return self.active().get_user_by_badge(badge_id)

    def create_user(
        self,
        *,
        name: str,
        id_number: str,
        role: Role,
        password_hash: Optional[str] = None,
    ) -> User:
        return self.active().create_user(name=name, id_number=id_number, role=role, password_hash=password_hash)

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        role: Optional[Role] = None,
        password_hash: Optional[str] = None,
    ) -> Optional[User]:
        return self.active().update_user(user_id, name=name, role=role, password_hash=password_hash)

    def delete_user(self, user_id: str) -> Optional[User]:
        return self.active().delete_user(user_id)

    def list_logs(self, log_filter: Optional[LogFilter] = None) -> Sequence[AttendanceLog]:
        return self.active().list_logs(log_filter)

    def get_log_by_id(self, log_id: str) -> Optional[AttendanceLog]:
        return self.active().get_log_by_id(log_id)

    def create_log(
        self,
        *,
        time_in: datetime,
        user_name: str,
        user_id_number: str,
        rfid_scanner_id: str,
        time_out: Optional[datetime] = None,
    ) -> AttendanceLog:
        return self.active().create_log(
            time_in=time_in,
            user_name=user_name,
            user_id_number=user_id_number,
            rfid_scanner_id=rfid_scanner_id,
            time_out=time_out,
        )

    def find_open_log(self, badge_id: str, scanner_id: str) -> Optional[AttendanceLog]:
        return self.active().find_open_log(badge_id, scanner_id)

    def save_log(self, log: AttendanceLog) -> AttendanceLog:
        return self.active().save_log(log)

    def close_open_logs(self, cutoff: datetime) -> int:
        return self.active().close_open_logs(cutoff)
