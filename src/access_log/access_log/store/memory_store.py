from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import LOG_LIST_LIMIT
from ..core.enums import Role
from ..logs.model import AttendanceLog, LogFilter
from ..users.model import User
from .repository import RecordStore


def _new_id(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:12]}"


class MemoryRecordStore(RecordStore):
    """Volatile store kept in process memory.

    Used when no database connection is live; contents are lost on restart.
    """

    def __init__(
        self,
        users: Iterable[User] = (),
        logs: Iterable[AttendanceLog] = (),
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users: list[User] = list(users)
        self._logs: list[AttendanceLog] = list(logs)
        self._clock = clock

    def list_users(self) -> Sequence[User]:
        return sorted(self._users, key=lambda u: u.date_created, reverse=True)

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.user_id == user_id), None)

    def get_user_by_badge(self, badge_id: str) -> Optional[User]:
        wanted = (badge_id or "").lower()
        return next((u for u in self._users if (u.id_number or "").lower() == wanted), None)

    def create_user(
        self,
        *,
        name: str,
        id_number: str,
        role: Role,
        password_hash: Optional[str] = None,
    ) -> User:
        user = User(
            user_id=_new_id("u"),
            name=name,
            id_number=id_number,
            role=role,
            date_created=self._clock(),
            password_hash=password_hash,
        )
        self._users.insert(0, user)
        return user

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        role: Optional[Role] = None,
        password_hash: Optional[str] = None,
    ) -> Optional[User]:
        for idx, user in enumerate(self._users):
            if user.user_id != user_id:
                continue
            changes = {
                k: v
                for k, v in (("name", name), ("role", role), ("password_hash", password_hash))
                if v is not None
            }
            self._users[idx] = replace(user, **changes)
            return self._users[idx]
        return None

    def delete_user(self, user_id: str) -> Optional[User]:
        for idx, user in enumerate(self._users):
            if user.user_id == user_id:
                return self._users.pop(idx)
        return None

    def list_logs(self, log_filter: Optional[LogFilter] = None) -> Sequence[AttendanceLog]:
        log_filter = log_filter or LogFilter()
        out = [log for log in self._logs if log_filter.matches(log)]
        out.sort(key=lambda log: log.time_in, reverse=True)
        return out[:LOG_LIST_LIMIT]

    def get_log_by_id(self, log_id: str) -> Optional[AttendanceLog]:
        return next((log for log in self._logs if log.log_id == log_id), None)

    def create_log(
        self,
        *,
        time_in: datetime,
        user_name: str,
        user_id_number: str,
        rfid_scanner_id: str,
        time_out: Optional[datetime] = None,
    ) -> AttendanceLog:
        log = AttendanceLog(
            log_id=_new_id("l"),
            time_in=time_in,
            time_out=time_out,
            user_name=user_name,
            user_id_number=user_id_number,
            rfid_scanner_id=rfid_scanner_id,
        )
        self._logs.insert(0, log)
        return log

    def find_open_log(self, badge_id: str, scanner_id: str) -> Optional[AttendanceLog]:
        candidates = [
            log
            for log in self._logs
            if log.is_open and log.user_id_number == badge_id and log.rfid_scanner_id == scanner_id
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda log: log.time_in)

    def save_log(self, log: AttendanceLog) -> AttendanceLog:
        for idx, existing in enumerate(self._logs):
            if existing.log_id == log.log_id:
                self._logs[idx] = log
                break
        return log

    def close_open_logs(self, cutoff: datetime) -> int:
        closed = 0
        for idx, log in enumerate(self._logs):
            if log.is_open and log.time_in <= cutoff:
                self._logs[idx] = replace(log, time_out=cutoff)
                closed += 1
        return closed
