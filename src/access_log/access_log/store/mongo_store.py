from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from pymongo import DESCENDING, ReturnDocument

from ..common.datetime_utils import now_local, truncate_to_millis
from ..core.constants import LOG_LIST_LIMIT, LOGS_COLLECTION, USERS_COLLECTION
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mongo_base import exact_ci, object_id_or_none, store_errors
from ..logs.model import AttendanceLog, LogFilter
from ..users.model import User
from .repository import RecordStore


def user_from_doc(doc: Dict[str, Any]) -> User:
    return User(
        user_id=str(doc["_id"]),
        name=doc["name"],
        id_number=doc["idNumber"],
        role=Role(doc.get("role") or Role.USER.value),
        date_created=doc.get("dateCreated") or doc.get("createdAt"),
        password_hash=doc.get("password"),
    )


def log_from_doc(doc: Dict[str, Any]) -> AttendanceLog:
    return AttendanceLog(
        log_id=str(doc["_id"]),
        time_in=doc["timeIn"],
        time_out=doc.get("timeOut"),
        user_name=doc["userName"],
        user_id_number=doc["userIdNumber"],
        rfid_scanner_id=doc["rfidScannerId"],
    )


def log_query(log_filter: LogFilter) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if log_filter.badge_id:
        query["userIdNumber"] = log_filter.badge_id
    if log_filter.scanner_id:
        query["rfidScannerId"] = log_filter.scanner_id
    if log_filter.time_from is not None or log_filter.time_to is not None:
        bounds: Dict[str, Any] = {}
        if log_filter.time_from is not None:
            bounds["$gte"] = log_filter.time_from
        if log_filter.time_to is not None:
            bounds["$lte"] = log_filter.time_to
        query["timeIn"] = bounds
    return query


class MongoRecordStore(RecordStore):
    """Durable store over the ``users`` and ``logs`` collections.

    Note: BSON dates keep millisecond precision, so timestamps are truncated
    before writing and the returned entities match what a later read yields.
    """

    def __init__(self, conn: DatabaseConnection, *, clock: Callable[[], datetime] = now_local):
        self._conn = conn
        self._clock = clock

    @property
    def _users(self):
        return self._conn.db[USERS_COLLECTION]

    @property
    def _logs(self):
        return self._conn.db[LOGS_COLLECTION]

    def _now(self) -> datetime:
        return truncate_to_millis(self._clock())

    # Users

    def list_users(self) -> Sequence[User]:
        with store_errors("list users"):
            docs = list(self._users.find().sort("dateCreated", DESCENDING))
        return [user_from_doc(d) for d in docs]

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        with store_errors("get user"):
            doc = self._users.find_one({"_id": oid})
        return user_from_doc(doc) if doc else None

    def get_user_by_badge(self, badge_id: str) -> Optional[User]:
        with store_errors("get user by badge"):
            doc = self._users.find_one({"idNumber": exact_ci(badge_id or "")})
        return user_from_doc(doc) if doc else None

    def create_user(
        self,
        *,
        name: str,
        id_number: str,
        role: Role,
        password_hash: Optional[str] = None,
    ) -> User:
        now = self._now()
        doc: Dict[str, Any] = {
            "name": name,
            "idNumber": id_number,
            "role": role.value,
            "dateCreated": now,
            "createdAt": now,
            "updatedAt": now,
        }
        if password_hash:
            doc["password"] = password_hash
        with store_errors("create user"):
            result = self._users.insert_one(doc)
        doc["_id"] = result.inserted_id
        return user_from_doc(doc)

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        role: Optional[Role] = None,
        password_hash: Optional[str] = None,
    ) -> Optional[User]:
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        changes: Dict[str, Any] = {"updatedAt": self._now()}
        if name is not None:
            changes["name"] = name
        if role is not None:
            changes["role"] = role.value
        if password_hash is not None:
            changes["password"] = password_hash
        with store_errors("update user"):
            doc = self._users.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        return user_from_doc(doc) if doc else None

    def delete_user(self, user_id: str) -> Optional[User]:
        oid = object_id_or_none(user_id)
        if oid is None:
            return None
        with store_errors("delete user"):
            doc = self._users.find_one_and_delete({"_id": oid})
        return user_from_doc(doc) if doc else None

    # Logs

    def list_logs(self, log_filter: Optional[LogFilter] = None) -> Sequence[AttendanceLog]:
        query = log_query(log_filter or LogFilter())
        with store_errors("list logs"):
            docs = list(self._logs.find(query).sort("timeIn", DESCENDING).limit(LOG_LIST_LIMIT))
        return [log_from_doc(d) for d in docs]

    def get_log_by_id(self, log_id: str) -> Optional[AttendanceLog]:
        oid = object_id_or_none(log_id)
        if oid is None:
            return None
        with store_errors("get log"):
            doc = self._logs.find_one({"_id": oid})
        return log_from_doc(doc) if doc else None

    def create_log(
        self,
        *,
        time_in: datetime,
        user_name: str,
        user_id_number: str,
        rfid_scanner_id: str,
        time_out: Optional[datetime] = None,
    ) -> AttendanceLog:
        now = self._now()
        doc: Dict[str, Any] = {
            "timeIn": truncate_to_millis(time_in),
            "timeOut": truncate_to_millis(time_out) if time_out else None,
            "userName": user_name,
            "userIdNumber": user_id_number,
            "rfidScannerId": rfid_scanner_id,
            "createdAt": now,
            "updatedAt": now,
        }
        with store_errors("create log"):
            result = self._logs.insert_one(doc)
        doc["_id"] = result.inserted_id
        return log_from_doc(doc)

    def find_open_log(self, badge_id: str, scanner_id: str) -> Optional[AttendanceLog]:
        with store_errors("find open log"):
            doc = self._logs.find_one(
                {"userIdNumber": badge_id, "rfidScannerId": scanner_id, "timeOut": None},
                sort=[("timeIn", DESCENDING)],
            )
        return log_from_doc(doc) if doc else None

    def save_log(self, log: AttendanceLog) -> AttendanceLog:
        oid = object_id_or_none(log.log_id)
        if oid is None:
            return log
        time_in = truncate_to_millis(log.time_in)
        time_out = truncate_to_millis(log.time_out) if log.time_out else None
        with store_errors("save log"):
            self._logs.update_one(
                {"_id": oid},
                {
                    "$set": {
                        "timeIn": time_in,
                        "timeOut": time_out,
                        "userName": log.user_name,
                        "userIdNumber": log.user_id_number,
                        "rfidScannerId": log.rfid_scanner_id,
                        "updatedAt": self._now(),
                    }
                },
            )
        return AttendanceLog(
            log_id=log.log_id,
            time_in=time_in,
            time_out=time_out,
            user_name=log.user_name,
            user_id_number=log.user_id_number,
            rfid_scanner_id=log.rfid_scanner_id,
        )

    def close_open_logs(self, cutoff: datetime) -> int:
        cutoff = truncate_to_millis(cutoff)
        with store_errors("close open logs"):
            result = self._logs.update_many(
                {"timeOut": None, "timeIn": {"$lte": cutoff}},
                {"$set": {"timeOut": cutoff, "updatedAt": self._now()}},
            )
        return int(result.modified_count)
