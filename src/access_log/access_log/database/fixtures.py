"""Demo data for the in-memory store (and ``scripts/seed_db.py``).

Timestamps are relative to ``now`` so the data always looks recent.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..core.enums import Role
from ..logs.model import AttendanceLog
from ..users.model import User


def demo_users(now: datetime) -> list[User]:
    return [
        User(user_id="u1", name="Alice Johnson", id_number="A1001", role=Role.USER, date_created=now - timedelta(days=10)),
        User(user_id="u2", name="Bob Santos", id_number="B2002", role=Role.STAFF, date_created=now - timedelta(days=5)),
        User(user_id="u3", name="Guard Maria", id_number="G3003", role=Role.GUARD, date_created=now - timedelta(days=2)),
    ]


def demo_logs(now: datetime) -> list[AttendanceLog]:
    return [
        AttendanceLog(
            log_id="l1",
            time_in=now - timedelta(hours=5),
            time_out=now - timedelta(hours=2),
            user_name="Alice Johnson",
            user_id_number="A1001",
            rfid_scanner_id="SCANNER-1",
        ),
        AttendanceLog(
            log_id="l2",
            time_in=now - timedelta(hours=26),
            time_out=now - timedelta(hours=20),
            user_name="Bob Santos",
            user_id_number="B2002",
            rfid_scanner_id="SCANNER-1",
        ),
        AttendanceLog(
            log_id="l3",
            time_in=now - timedelta(hours=1),
            time_out=None,
            user_name="Guard Maria",
            user_id_number="G3003",
            rfid_scanner_id="SCANNER-2",
        ),
    ]
