from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from .common.datetime_utils import now_local
from .core.constants import DEFAULT_COOLDOWN_MS
from .database.connection import DatabaseConnection, MongoConfig
from .database.fixtures import demo_logs, demo_users
from .logs.daily_reset import DailyResetScheduler
from .logs.service import LogService
from .scans.cooldown import CooldownTracker
from .scans.service import ScanResolver
from .store.memory_store import MemoryRecordStore
from .store.mongo_store import MongoRecordStore
from .store.repository import RecordStore
from .store.switching_store import SwitchingRecordStore
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    store: RecordStore
    cooldown: CooldownTracker

    scan_resolver: ScanResolver
    user_service: UserService
    log_service: LogService
    daily_reset: DailyResetScheduler


def build_container(
    *,
    mongo_uri: Optional[str] = None,
    mongo_db_name: str = "rfid_access",
    cooldown_ms: int = DEFAULT_COOLDOWN_MS,
    clock: Callable[[], datetime] = now_local,
    store: Optional[RecordStore] = None,
    scheduler: Optional[Any] = None,
) -> Container:
    """Wire the object graph.

    ``store`` replaces the Mongo/in-memory pair (tests pass fakes here).
    ``scheduler`` replaces the APScheduler instance behind the daily reset.
    """
    conn = DatabaseConnection(MongoConfig(uri=mongo_uri, database=mongo_db_name))

    if store is None:
        started = clock()
        store = SwitchingRecordStore(
            MongoRecordStore(conn, clock=clock),
            MemoryRecordStore(demo_users(started), demo_logs(started), clock=clock),
            probe=conn.is_connected,
        )

    cooldown = CooldownTracker()
    scan_resolver = ScanResolver(
        store,
        cooldown,
        cooldown_window=timedelta(milliseconds=int(cooldown_ms)),
        clock=clock,
    )

    return Container(
        conn=conn,
        store=store,
        cooldown=cooldown,
        scan_resolver=scan_resolver,
        user_service=UserService(store),
        log_service=LogService(store),
        daily_reset=DailyResetScheduler(store, clock=clock, scheduler=scheduler),
    )
