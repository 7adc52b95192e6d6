from datetime import datetime

from src.access_log.access_log.core.enums import Role
from src.access_log.access_log.store.memory_store import MemoryRecordStore
from src.access_log.access_log.store.switching_store import SwitchingRecordStore


def test_probe_is_checked_on_every_call():
    now = datetime(2026, 2, 1, 8, 0, 0)
    durable = MemoryRecordStore(clock=lambda: now)
    volatile = MemoryRecordStore(clock=lambda: now)
    connected = {"value": False}
    store = SwitchingRecordStore(durable, volatile, probe=lambda: connected["value"])

    store.create_user(name="Vera", id_number="V1", role=Role.USER)
    assert store.active() is volatile
    assert [u.name for u in volatile.list_users()] == ["Vera"]

    connected["value"] = True
    assert store.active() is durable
    assert store.get_user_by_badge("V1") is None
    store.create_user(name="Dora", id_number="D1", role=Role.USER)
    assert [u.name for u in durable.list_users()] == ["Dora"]


def test_log_operations_are_forwarded():
    now = datetime(2026, 2, 1, 8, 0, 0)
    volatile = MemoryRecordStore(clock=lambda: now)
    store = SwitchingRecordStore(MemoryRecordStore(), volatile, probe=lambda: False)

    log = store.create_log(time_in=now, user_name="A", user_id_number="A1", rfid_scanner_id="S1")

    assert store.find_open_log("A1", "S1") == log
    assert store.get_log_by_id(log.log_id) == log
    assert store.close_open_logs(now) == 1
    assert volatile.get_log_by_id(log.log_id).time_out == now
