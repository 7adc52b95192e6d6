from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.access_log.access_log.core.enums import ScanResult
from src.access_log.access_log.core.exceptions import InvalidInput, StoreUnavailable
from src.access_log.access_log.scans.cooldown import CooldownTracker
from src.access_log.access_log.scans.service import ScanResolver
from src.access_log.access_log.store.memory_store import MemoryRecordStore


class RecordingStore:
    """Wraps a store and counts write calls."""

    def __init__(self, inner: MemoryRecordStore):
        self._inner = inner
        self.writes: list[str] = []

    def get_user_by_badge(self, badge_id):
        return self._inner.get_user_by_badge(badge_id)

    def find_open_log(self, badge_id, scanner_id):
        return self._inner.find_open_log(badge_id, scanner_id)

    def list_logs(self, log_filter=None):
        return self._inner.list_logs(log_filter)

    def create_log(self, **fields):
        self.writes.append("create_log")
        return self._inner.create_log(**fields)

    def save_log(self, log):
        self.writes.append("save_log")
        return self._inner.save_log(log)


class BrokenStore:
    def get_user_by_badge(self, badge_id):
        raise StoreUnavailable("get user by badge failed: connection reset")


def _resolver(store, cooldown=None, window_ms=3000):
    return ScanResolver(store, cooldown if cooldown is not None else CooldownTracker(), cooldown_window=timedelta(milliseconds=window_ms))


def test_unknown_badge_writes_nothing(memory_store, fixed_now):
    store = RecordingStore(memory_store)
    cooldown = CooldownTracker()
    before = len(memory_store.list_logs())

    outcome = _resolver(store, cooldown).resolve_scan("Z9999", "SCANNER-1", now=fixed_now)

    assert outcome.result == ScanResult.UNKNOWN_USER
    assert outcome.user_found is False
    assert outcome.log is None
    assert store.writes == []
    assert len(cooldown) == 0
    assert len(memory_store.list_logs()) == before


def test_full_scenario_open_ignore_close(memory_store, fixed_now):
    resolver = _resolver(memory_store)

    opened = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now)
    assert opened.result == ScanResult.SESSION_OPENED
    assert opened.log.time_in == fixed_now
    assert opened.log.time_out is None

    ignored = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=1))
    assert ignored.result == ScanResult.DUPLICATE_IGNORED
    assert ignored.log is None
    assert ignored.user.name == "Alice Johnson"

    closed = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=5))
    assert closed.result == ScanResult.SESSION_CLOSED
    assert closed.log.log_id == opened.log.log_id
    assert closed.log.time_in == fixed_now
    assert closed.log.time_out == fixed_now + timedelta(seconds=5)

    stored = memory_store.get_log_by_id(opened.log.log_id)
    assert stored.time_out == fixed_now + timedelta(seconds=5)


def test_two_scans_inside_window_mutate_once(memory_store, fixed_now):
    store = RecordingStore(memory_store)
    resolver = _resolver(store)

    resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now)
    second = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(milliseconds=2999))

    assert second.result == ScanResult.DUPLICATE_IGNORED
    assert store.writes == ["create_log"]


def test_ignored_taps_do_not_move_the_cooldown_anchor(memory_store, fixed_now):
    cooldown = CooldownTracker()
    resolver = _resolver(memory_store, cooldown)

    resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now)
    resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=1))
    resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=2))

    assert cooldown.last_accepted("a1001") == fixed_now
    third = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=3))
    assert third.result == ScanResult.SESSION_CLOSED


def test_badge_lookup_and_cooldown_ignore_case(memory_store, fixed_now):
    resolver = _resolver(memory_store)

    opened = resolver.resolve_scan("a1001", "SCANNER-1", now=fixed_now)
    assert opened.result == ScanResult.SESSION_OPENED
    assert opened.log.user_id_number == "A1001"

    ignored = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=1))
    assert ignored.result == ScanResult.DUPLICATE_IGNORED

    closed = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now + timedelta(seconds=10))
    assert closed.log.log_id == opened.log.log_id


def test_sessions_are_tracked_per_scanner(memory_store, fixed_now):
    resolver = _resolver(memory_store)

    first = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now)
    other = resolver.resolve_scan("A1001", "SCANNER-2", now=fixed_now + timedelta(seconds=10))

    assert other.result == ScanResult.SESSION_OPENED
    assert other.log.log_id != first.log.log_id
    assert memory_store.find_open_log("A1001", "SCANNER-1").log_id == first.log.log_id


def test_log_snapshots_user_name(memory_store, fixed_now):
    resolver = _resolver(memory_store)
    opened = resolver.resolve_scan("A1001", "SCANNER-1", now=fixed_now)

    memory_store.update_user("u1", name="Alice Smith")

    assert memory_store.get_log_by_id(opened.log.log_id).user_name == "Alice Johnson"


@pytest.mark.parametrize("badge, scanner", [("", "SCANNER-1"), ("A1001", ""), ("   ", "SCANNER-1"), (None, "S")])
def test_missing_identifiers_raise_invalid_input(memory_store, fixed_now, badge, scanner):
    with pytest.raises(InvalidInput):
        _resolver(memory_store).resolve_scan(badge, scanner, now=fixed_now)


def test_store_failure_propagates_and_leaves_cooldown_untouched(fixed_now):
    cooldown = CooldownTracker()
    with pytest.raises(StoreUnavailable):
        _resolver(BrokenStore(), cooldown).resolve_scan("A1001", "SCANNER-1", now=fixed_now)
    assert len(cooldown) == 0


def test_clock_is_used_when_now_is_omitted(memory_store):
    at = datetime(2026, 3, 3, 7, 0, 0)
    resolver = ScanResolver(memory_store, CooldownTracker(), clock=lambda: at)

    outcome = resolver.resolve_scan("A1001", "SCANNER-9")

    assert outcome.log.time_in == at
    assert resolver.cooldown_window == timedelta(milliseconds=3000)
