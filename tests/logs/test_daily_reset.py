from __future__ import annotations

from datetime import datetime, timedelta

from src.access_log.access_log.logs.daily_reset import JOB_ID, DailyResetScheduler
from src.access_log.access_log.store.memory_store import MemoryRecordStore


class FakeScheduler:
    def __init__(self):
        self.jobs: list[tuple] = []
        self.running = False

    def add_job(self, func, trigger, **kwargs):
        self.jobs.append((func, trigger, kwargs))

    def start(self):
        self.running = True

    def shutdown(self, wait=True):
        self.running = False


class FailingStore:
    def close_open_logs(self, cutoff):
        raise RuntimeError("database went away")


def test_first_run_is_next_five_seconds_past_midnight():
    reset = DailyResetScheduler(MemoryRecordStore(), scheduler=FakeScheduler())

    assert reset.first_run_at(datetime(2026, 2, 1, 8, 30)) == datetime(2026, 2, 2, 0, 0, 5)
    assert reset.first_run_at(datetime(2026, 2, 1, 0, 0, 1)) == datetime(2026, 2, 1, 0, 0, 5)
    assert reset.first_run_at(datetime(2026, 2, 1, 0, 0, 5)) == datetime(2026, 2, 2, 0, 0, 5)


def test_start_registers_a_daily_cron_job():
    scheduler = FakeScheduler()
    reset = DailyResetScheduler(MemoryRecordStore(), clock=lambda: datetime(2026, 2, 1, 22, 0), scheduler=scheduler)

    first = reset.start()

    assert first == datetime(2026, 2, 2, 0, 0, 5)
    assert scheduler.running and reset.started
    func, trigger, kwargs = scheduler.jobs[0]
    assert trigger == "cron"
    assert (kwargs["hour"], kwargs["minute"], kwargs["second"]) == (0, 0, 5)
    assert kwargs["id"] == JOB_ID

    reset.shutdown()
    assert not scheduler.running
    assert not reset.started


def test_sweep_closes_yesterdays_sessions_at_end_of_that_day():
    yesterday = datetime(2026, 2, 1, 17, 0)
    store = MemoryRecordStore(clock=lambda: yesterday)
    open_log = store.create_log(time_in=yesterday, user_name="Bob Santos", user_id_number="B2002", rfid_scanner_id="S1")
    closed_log = store.create_log(
        time_in=yesterday - timedelta(hours=8),
        time_out=yesterday - timedelta(hours=7),
        user_name="Bob Santos",
        user_id_number="B2002",
        rfid_scanner_id="S1",
    )
    reset = DailyResetScheduler(store, scheduler=FakeScheduler())

    assert reset.sweep(datetime(2026, 2, 2, 0, 0, 5)) == 1

    assert store.get_log_by_id(open_log.log_id).time_out == datetime(2026, 2, 1, 23, 59, 59, 999000)
    assert store.get_log_by_id(closed_log.log_id).time_out == yesterday - timedelta(hours=7)
    assert store.find_open_log("B2002", "S1") is None


def test_scheduled_run_logs_store_failures(caplog):
    reset = DailyResetScheduler(FailingStore(), clock=lambda: datetime(2026, 2, 2, 0, 0, 5), scheduler=FakeScheduler())

    reset._run()

    assert "Daily close of open logs failed" in caplog.text


def test_late_evening_sweep_closes_its_own_day():
    opened_at = datetime(2026, 11, 1, 9, 0)
    store = MemoryRecordStore(clock=lambda: opened_at)
    log = store.create_log(time_in=opened_at, user_name="Bob Santos", user_id_number="B2002", rfid_scanner_id="S1")
    reset = DailyResetScheduler(store, scheduler=FakeScheduler())

    assert reset.sweep(datetime(2026, 11, 1, 23, 0, 5)) == 1

    closed = store.get_log_by_id(log.log_id)
    assert closed.time_out == datetime(2026, 11, 1, 23, 59, 59, 999000)
    assert closed.time_out >= closed.time_in


def test_session_opened_just_after_midnight_stays_open():
    opened_at = datetime(2026, 2, 2, 0, 0, 2)
    store = MemoryRecordStore(clock=lambda: opened_at)
    log = store.create_log(time_in=opened_at, user_name="Guard Maria", user_id_number="G3003", rfid_scanner_id="S2")
    reset = DailyResetScheduler(store, scheduler=FakeScheduler())

    assert reset.sweep(datetime(2026, 2, 2, 0, 0, 5)) == 0

    assert store.get_log_by_id(log.log_id).time_out is None
    assert store.find_open_log("G3003", "S2") == log
