from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..common.datetime_utils import end_of_day, next_daily_run, now_local
from ..core.constants import DAILY_RESET_AT, DAILY_RESET_LOOKBACK_HOURS
from ..store.repository import RecordStore

logger = logging.getLogger(__name__)

JOB_ID = "daily-reset"


class DailyResetScheduler:
    """Closes every session still open at the end of the day.

    Fires every day at 00:00:05 local time through a cron trigger, so DST
    changes do not move it off midnight. Runs missed while the process was
    down are not caught up.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        clock: Callable[[], datetime] = now_local,
        scheduler: Optional[Any] = None,
    ):
        self._store = store
        self._clock = clock
        self._scheduler = scheduler or BackgroundScheduler(
            job_defaults={"coalesce": True, "max_instances": 1},
        )
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def first_run_at(self, now: Optional[datetime] = None) -> datetime:
        return next_daily_run(now or self._clock(), DAILY_RESET_AT)

    @staticmethod
    def cutoff_for(now: datetime) -> datetime:
        """End of the day being closed out.

        Taken from the fire time minus a few hours: a run just after midnight
        closes the day that just ended, and a late run closes its own day.
        Sessions opened after the cutoff are left open by the store.
        """
        return end_of_day((now - timedelta(hours=DAILY_RESET_LOOKBACK_HOURS)).date())

    def sweep(self, now: Optional[datetime] = None) -> int:
        now = now or self._clock()
        cutoff = self.cutoff_for(now)
        closed = self._store.close_open_logs(cutoff)
        logger.info("Closed %d open logs at end of day (cutoff=%s)", closed, cutoff.isoformat())
        return closed

    def _run(self) -> None:
        try:
            self.sweep()
        except Exception:
            logger.exception("Daily close of open logs failed")

    def start(self) -> datetime:
        first = self.first_run_at()
        self._scheduler.add_job(
            self._run,
            "cron",
            hour=DAILY_RESET_AT.hour,
            minute=DAILY_RESET_AT.minute,
            second=DAILY_RESET_AT.second,
            id=JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        self._started = True
        logger.info("Daily reset scheduled, first run at %s", first.isoformat())
        return first

    def shutdown(self) -> None:
        if self._started:
            self._scheduler.shutdown(wait=False)
            self._started = False
