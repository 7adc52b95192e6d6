from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_COOLDOWN_MS
from ..core.enums import ScanResult
from ..store.repository import RecordStore
from .cooldown import CooldownTracker
from .model import ScanOutcome

logger = logging.getLogger(__name__)


class ScanResolver:
    """Use case: turn one badge scan into a time-in, a time-out or nothing.

    Per call at most one log write happens and it is the last store call, so
    a failing store leaves logs and cooldown state untouched.

    Note: two scans of the same badge/scanner pair handled at the same moment
    can both miss the open log and both open a session. The cooldown window
    hides this for repeated taps of one card; nothing else serializes them.
    """

    def __init__(
        self,
        store: RecordStore,
        cooldown: CooldownTracker,
        *,
        cooldown_window: timedelta = timedelta(milliseconds=DEFAULT_COOLDOWN_MS),
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._cooldown = cooldown
        self._window = cooldown_window
        self._clock = clock

    @property
    def cooldown_window(self) -> timedelta:
        return self._window

    def resolve_scan(self, badge_id: str, scanner_id: str, now: Optional[datetime] = None) -> ScanOutcome:
        badge_id = require_non_empty(badge_id, "userIdNumber")
        scanner_id = require_non_empty(scanner_id, "rfidScannerId")
        now = now or self._clock()

        user = self._store.get_user_by_badge(badge_id)
        if user is None:
            logger.info("Scan from unknown badge %s on %s", badge_id, scanner_id)
            return ScanOutcome(result=ScanResult.UNKNOWN_USER)

        # Ignored taps keep the original anchor, so a burst never extends the window.
        key = CooldownTracker.key_for(badge_id)
        last = self._cooldown.last_accepted(key)
        if last is not None and now - last < self._window:
            logger.debug("Ignored duplicate tap for %s on %s", user.id_number, scanner_id)
            return ScanOutcome(result=ScanResult.DUPLICATE_IGNORED, user=user)

        open_log = self._store.find_open_log(user.id_number, scanner_id)
        if open_log is not None:
            log = self._store.save_log(replace(open_log, time_out=now))
            self._cooldown.record_accepted(key, now)
            logger.info("Time out for %s on %s (log %s)", user.id_number, scanner_id, log.log_id)
            return ScanOutcome(result=ScanResult.SESSION_CLOSED, user=user, log=log)

        log = self._store.create_log(
            time_in=now,
            time_out=None,
            user_name=user.name,
            user_id_number=user.id_number,
            rfid_scanner_id=scanner_id,
        )
        self._cooldown.record_accepted(key, now)
        logger.info("Time in for %s on %s (log %s)", user.id_number, scanner_id, log.log_id)
        return ScanOutcome(result=ScanResult.SESSION_OPENED, user=user, log=log)
