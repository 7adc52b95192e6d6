from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional


class CooldownTracker:
    """Last accepted scan time per badge, for the lifetime of the process.

    Not synchronized: scans for one badge are expected to be handled one at a
    time.
    """

    def __init__(self) -> None:
        self._last_taps: Dict[str, datetime] = {}

    @staticmethod
    def key_for(badge_id: str) -> str:
        return (badge_id or "").lower()

    def last_accepted(self, key: str) -> Optional[datetime]:
        return self._last_taps.get(key)

    def record_accepted(self, key: str, at: datetime) -> None:
        self._last_taps[key] = at

    def __len__(self) -> int:
        return len(self._last_taps)
