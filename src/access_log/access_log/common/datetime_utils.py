from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import InvalidInput


def now_local() -> datetime:
    """Current local time.

    Services take a ``clock`` defaulting to this so tests can pin time.
    """
    return datetime.now()


def parse_iso_datetime(value: Optional[str], field_name: str) -> Optional[datetime]:
    """Parse an ISO-8601 query value into a naive local datetime.

    Blank values mean "no bound". Aware values are converted to local time
    because stored timestamps are naive local times.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidInput(f"{field_name} must be an ISO-8601 date or datetime")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def end_of_day(day: date) -> datetime:
    """23:59:59.999 of the given day (millisecond precision, as stored by MongoDB)."""
    return datetime.combine(day, time(23, 59, 59, 999000))


def next_daily_run(now: datetime, at: time) -> datetime:
    candidate = datetime.combine(now.date(), at)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with millisecond precision; naive values are read as local time
    and written with the local UTC offset."""
    if value is None:
        return None
    return value.astimezone().isoformat(timespec="milliseconds")


def truncate_to_millis(value: datetime) -> datetime:
    """MongoDB stores BSON dates with millisecond precision."""
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)
