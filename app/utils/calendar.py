"""Reference-timezone calendar arithmetic for redeem gates and snapshot cycles."""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.constants import WEEKDAY_CODES, WeekdayCodeEnum


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def reference_zone() -> ZoneInfo:
    return _zone(settings.REFERENCE_TIMEZONE)


def ensure_aware(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_civil(value: datetime) -> datetime:
    return ensure_aware(value).astimezone(reference_zone())


def civil_date(value: datetime) -> date:
    return to_civil(value).date()


def civil_hour(value: datetime) -> int:
    return to_civil(value).hour


def weekday_code(value: datetime) -> WeekdayCodeEnum:
    return WEEKDAY_CODES[civil_date(value).weekday()]


def snapshot_cycle_date(value: datetime) -> date:
    """Civil date of the leaderboard day; late-evening instants belong to tomorrow."""
    local = to_civil(value)
    cutoff = (settings.SNAPSHOT_CUTOFF_HOUR, settings.SNAPSHOT_CUTOFF_MINUTE)
    if (local.hour, local.minute) >= cutoff:
        return local.date() + timedelta(days=1)
    return local.date()


def at_civil_time(day: date, hour: int = 0, minute: int = 0) -> datetime:
    """UTC instant of a wall-clock time on a civil date."""
    local = datetime.combine(day, time(hour, minute), tzinfo=reference_zone())
    return local.astimezone(timezone.utc)


def civil_day_start(value: datetime) -> datetime:
    return at_civil_time(civil_date(value))


def week_start(value: datetime) -> datetime:
    """UTC instant of the civil Monday midnight that opens the current week."""
    today = civil_date(value)
    return at_civil_time(today - timedelta(days=today.weekday()))


def is_within_window(day: date, start_date: Optional[date], end_date: Optional[date]) -> bool:
    if start_date is not None and day < start_date:
        return False
    if end_date is not None and day > end_date:
        return False
    return True


def format_civil_clock(hour: int, minute: int = 0) -> str:
    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"
