from datetime import date, datetime, timezone

from app.core.constants import WeekdayCodeEnum
from app.utils.calendar import (
    at_civil_time,
    civil_date,
    civil_day_start,
    civil_hour,
    ensure_aware,
    format_civil_clock,
    is_within_window,
    snapshot_cycle_date,
    week_start,
    weekday_code,
)
from tests.helpers.seed import civil


def test_cycle_date_rolls_over_at_half_past_nine():
    before = civil(2026, 10, 21, 21, 29)
    after = civil(2026, 10, 21, 21, 31)
    assert snapshot_cycle_date(before) == date(2026, 10, 21)
    assert snapshot_cycle_date(after) == date(2026, 10, 22)
    assert snapshot_cycle_date(civil(2026, 10, 21, 21, 30)) == date(2026, 10, 22)


def test_cycle_date_uses_reference_time_not_utc():
    # 01:00 UTC on the 22nd is still 21:00 on the 21st in New York
    instant = datetime(2026, 10, 22, 1, 0, tzinfo=timezone.utc)
    assert civil_date(instant) == date(2026, 10, 21)
    assert snapshot_cycle_date(instant) == date(2026, 10, 21)

    late = datetime(2026, 10, 22, 1, 45, tzinfo=timezone.utc)
    assert snapshot_cycle_date(late) == date(2026, 10, 22)


def test_weekday_codes():
    assert weekday_code(civil(2026, 10, 19, 9)) == WeekdayCodeEnum.MONDAY
    assert weekday_code(civil(2026, 10, 20, 9)).value == "t"
    assert weekday_code(civil(2026, 10, 21, 9)).value == "w"
    assert weekday_code(civil(2026, 10, 22, 9)).value == "r"
    assert weekday_code(civil(2026, 10, 24, 9)).value == "sa"
    assert weekday_code(civil(2026, 10, 25, 9)).value == "su"


def test_weekday_follows_civil_date_across_utc_midnight():
    instant = datetime(2026, 10, 22, 2, 0, tzinfo=timezone.utc)
    assert weekday_code(instant) == WeekdayCodeEnum.WEDNESDAY
    assert civil_hour(instant) == 22


def test_naive_datetimes_are_treated_as_utc():
    naive = datetime(2026, 10, 21, 12, 0)
    assert ensure_aware(naive) == datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)
    assert civil_hour(naive) == 8


def test_at_civil_time_tracks_daylight_saving():
    assert at_civil_time(date(2026, 10, 30), 16) == datetime(2026, 10, 30, 20, 0, tzinfo=timezone.utc)
    assert at_civil_time(date(2026, 11, 2), 16) == datetime(2026, 11, 2, 21, 0, tzinfo=timezone.utc)


def test_day_and_week_boundaries():
    now = civil(2026, 10, 21, 17, 0)
    assert civil_day_start(now) == datetime(2026, 10, 21, 4, 0, tzinfo=timezone.utc)
    assert week_start(now) == datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)
    assert week_start(civil(2026, 10, 19, 0, 0)) == datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)


def test_is_within_window_is_inclusive():
    day = date(2026, 10, 21)
    assert is_within_window(day, None, None)
    assert is_within_window(day, date(2026, 10, 21), date(2026, 10, 21))
    assert not is_within_window(day, date(2026, 10, 22), None)
    assert not is_within_window(day, None, date(2026, 10, 20))


def test_format_civil_clock():
    assert format_civil_clock(16) == "4:00 PM"
    assert format_civil_clock(0) == "12:00 AM"
    assert format_civil_clock(12, 5) == "12:05 PM"
