"""
Date range helpers for summary queries.

Ranges are computed in the timezone of `now` (local time by default) and
are inclusive: the end is the last millisecond of the final day.
"""

import calendar
from datetime import datetime, time, timedelta
from typing import Optional

from budgie.config import DEFAULT_WEEK_START_DAY

DateRange = tuple[datetime, datetime]

END_OF_DAY = time(23, 59, 59, 999000)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now().astimezone()


def _day_bounds(day: datetime) -> DateRange:
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    end = day.replace(
        hour=END_OF_DAY.hour,
        minute=END_OF_DAY.minute,
        second=END_OF_DAY.second,
        microsecond=END_OF_DAY.microsecond,
    )
    return start, end


def get_today_range(now: Optional[datetime] = None) -> DateRange:
    """Start and end of the current day."""
    return _day_bounds(_now(now))


def get_current_week_range(
    now: Optional[datetime] = None, week_start_day: int = DEFAULT_WEEK_START_DAY
) -> DateRange:
    """
    Start and end of the current week.

    Args:
        now: Reference time (defaults to local now)
        week_start_day: 0 = Sunday through 6 = Saturday
    """
    now = _now(now)
    # datetime.weekday() is Monday-based; week_start_day is Sunday-based
    day_of_week = (now.weekday() + 1) % 7
    diff = (day_of_week - week_start_day + 7) % 7

    start, _ = _day_bounds(now - timedelta(days=diff))
    _, end = _day_bounds(start + timedelta(days=6))
    return start, end


def get_current_month_range(now: Optional[datetime] = None) -> DateRange:
    """Start of the first day to end of the last day of the current month."""
    now = _now(now)
    last_day = calendar.monthrange(now.year, now.month)[1]

    start, _ = _day_bounds(now.replace(day=1))
    _, end = _day_bounds(now.replace(day=last_day))
    return start, end
