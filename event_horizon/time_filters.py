"""Date ranges behind the dashboard's time filter chips."""

from __future__ import annotations

import calendar
import datetime as dt
import enum
from typing import Iterable

from event_horizon.schema import NormalizedEvent
from event_horizon.timezone import TzLike, to_zone


class TimeFilter(str, enum.Enum):
    TODAY = "today"
    TOMORROW = "tomorrow"
    DAY_AFTER = "day-after"
    TWO_DAYS_AFTER = "2-days-after"
    THIS_WEEK = "this-week"
    NEXT_WEEK = "next-week"
    THIS_MONTH = "this-month"
    NEXT_MONTH = "next-month"


_SINGLE_DAY_OFFSETS = {
    TimeFilter.TODAY: 0,
    TimeFilter.TOMORROW: 1,
    TimeFilter.DAY_AFTER: 2,
    TimeFilter.TWO_DAYS_AFTER: 3,
}


def _last_of_month(year: int, month: int) -> dt.date:
    return dt.date(year, month, calendar.monthrange(year, month)[1])


def _next_month(d: dt.date) -> tuple[int, int]:
    return (d.year + 1, 1) if d.month == 12 else (d.year, d.month + 1)


def is_single_day(time_filter: TimeFilter | str) -> bool:
    return TimeFilter(time_filter) in _SINGLE_DAY_OFFSETS


def date_range(time_filter: TimeFilter | str, today: dt.date) -> tuple[dt.date, dt.date]:
    """Inclusive ``(start, end)`` dates for a filter.

    Weeks run Sunday to Saturday; "this" week and month start from today.
    """
    time_filter = TimeFilter(time_filter)

    offset = _SINGLE_DAY_OFFSETS.get(time_filter)
    if offset is not None:
        day = today + dt.timedelta(days=offset)
        return day, day

    days_since_sunday = (today.weekday() + 1) % 7
    if time_filter is TimeFilter.THIS_WEEK:
        return today, today + dt.timedelta(days=6 - days_since_sunday)
    if time_filter is TimeFilter.NEXT_WEEK:
        start = today + dt.timedelta(days=7 - days_since_sunday)
        return start, start + dt.timedelta(days=6)
    if time_filter is TimeFilter.THIS_MONTH:
        return today, _last_of_month(today.year, today.month)

    year, month = _next_month(today)
    return dt.date(year, month, 1), _last_of_month(year, month)


def select_events(
    events: Iterable[NormalizedEvent],
    time_filter: TimeFilter | str,
    today: dt.date,
    tz: TzLike = None,
) -> list[NormalizedEvent]:
    """Events whose date in ``tz`` falls inside the filter's range, sorted by start."""
    start, end = date_range(time_filter, today)
    selected = [event for event in events if start <= to_zone(event.start, tz).date() <= end]
    return sorted(selected, key=lambda event: event.start)
