"""Display formatting for durations, event times and horizon countdowns."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from event_horizon.timezone import TzLike, to_zone

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} min"
    hours, remainder = divmod(minutes, 60)
    if remainder == 0:
        return f"{hours}h"
    return f"{hours}h {remainder}m"


def format_clock(moment: dt.datetime) -> str:
    """12-hour clock without a leading zero, e.g. ``4:30 AM``."""
    hour12 = moment.hour % 12 or 12
    period = "AM" if moment.hour < 12 else "PM"
    return f"{hour12}:{moment.minute:02d} {period}"


def format_date_time(instant: dt.datetime, now: dt.datetime, tz: TzLike = None) -> str:
    """``Today (4:30 AM)``, ``Tomorrow (9:00 PM)`` or ``Sep 28 (4:30 AM)``."""
    local = to_zone(instant, tz)
    local_now = to_zone(now, tz)
    time = format_clock(local)

    if local.date() == local_now.date():
        return f"Today ({time})"
    if local.date() == to_zone(now + dt.timedelta(days=1), tz).date():
        return f"Tomorrow ({time})"
    return f"{local.strftime('%b')} {local.day} ({time})"


def parse_horizon_date(value: Optional[str], tz: TzLike = None) -> Optional[dt.date]:
    """Calendar date of a horizon.

    Date-only strings are taken as-is; full ISO datetimes are read in ``tz``.
    Empty values and the literal ``"null"`` mean no date.
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s or s.lower() == "null":
        return None
    if _DATE_ONLY_RE.match(s):
        return dt.date.fromisoformat(s)

    try:
        parsed = dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"Invalid horizon date: {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.date()
    return to_zone(parsed, tz).date()


def horizon_anchor(
    horizon_date: Optional[str], created_at: Optional[str], tz: TzLike = None
) -> Optional[dt.date]:
    """A horizon without its own date falls back to its creation date."""
    return parse_horizon_date(horizon_date, tz) or parse_horizon_date(created_at, tz)


def format_horizon_date(value: Optional[str], tz: TzLike = None) -> str:
    """Short ``Sep 23`` label for a horizon date; empty when there is none."""
    day = parse_horizon_date(value, tz)
    if day is None:
        return ""
    return f"{day.strftime('%b')} {day.day}"


def days_until_label(target: dt.date, today: dt.date) -> str:
    days = (target - today).days
    if days == 0:
        return "Today"
    if days == 1:
        return "In 1 day"
    if days > 1:
        return f"In {days} days"
    if days == -1:
        return "1 day ago"
    return f"{-days} days ago"


def today_in(tz: TzLike, now: Optional[dt.datetime] = None) -> dt.date:
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    return to_zone(now, tz).date()
