"""Wall-clock label normalization.

The backend sends event times as Pacific wall-clock labels with no year
("Sep 28" / "4:30 AM"). This module turns them into absolute UTC instants.

Timezone identifiers accepted wherever a zone is configurable:
  - None / "local" / "system" -> the machine's local timezone
  - "UTC" / "Z" / "GMT"
  - fixed offsets, e.g. "-08:00", "+0530"
  - IANA names, e.g. "America/Los_Angeles" (DST-aware via zoneinfo)
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from event_horizon.errors import MalformedTimeLabel

TzLike = Union[str, dt.tzinfo, None]

# Legacy fixed offset: Pacific Standard Time, no DST.
PACIFIC_FIXED = dt.timezone(dt.timedelta(hours=-8), "PST")

ALL_DAY_LABEL = "All Day"

_MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_DATE_LABEL_RE = re.compile(r"^\s*([A-Za-z]{3,})\.?\s+(\d{1,2})\s*$")
_CLOCK_LABEL_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")


def normalize_tz_name(name: Optional[str]) -> str:
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"
    low = s.lower()
    if low in {"local", "system"}:
        return "local"
    if low in {"utc", "z", "gmt"}:
        return "UTC"
    return s


def resolve_tz(name: TzLike) -> Optional[dt.tzinfo]:
    """Resolve a timezone identifier into a tzinfo.

    Returns None for the machine's local zone so callers can let
    ``datetime.astimezone`` apply the system's own DST rules.
    Raises ValueError for unknown identifiers.
    """
    if isinstance(name, dt.tzinfo):
        return name

    tz_name = normalize_tz_name(name)
    if tz_name == "local":
        return None
    if tz_name == "UTC":
        return dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def localize(naive: dt.datetime, tz: Optional[dt.tzinfo]) -> dt.datetime:
    """Attach ``tz`` (None = system local) to a naive wall-clock time and return UTC."""
    if tz is None:
        return naive.astimezone(dt.timezone.utc)
    return naive.replace(tzinfo=tz).astimezone(dt.timezone.utc)


def to_zone(instant: dt.datetime, tz: TzLike) -> dt.datetime:
    """Render an instant in a display zone."""
    resolved = resolve_tz(tz)
    if resolved is None:
        return instant.astimezone()
    return instant.astimezone(resolved)


def parse_date_label(label: str) -> Tuple[int, int]:
    """Parse ``"Sep 28"`` into ``(month, day)`` with month in 1-12."""
    if not isinstance(label, str):
        raise MalformedTimeLabel(label, "date label must be a string")
    m = _DATE_LABEL_RE.match(label)
    if not m:
        raise MalformedTimeLabel(label, "expected '<Mon> <day>'")

    word = m.group(1).lower()
    month = next((i for i, full in enumerate(_MONTHS, start=1) if full.startswith(word)), None)
    if month is None:
        raise MalformedTimeLabel(label, f"unknown month {m.group(1)!r}")

    day = int(m.group(2))
    if not 1 <= day <= 31:
        raise MalformedTimeLabel(label, "day must be 1-31")
    return month, day


def parse_clock_label(label: str) -> Tuple[int, int]:
    """Parse ``"4:30 PM"`` into 24-hour ``(hour, minute)``."""
    if not isinstance(label, str):
        raise MalformedTimeLabel(label, "time label must be a string")
    m = _CLOCK_LABEL_RE.match(label)
    if not m:
        raise MalformedTimeLabel(label, "expected '<h>:<mm> AM|PM'")

    hour, minute = int(m.group(1)), int(m.group(2))
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise MalformedTimeLabel(label, "clock out of range")

    pm = m.group(3).upper() == "PM"
    if hour == 12:
        hour = 12 if pm else 0
    elif pm:
        hour += 12
    return hour, minute


def is_all_day_label(label: object) -> bool:
    return isinstance(label, str) and label.strip().lower() == ALL_DAY_LABEL.lower()


def calendar_date(year: int, month: int, day: int) -> dt.date:
    """Date arithmetic that rolls impossible days forward ("Feb 30" -> Mar 2)."""
    return dt.date(year, month, 1) + dt.timedelta(days=day - 1)


def normalize(
    date_label: str,
    start_time_label: str,
    all_day: bool,
    reference_year: int,
    *,
    source_tz: TzLike = PACIFIC_FIXED,
    local_tz: TzLike = None,
    roll_over: bool = False,
    now: Optional[dt.datetime] = None,
) -> dt.datetime:
    """Turn a wall-clock label pair into a UTC instant.

    All-day events land on local midnight (``local_tz``) with no source
    offset. Timed events are read in ``source_tz`` (fixed UTC-8 unless an
    IANA zone is given) and converted to UTC.

    With ``roll_over=True`` a date that has already passed relative to
    ``now`` is moved to ``reference_year + 1``. All-day dates pass once
    their calendar day is over; timed events pass at their start.
    """
    month, day = parse_date_label(date_label)

    if all_day or is_all_day_label(start_time_label):
        tz = resolve_tz(local_tz)
        hour = minute = 0
        timed = False
    else:
        hour, minute = parse_clock_label(start_time_label)
        tz = resolve_tz(source_tz)
        timed = True

    def build(year: int) -> dt.datetime:
        d = calendar_date(year, month, day)
        return localize(dt.datetime(d.year, d.month, d.day, hour, minute), tz)

    instant = build(reference_year)
    if not roll_over:
        return instant

    if now is None:
        raise ValueError("roll_over requires an explicit 'now'")
    if now.tzinfo is None:
        raise ValueError("'now' must be timezone-aware")

    if timed:
        passed = instant < now
    else:
        local_now = now.astimezone(tz) if tz is not None else now.astimezone()
        local_start = instant.astimezone(tz) if tz is not None else instant.astimezone()
        passed = local_start.date() < local_now.date()
    return build(reference_year + 1) if passed else instant
