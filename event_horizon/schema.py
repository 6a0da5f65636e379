"""Core data schema for dashboard events."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def to_epoch_ms(instant: datetime) -> int:
    """UTC epoch milliseconds for an aware datetime."""

    if instant.tzinfo is None:
        raise ValueError("Instant must be timezone-aware")
    delta = instant - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(int(ms) / 1000.0, tz=timezone.utc)


class Band(str, enum.Enum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class UrgencyLevel(str, enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"
    FUTURE = "future"
    PAST = "past"


class VacationUrgency(str, enum.Enum):
    IMMEDIATE = "immediate"
    NEAR_TERM = "near-term"
    MEDIUM_TERM = "medium-term"
    LONG_TERM = "long-term"
    FADED = "faded"


class IntervalTone(str, enum.Enum):
    PLAIN = "plain"
    IMMINENT = "imminent"
    SOON = "soon"
    UPCOMING = "upcoming"
    DISTANT = "distant"


@dataclass(frozen=True)
class WallClockEvent:
    """Event as emitted by the backend: Pacific wall-clock labels, no year."""

    title: str
    date_label: str
    start_time_label: str
    duration_minutes: int
    all_day: bool = False
    attendees: tuple[str, ...] = ()
    organizer_email: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class NormalizedEvent:
    """Event anchored to an absolute UTC instant."""

    title: str
    start: datetime
    duration_minutes: int
    all_day: bool = False
    attendees: tuple[str, ...] = ()
    organizer_email: Optional[str] = None
    notes: Optional[str] = None
    event_id: Optional[str] = None

    @property
    def start_ms(self) -> int:
        return to_epoch_ms(self.start)


@dataclass(frozen=True)
class RelativeTime:
    """Structured relative-time result.

    ``value`` is the displayed magnitude in ``band`` units: rounded to the
    nearest half for future hours/days, floored for the past branch.
    ``minutes`` keeps the raw signed minute difference.
    """

    is_past: bool
    band: Band
    value: float
    minutes: int

    @property
    def label(self) -> str:
        m = abs(self.minutes)
        if self.is_past:
            if self.band is Band.MINUTES:
                return f"{m}m ago"
            if self.band is Band.HOURS:
                return f"{m // 60}h {m % 60}m ago"
            return f"{m // 1440}d {(m % 1440) // 60}h ago"

        if self.band is Band.MINUTES:
            return f"In {self.minutes}m"
        unit = "hour" if self.band is Band.HOURS else "day"
        if self.value == 1:
            return f"In 1 {unit}"
        return f"In {_magnitude(self.value)} {unit}s"

    def __str__(self) -> str:
        return self.label


def _magnitude(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{int(value)}.5"


@dataclass(frozen=True)
class HolidayItem:
    name: str
    date_label: str
    time_until: str = ""


@dataclass(frozen=True)
class Bookmark:
    """Bookmarked key event. ``time`` is an ISO datetime or a free-form label."""

    event_title: str
    date: str
    time: str
    duration: int = 0
    attendees: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnhancedHoliday:
    name: str
    date_label: str
    holiday_id: str
    full_date: datetime
    formatted_date: str
    relative: RelativeTime
    days_until: int
    is_past: bool
    is_upcoming: bool
    is_long_weekend: bool
    weekend_type: Optional[str]
    category: str
    has_calendar_conflicts: bool = False
    has_bookmarked_conflicts: bool = False
    time_until: str = ""

    @property
    def formatted_time_until(self) -> str:
        return self.relative.label
