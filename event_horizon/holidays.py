"""Holiday countdowns, long-weekend detection and schedule conflicts."""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Iterable, Optional, Sequence

from event_horizon.config import Settings
from event_horizon.errors import MalformedTimeLabel
from event_horizon.relative import relative_time
from event_horizon.schema import Bookmark, EnhancedHoliday, HolidayItem, NormalizedEvent
from event_horizon.timezone import ALL_DAY_LABEL, TzLike, localize, normalize, resolve_tz, to_zone

logger = logging.getLogger(__name__)

_FEDERAL = (
    "Labor Day",
    "Columbus Day",
    "Veterans Day",
    "Thanksgiving Day",
    "Christmas Day",
    "New Year's Day",
    "Martin Luther King Jr. Day",
    "Presidents' Day",
    "Memorial Day",
    "Independence Day",
    "Juneteenth",
)
_MAJOR = ("Christmas Eve", "New Year's Eve", "Easter Sunday", "Mother's Day", "Father's Day")
_CULTURAL = ("Halloween", "Valentine's Day", "St. Patrick's Day", "Cinco de Mayo", "Black Friday")

# weekday() -> the two-day break a holiday on that day creates
_LONG_WEEKENDS = {
    0: "friday-monday",
    4: "thursday-friday",
    1: "monday-tuesday",
}


def categorize_holiday(name: str) -> str:
    """Keyword match on the first word of each known holiday name."""

    for category, names in (("federal", _FEDERAL), ("major", _MAJOR), ("cultural", _CULTURAL)):
        if any(known.split(" ")[0] in name for known in names):
            return category
    return "observance"


def long_weekend_type(day: dt.date) -> Optional[str]:
    return _LONG_WEEKENDS.get(day.weekday())


def _bookmark_instant(bookmark: Bookmark, tz: Optional[dt.tzinfo]) -> Optional[dt.datetime]:
    if not bookmark.time or "T" not in bookmark.time:
        return None
    try:
        parsed = dt.datetime.fromisoformat(bookmark.time.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Ignoring bookmark %r with unparseable time %r", bookmark.event_title, bookmark.time)
        return None
    if parsed.tzinfo is None:
        return localize(parsed, tz)
    return parsed


def enhance_holidays(
    items: Iterable[HolidayItem],
    now: dt.datetime,
    *,
    calendar_events: Sequence[NormalizedEvent] = (),
    bookmarks: Sequence[Bookmark] = (),
    local_tz: TzLike = None,
    settings: Optional[Settings] = None,
    skip_malformed: bool = False,
) -> list[EnhancedHoliday]:
    """Attach dates, countdowns and flags to raw holiday labels.

    Holiday labels carry no year: a date already behind ``now`` is read as
    next year's occurrence. A malformed date label raises
    ``MalformedTimeLabel`` unless ``skip_malformed`` is set, in which case
    the holiday is left out and a warning is logged.
    """
    settings = settings or Settings()
    tz_spec = local_tz if local_tz is not None else settings.display_tz
    tz = resolve_tz(tz_spec)
    window = dt.timedelta(days=settings.conflict_window_days)
    reference_year = to_zone(now, tz_spec).year

    bookmark_instants = [
        instant for instant in (_bookmark_instant(b, tz) for b in bookmarks) if instant is not None
    ]

    enhanced: list[EnhancedHoliday] = []
    for index, item in enumerate(items):
        try:
            full_date = normalize(
                item.date_label,
                ALL_DAY_LABEL,
                True,
                reference_year,
                local_tz=tz_spec,
                roll_over=True,
                now=now,
            )
        except MalformedTimeLabel as exc:
            if not skip_malformed:
                raise
            logger.warning("Skipping holiday %r: %s", item.name, exc)
            continue
        local = to_zone(full_date, tz_spec)
        relative = relative_time(full_date, now)
        days_until = math.ceil((full_date - now) / dt.timedelta(days=1))
        weekend = long_weekend_type(local.date())

        enhanced.append(
            EnhancedHoliday(
                name=item.name,
                date_label=item.date_label,
                holiday_id=f"holiday-{index}",
                full_date=full_date,
                formatted_date=f"{local.strftime('%a')}, {local.strftime('%b')} {local.day}",
                relative=relative,
                days_until=days_until,
                is_past=relative.is_past,
                is_upcoming=not relative.is_past and days_until <= settings.upcoming_window_days,
                is_long_weekend=weekend is not None,
                weekend_type=weekend,
                category=categorize_holiday(item.name),
                has_calendar_conflicts=any(abs(e.start - full_date) <= window for e in calendar_events),
                has_bookmarked_conflicts=any(abs(b - full_date) <= window for b in bookmark_instants),
                time_until=item.time_until,
            )
        )
    return enhanced


def upcoming_holidays(holidays: Sequence[EnhancedHoliday], settings: Optional[Settings] = None) -> list[EnhancedHoliday]:
    settings = settings or Settings()
    return [h for h in holidays if h.is_upcoming and not h.is_past][: settings.upcoming_holiday_limit]


def all_holidays(holidays: Sequence[EnhancedHoliday], settings: Optional[Settings] = None) -> list[EnhancedHoliday]:
    settings = settings or Settings()
    return list(holidays[: settings.all_holiday_limit])
