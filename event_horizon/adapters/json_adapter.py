"""JSON adapter for backend event, holiday and bookmark payloads."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from event_horizon.errors import MalformedTimeLabel
from event_horizon.schema import Bookmark, HolidayItem, NormalizedEvent, WallClockEvent
from event_horizon.timezone import PACIFIC_FIXED, TzLike, is_all_day_label, normalize

logger = logging.getLogger(__name__)

_REQUIRED_EVENT_FIELDS = ("event", "date", "start_time", "duration_minutes")
_REQUIRED_HOLIDAY_FIELDS = ("name", "date")
_REQUIRED_BOOKMARK_FIELDS = ("event_title", "date", "time")


def _missing(item: dict, fields: Iterable[str]) -> list[str]:
    return [field for field in fields if item.get(field) in (None, "")]


def _attendees(raw: Any, index: int) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"Item {index}: attendees must be a list")
    return tuple(str(a).strip() for a in raw if str(a).strip())


def _parse_item(item: Any, index: int) -> WallClockEvent:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    missing = _missing(item, _REQUIRED_EVENT_FIELDS)
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        duration = int(item["duration_minutes"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Item {index}: invalid duration_minutes") from exc
    if duration < 0:
        raise ValueError(f"Item {index}: duration_minutes must be non-negative")

    all_day = item.get("all_day")
    if all_day is None:
        all_day = False
    elif not isinstance(all_day, bool):
        raise ValueError(f"Item {index}: invalid all_day")

    notes = item.get("notes")
    return WallClockEvent(
        title=str(item["event"]).strip(),
        date_label=str(item["date"]).strip(),
        start_time_label=str(item["start_time"]).strip(),
        duration_minutes=duration,
        all_day=all_day,
        attendees=_attendees(item.get("attendees"), index),
        organizer_email=item.get("organizer_email") or None,
        notes=str(notes) if notes else None,
    )


def _require_list(payload: Any) -> list:
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")
    return payload


def parse_events(payload: Any) -> list[WallClockEvent]:
    """Parse a decoded ``/get-events`` response."""

    return [_parse_item(item, i) for i, item in enumerate(_require_list(payload), start=1)]


def parse_holidays(payload: Any) -> list[HolidayItem]:
    holidays: list[HolidayItem] = []
    for index, item in enumerate(_require_list(payload), start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        missing = _missing(item, _REQUIRED_HOLIDAY_FIELDS)
        if missing:
            raise ValueError(f"Item {index}: missing required fields {missing}")
        holidays.append(
            HolidayItem(
                name=str(item["name"]).strip(),
                date_label=str(item["date"]).strip(),
                time_until=str(item.get("time_until") or ""),
            )
        )
    return holidays


def parse_bookmarks(payload: Any) -> list[Bookmark]:
    bookmarks: list[Bookmark] = []
    for index, item in enumerate(_require_list(payload), start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        missing = _missing(item, _REQUIRED_BOOKMARK_FIELDS)
        if missing:
            raise ValueError(f"Item {index}: missing required fields {missing}")
        try:
            duration = int(item.get("duration") or 0)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Item {index}: invalid duration") from exc
        bookmarks.append(
            Bookmark(
                event_title=str(item["event_title"]).strip(),
                date=str(item["date"]).strip(),
                time=str(item["time"]).strip(),
                duration=duration,
                attendees=_attendees(item.get("attendees"), index),
            )
        )
    return bookmarks


def load(file_path: str) -> Any:
    with open(file_path, encoding="utf-8") as handle:
        return json.load(handle)


def parse(file_path: str) -> list[WallClockEvent]:
    """Parse a JSON file of backend events."""

    return parse_events(load(file_path))


def to_normalized(
    event: WallClockEvent,
    reference_year: int,
    *,
    source_tz: TzLike = PACIFIC_FIXED,
    local_tz: TzLike = None,
    event_id: str | None = None,
) -> NormalizedEvent:
    start = normalize(
        event.date_label,
        event.start_time_label,
        event.all_day,
        reference_year,
        source_tz=source_tz,
        local_tz=local_tz,
    )
    return NormalizedEvent(
        title=event.title,
        start=start,
        duration_minutes=event.duration_minutes,
        all_day=event.all_day or is_all_day_label(event.start_time_label),
        attendees=event.attendees,
        organizer_email=event.organizer_email,
        notes=event.notes,
        event_id=event_id,
    )


def normalize_events(
    events: Iterable[WallClockEvent],
    reference_year: int,
    *,
    skip_malformed: bool = False,
    source_tz: TzLike = PACIFIC_FIXED,
    local_tz: TzLike = None,
) -> list[NormalizedEvent]:
    """Normalize a batch of events.

    By default a malformed label raises ``MalformedTimeLabel``. With
    ``skip_malformed=True`` the event is left out and a warning is logged.
    """
    normalized: list[NormalizedEvent] = []
    skipped = 0
    for index, event in enumerate(events):
        try:
            normalized.append(
                to_normalized(
                    event,
                    reference_year,
                    source_tz=source_tz,
                    local_tz=local_tz,
                    event_id=f"api-event-{index}",
                )
            )
        except MalformedTimeLabel as exc:
            if not skip_malformed:
                raise
            skipped += 1
            logger.warning("Skipping event %r: %s", event.title, exc)
    logger.debug("Normalized %d events (%d skipped)", len(normalized), skipped)
    return normalized
