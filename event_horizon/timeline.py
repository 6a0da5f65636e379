"""Batch countdowns for a list of events, recomputed on every refresh tick."""

from __future__ import annotations

import datetime as dt
from typing import Any, Sequence

import numpy as np

from event_horizon.display import format_date_time, format_duration
from event_horizon.relative import relative_from_minutes
from event_horizon.schema import NormalizedEvent, UrgencyLevel, to_epoch_ms
from event_horizon.timezone import TzLike
from event_horizon.urgency import (
    CRITICAL_MAX_MINUTES,
    NORMAL_MAX_MINUTES,
    WARNING_MAX_MINUTES,
    classify_interval,
)

_MS_PER_MINUTE = 60_000

# np.digitize index -> level; bins are the first minute of each band.
_URGENCY_BINS = np.array(
    [0, CRITICAL_MAX_MINUTES + 1, WARNING_MAX_MINUTES + 1, NORMAL_MAX_MINUTES + 1],
    dtype=np.int64,
)
_URGENCY_LEVELS = (
    UrgencyLevel.PAST,
    UrgencyLevel.CRITICAL,
    UrgencyLevel.WARNING,
    UrgencyLevel.NORMAL,
    UrgencyLevel.FUTURE,
)


def countdown_minutes(starts_ms: Sequence[int] | np.ndarray, now: dt.datetime) -> np.ndarray:
    """Floored minutes from ``now`` to each start, at millisecond precision."""

    starts = np.asarray(starts_ms, dtype=np.int64)
    return np.floor_divide(starts - np.int64(to_epoch_ms(now)), _MS_PER_MINUTE)


def classify_urgency_batch(minutes: Sequence[int] | np.ndarray) -> list[UrgencyLevel]:
    indices = np.digitize(np.asarray(minutes, dtype=np.int64), _URGENCY_BINS)
    return [_URGENCY_LEVELS[int(i)] for i in indices]


def build_agenda(events: Sequence[NormalizedEvent], now: dt.datetime, tz: TzLike = None) -> list[dict[str, Any]]:
    """Display rows for events, sorted by start time."""

    if not events:
        return []

    ordered = sorted(events, key=lambda event: event.start)
    minutes = countdown_minutes([event.start_ms for event in ordered], now)
    levels = classify_urgency_batch(minutes)

    rows: list[dict[str, Any]] = []
    for event, diff, level in zip(ordered, minutes.tolist(), levels):
        relative = relative_from_minutes(diff)
        rows.append(
            {
                "title": event.title,
                "start": event.start.isoformat(),
                "when": format_date_time(event.start, now, tz),
                "all_day": event.all_day,
                "minutes_until": diff,
                "relative": relative.label,
                "urgency": level.value,
                "tone": classify_interval(relative).value,
                "duration": format_duration(event.duration_minutes),
            }
        )
    return rows
