"""Urgency banding for countdown colouring."""

from __future__ import annotations

import datetime as dt

from event_horizon.relative import diff_minutes
from event_horizon.schema import Band, IntervalTone, RelativeTime, UrgencyLevel, VacationUrgency

CRITICAL_MAX_MINUTES = 45
WARNING_MAX_MINUTES = 120
NORMAL_MAX_MINUTES = 1440

# Day thresholds for holiday / vacation countdowns.
VACATION_IMMEDIATE_DAYS = 20
VACATION_NEAR_TERM_DAYS = 40
VACATION_MEDIUM_TERM_DAYS = 90


def urgency_from_minutes(minutes: int) -> UrgencyLevel:
    """Upper bounds are inclusive: 45 is critical, 46 is warning."""

    if minutes < 0:
        return UrgencyLevel.PAST
    if minutes <= CRITICAL_MAX_MINUTES:
        return UrgencyLevel.CRITICAL
    if minutes <= WARNING_MAX_MINUTES:
        return UrgencyLevel.WARNING
    if minutes <= NORMAL_MAX_MINUTES:
        return UrgencyLevel.NORMAL
    return UrgencyLevel.FUTURE


def classify_urgency(target: dt.datetime, now: dt.datetime) -> UrgencyLevel:
    return urgency_from_minutes(diff_minutes(target, now))


def classify_vacation(relative: RelativeTime) -> VacationUrgency:
    """Bucket a holiday countdown by days remaining."""

    if relative.is_past:
        return VacationUrgency.FADED
    if relative.band is not Band.DAYS:
        return VacationUrgency.IMMEDIATE

    days = relative.value
    if days < VACATION_IMMEDIATE_DAYS:
        return VacationUrgency.IMMEDIATE
    if days < VACATION_NEAR_TERM_DAYS:
        return VacationUrgency.NEAR_TERM
    if days <= VACATION_MEDIUM_TERM_DAYS:
        return VacationUrgency.MEDIUM_TERM
    return VacationUrgency.LONG_TERM


def classify_interval(relative: RelativeTime) -> IntervalTone:
    """Tone for the countdown text next to a calendar event."""

    if relative.is_past or relative.band is Band.MINUTES:
        return IntervalTone.PLAIN
    if relative.band is Band.HOURS:
        return IntervalTone.IMMINENT if relative.value < 12 else IntervalTone.SOON
    if relative.value < 2:
        return IntervalTone.SOON
    if relative.value <= 3:
        return IntervalTone.UPCOMING
    return IntervalTone.DISTANT
