"""Human-readable relative time ("In 2.5 hours", "3d 4h ago").

The past branch is exact (floored). The future branch rounds to the nearest
half unit beyond the first hour:

  hours band: remainder <= 15m rounds down, <= 45m shows .5, else rounds up
  days band:  remainder <= 6h rounds down, <= 18h shows .5, else rounds up
"""

from __future__ import annotations

import datetime as dt

from event_horizon.schema import Band, RelativeTime

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440

_ONE_MINUTE = dt.timedelta(minutes=1)


def diff_minutes(target: dt.datetime, now: dt.datetime) -> int:
    """Whole minutes from ``now`` to ``target``, floored (negative when past)."""

    return (target - now) // _ONE_MINUTE


def _round_half(whole: int, remainder: int, down_max: int, half_max: int) -> float:
    if remainder <= down_max:
        return whole
    if remainder <= half_max:
        return whole + 0.5
    return whole + 1


def relative_from_minutes(minutes: int) -> RelativeTime:
    minutes = int(minutes)

    if minutes < 0:
        m = -minutes
        if m < MINUTES_PER_HOUR:
            return RelativeTime(True, Band.MINUTES, m, minutes)
        if m < MINUTES_PER_DAY:
            return RelativeTime(True, Band.HOURS, m // MINUTES_PER_HOUR, minutes)
        return RelativeTime(True, Band.DAYS, m // MINUTES_PER_DAY, minutes)

    if minutes <= MINUTES_PER_HOUR:
        return RelativeTime(False, Band.MINUTES, minutes, minutes)

    if minutes < MINUTES_PER_DAY:
        whole_hours, rem = divmod(minutes, MINUTES_PER_HOUR)
        return RelativeTime(False, Band.HOURS, _round_half(whole_hours, rem, 15, 45), minutes)

    # Remaining hours compared in minutes: 6h == 360m, 18h == 1080m.
    whole_days, rem = divmod(minutes, MINUTES_PER_DAY)
    return RelativeTime(False, Band.DAYS, _round_half(whole_days, rem, 360, 1080), minutes)


def relative_time(target: dt.datetime, now: dt.datetime) -> RelativeTime:
    """Structured relative time of ``target`` as seen from ``now``."""

    return relative_from_minutes(diff_minutes(target, now))


def format_relative(target: dt.datetime, now: dt.datetime) -> str:
    return relative_time(target, now).label
