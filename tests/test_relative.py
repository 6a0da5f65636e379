from datetime import datetime, timedelta, timezone

import pytest

from event_horizon.relative import diff_minutes, format_relative, relative_time
from event_horizon.schema import Band, RelativeTime

NOW = datetime(2025, 9, 28, 12, 0, tzinfo=timezone.utc)


def _in(minutes: int) -> datetime:
    return NOW + timedelta(minutes=minutes)


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, "In 0m"),
        (45, "In 45m"),
        (60, "In 60m"),
        (61, "In 1 hour"),
        (75, "In 1 hour"),
        (76, "In 1.5 hours"),
        (90, "In 1.5 hours"),
        (105, "In 1.5 hours"),
        (106, "In 2 hours"),
        (110, "In 2 hours"),
        (1439, "In 24 hours"),
    ],
)
def test_future_minutes_and_hours(minutes, expected):
    assert format_relative(_in(minutes), NOW) == expected


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (1440, "In 1 day"),
        (1440 + 6 * 60, "In 1 day"),
        (1440 + 6 * 60 + 1, "In 1.5 days"),
        (1440 + 18 * 60, "In 1.5 days"),
        (1440 + 18 * 60 + 1, "In 2 days"),
        (2 * 1440 + 4 * 60, "In 2 days"),
        (2 * 1440 + 12 * 60, "In 2.5 days"),
        (2 * 1440 + 20 * 60, "In 3 days"),
    ],
)
def test_future_days(minutes, expected):
    assert format_relative(_in(minutes), NOW) == expected


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (-1, "1m ago"),
        (-59, "59m ago"),
        (-60, "1h 0m ago"),
        (-125, "2h 5m ago"),
        (-1440, "1d 0h ago"),
        (-(3 * 1440 + 4 * 60 + 30), "3d 4h ago"),
    ],
)
def test_past(minutes, expected):
    assert format_relative(_in(minutes), NOW) == expected


def test_diff_is_floored_to_whole_minutes():
    assert diff_minutes(NOW + timedelta(seconds=30), NOW) == 0
    assert diff_minutes(NOW - timedelta(seconds=30), NOW) == -1
    assert format_relative(NOW - timedelta(seconds=30), NOW) == "1m ago"


def test_structured_result():
    assert relative_time(_in(90), NOW) == RelativeTime(False, Band.HOURS, 1.5, 90)
    assert relative_time(_in(-125), NOW) == RelativeTime(True, Band.HOURS, 2, -125)
    assert relative_time(_in(3600), NOW).band is Band.DAYS
    assert str(relative_time(_in(30), NOW)) == "In 30m"
