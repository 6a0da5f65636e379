from datetime import date, datetime, timedelta, timezone

import pytest

from event_horizon.errors import MalformedTimeLabel
from event_horizon.timezone import (
    calendar_date,
    normalize,
    parse_clock_label,
    parse_date_label,
    resolve_tz,
)

UTC = timezone.utc


def test_timed_event_applies_fixed_pacific_offset():
    instant = normalize("Sep 28", "4:30 AM", False, 2025)
    assert instant == datetime(2025, 9, 28, 12, 30, tzinfo=UTC)


def test_normalize_is_deterministic():
    assert normalize("Mar 9", "2:15 PM", False, 2025) == normalize("Mar 9", "2:15 PM", False, 2025)


def test_twelve_hour_clock_conversion():
    assert parse_clock_label("12:00 AM") == (0, 0)
    assert parse_clock_label("12:15 PM") == (12, 15)
    assert parse_clock_label("1:05 PM") == (13, 5)
    assert parse_clock_label("11:59 am") == (11, 59)


def test_late_evening_crosses_into_next_utc_day():
    instant = normalize("Sep 28", "11:59 PM", False, 2025)
    assert instant == datetime(2025, 9, 29, 7, 59, tzinfo=UTC)


def test_all_day_event_lands_on_local_midnight_without_offset():
    instant = normalize("Sep 28", "All Day", True, 2025, local_tz="UTC")
    assert instant == datetime(2025, 9, 28, tzinfo=UTC)

    shifted = normalize("Sep 28", "All Day", True, 2025, local_tz="+05:30")
    assert shifted == datetime(2025, 9, 27, 18, 30, tzinfo=UTC)


def test_all_day_event_uses_system_zone_by_default():
    local = normalize("Sep 28", "All Day", True, 2025).astimezone()
    assert (local.year, local.month, local.day, local.hour, local.minute) == (2025, 9, 28, 0, 0)


def test_all_day_sentinel_or_flag_skips_clock_parsing():
    by_label = normalize("Sep 28", "All Day", False, 2025, local_tz="UTC")
    by_flag = normalize("Sep 28", "4:30 AM", True, 2025, local_tz="UTC")
    assert by_label == by_flag == datetime(2025, 9, 28, tzinfo=UTC)


def test_impossible_dates_roll_forward():
    assert calendar_date(2025, 2, 30) == date(2025, 3, 2)
    assert calendar_date(2024, 2, 30) == date(2024, 3, 1)
    assert normalize("Apr 31", "All Day", True, 2025, local_tz="UTC") == datetime(2025, 5, 1, tzinfo=UTC)


def test_month_names_are_matched_by_prefix():
    assert parse_date_label("Sep 28") == (9, 28)
    assert parse_date_label("sept 5") == (9, 5)
    assert parse_date_label("December 25") == (12, 25)


@pytest.mark.parametrize("label", ["Sep", "Foo 12", "Sep 32", "Sep 0", "28 Sep", "", None])
def test_malformed_date_labels(label):
    with pytest.raises(MalformedTimeLabel):
        normalize(label, "4:30 AM", False, 2025)


@pytest.mark.parametrize("label", ["13:00 PM", "0:30 AM", "4:60 AM", "4:30", "noon", "4.30 PM"])
def test_malformed_clock_labels(label):
    with pytest.raises(MalformedTimeLabel) as excinfo:
        normalize("Sep 28", label, False, 2025)
    assert excinfo.value.label == label
    assert isinstance(excinfo.value, ValueError)


def test_iana_source_zone_follows_daylight_saving():
    summer = normalize("Sep 28", "4:30 AM", False, 2025, source_tz="America/Los_Angeles")
    winter = normalize("Jan 15", "9:00 AM", False, 2025, source_tz="America/Los_Angeles")
    assert summer == datetime(2025, 9, 28, 11, 30, tzinfo=UTC)
    assert winter == datetime(2025, 1, 15, 17, 0, tzinfo=UTC)


def test_roll_over_moves_past_dates_to_next_year():
    now = datetime(2025, 10, 1, tzinfo=UTC)
    rolled = normalize("Sep 28", "4:30 AM", False, 2025, roll_over=True, now=now)
    kept = normalize("Oct 5", "4:30 AM", False, 2025, roll_over=True, now=now)
    assert rolled == datetime(2026, 9, 28, 12, 30, tzinfo=UTC)
    assert kept == datetime(2025, 10, 5, 12, 30, tzinfo=UTC)


def test_roll_over_keeps_all_day_dates_until_the_day_ends():
    now = datetime(2025, 9, 28, 15, 0, tzinfo=UTC)
    today = normalize("Sep 28", "All Day", True, 2025, local_tz="UTC", roll_over=True, now=now)
    yesterday = normalize("Sep 27", "All Day", True, 2025, local_tz="UTC", roll_over=True, now=now)
    assert today == datetime(2025, 9, 28, tzinfo=UTC)
    assert yesterday == datetime(2026, 9, 27, tzinfo=UTC)


def test_roll_over_requires_now():
    with pytest.raises(ValueError):
        normalize("Sep 28", "4:30 AM", False, 2025, roll_over=True)


def test_resolve_tz_forms():
    assert resolve_tz("UTC") is timezone.utc
    assert resolve_tz("local") is None
    assert resolve_tz(None) is None
    assert resolve_tz("-08:00").utcoffset(None) == timedelta(hours=-8)
    assert resolve_tz("+0530").utcoffset(None) == timedelta(hours=5, minutes=30)


@pytest.mark.parametrize("name", ["Not/AZone", "+25:00"])
def test_resolve_tz_rejects_unknown_zones(name):
    with pytest.raises(ValueError):
        resolve_tz(name)
