import json
import logging
from datetime import datetime, timezone

import pytest

from event_horizon.adapters.json_adapter import (
    normalize_events,
    parse,
    parse_bookmarks,
    parse_events,
    parse_holidays,
)
from event_horizon.errors import MalformedTimeLabel

UTC = timezone.utc


def api_event(**overrides):
    item = {
        "event": "Visit Family",
        "date": "Sep 28",
        "start_time": "4:30 AM",
        "end_time": "8:00 AM",
        "duration_minutes": 210,
        "attendees": ["a@example.com"],
        "organizer_email": "organizer@example.com",
        "all_day": False,
        "notes": None,
    }
    item.update(overrides)
    return item


def test_json_parse_success(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([api_event(), api_event(event="Offsite", start_time="All Day", all_day=True)]), encoding="utf-8")
    events = parse(str(path))
    assert len(events) == 2
    assert events[0].start_time_label == "4:30 AM"
    assert events[0].attendees == ("a@example.com",)
    assert events[1].all_day


def test_json_parse_missing_fields():
    with pytest.raises(ValueError, match="Item 1: missing required fields"):
        parse_events([{"event": "x", "date": "Sep 28"}])


def test_json_parse_invalid_duration():
    with pytest.raises(ValueError, match="duration_minutes"):
        parse_events([api_event(duration_minutes="long")])


def test_json_payload_must_be_a_list():
    with pytest.raises(ValueError):
        parse_events({"event": "x"})


def test_normalize_events_converts_pacific_labels():
    events = normalize_events(parse_events([api_event(), api_event(start_time="All Day")]), 2025, local_tz="UTC")
    assert events[0].start == datetime(2025, 9, 28, 12, 30, tzinfo=UTC)
    assert events[0].event_id == "api-event-0"
    assert events[1].start == datetime(2025, 9, 28, tzinfo=UTC)
    assert events[1].all_day


def test_normalize_events_propagates_malformed_labels():
    with pytest.raises(MalformedTimeLabel):
        normalize_events(parse_events([api_event(start_time="half past four")]), 2025)


def test_normalize_events_can_skip_malformed(caplog):
    raw = parse_events([api_event(event="Bad", start_time="25:00 PM"), api_event()])
    with caplog.at_level(logging.WARNING):
        events = normalize_events(raw, 2025, skip_malformed=True)
    assert [e.title for e in events] == ["Visit Family"]
    assert events[0].event_id == "api-event-1"
    assert "Skipping event 'Bad'" in caplog.text


def test_parse_holidays_and_bookmarks():
    holidays = parse_holidays([{"name": "Labor Day", "date": "Sep 1", "time_until": "Past"}])
    assert holidays[0].date_label == "Sep 1"
    assert holidays[0].time_until == "Past"

    bookmarks = parse_bookmarks(
        [{"event_title": "Flight", "date": "Oct 11", "time": "2025-10-11T09:00:00Z", "duration": 120, "attendees": []}]
    )
    assert bookmarks[0].duration == 120

    with pytest.raises(ValueError):
        parse_holidays([{"name": "No date"}])


@pytest.mark.parametrize("raw", ["false", "true", 1])
def test_json_parse_rejects_non_boolean_all_day(raw):
    with pytest.raises(ValueError, match="Item 1: invalid all_day"):
        parse_events([api_event(all_day=raw)])


def test_json_parse_null_all_day_is_false():
    assert parse_events([api_event(all_day=None)])[0].all_day is False
