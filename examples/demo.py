"""Demo script for event-horizon."""

import datetime as dt
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from event_horizon.adapters import json_adapter
from event_horizon.holidays import enhance_holidays, upcoming_holidays
from event_horizon.timeline import build_agenda
from event_horizon.urgency import classify_vacation


def main() -> None:
    now = dt.datetime(2025, 9, 28, 5, 0, tzinfo=dt.timezone.utc)
    events = json_adapter.normalize_events(json_adapter.parse("examples/sample_events.json"), now.year)
    for row in build_agenda(events, now, tz="UTC"):
        print(f"{row['when']:<22} {row['title']:<30} {row['relative']:<14} {row['urgency']}")

    holidays = json_adapter.parse_holidays(json_adapter.load("examples/sample_holidays.json"))
    for holiday in upcoming_holidays(enhance_holidays(holidays, now, calendar_events=events, local_tz="UTC")):
        print(f"{holiday.formatted_date:<12} {holiday.name:<20} {holiday.relative.label:<14} {classify_vacation(holiday.relative).value}")


if __name__ == "__main__":
    main()
