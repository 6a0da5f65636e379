"""Render a countdown agenda from a JSON export of backend events."""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from event_horizon.adapters import json_adapter
from event_horizon.config import Settings
from event_horizon.time_filters import TimeFilter, select_events
from event_horizon.timeline import build_agenda
from event_horizon.timezone import to_zone

logger = logging.getLogger("render_agenda")


def _parse_now(raw: str | None) -> dt.datetime:
    if raw is None:
        return dt.datetime.now(dt.timezone.utc)
    parsed = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError("--now must include a UTC offset, e.g. 2025-09-28T05:00:00Z")
    return parsed


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Render event countdowns as JSON")
    parser.add_argument("--data", required=True, help="Path to a JSON array of backend events")
    parser.add_argument("--filter", choices=[f.value for f in TimeFilter], default=None)
    parser.add_argument("--now", default=None, help="ISO instant to render against (default: current time)")
    parser.add_argument("--year", type=int, default=None, help="Year the date labels belong to")
    parser.add_argument(
        "--source-tz",
        default=settings.source_tz,
        help="Zone of the backend labels; pass offsets as --source-tz=-08:00",
    )
    parser.add_argument(
        "--display-tz",
        default=settings.display_tz,
        help="Zone to render in; pass offsets as --display-tz=+05:30",
    )
    parser.add_argument("--skip-malformed", action="store_true", help="Drop events whose labels do not parse")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    now = _parse_now(args.now)
    local_now = to_zone(now, args.display_tz)
    year = args.year if args.year is not None else local_now.year

    raw_events = json_adapter.parse(args.data)
    events = json_adapter.normalize_events(
        raw_events,
        year,
        skip_malformed=args.skip_malformed,
        source_tz=args.source_tz,
        local_tz=args.display_tz,
    )
    if args.filter:
        events = select_events(events, args.filter, local_now.date(), args.display_tz)
    logger.info("Rendering %d events", len(events))

    print(json.dumps(build_agenda(events, now, args.display_tz), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
