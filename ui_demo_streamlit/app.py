"""Streamlit demo UI for event-horizon."""

from __future__ import annotations

import datetime as dt
import json
from collections import Counter
from typing import Any

from event_horizon.adapters import json_adapter
from event_horizon.config import Settings
from event_horizon.holidays import all_holidays, enhance_holidays, upcoming_holidays
from event_horizon.time_filters import TimeFilter, select_events
from event_horizon.timeline import build_agenda
from event_horizon.timezone import to_zone
from event_horizon.urgency import classify_vacation

URGENCY_COLORS = {
    "critical": "#ef4444",
    "warning": "#f59e0b",
    "normal": "#3b82f6",
    "future": "#6b7280",
    "past": "#9ca3af",
}

VACATION_COLORS = {
    "immediate": "#ef4444",
    "near-term": "#f97316",
    "medium-term": "#a855f7",
    "long-term": "#6b7280",
    "faded": "#9ca3af",
}

HOLIDAY_ICONS = {"federal": "🇺🇸", "major": "🎊", "cultural": "🎭"}


def _load_payload(uploaded_file) -> Any:
    return json.loads(uploaded_file.getvalue().decode("utf-8"))


def _build_summary(rows: list[dict]) -> dict[str, Any]:
    levels = Counter(row["urgency"] for row in rows)
    return {
        "total_events": len(rows),
        "urgency_counts": {level: levels.get(level, 0) for level in URGENCY_COLORS},
    }


def build_dashboard(
    event_payload: Any,
    holiday_payload: Any,
    now: dt.datetime,
    time_filter: str,
    settings: Settings,
) -> dict[str, Any]:
    """Run every dashboard computation and return a UI-friendly payload."""

    local_now = to_zone(now, settings.display_tz)
    events = json_adapter.normalize_events(
        json_adapter.parse_events(event_payload),
        local_now.year,
        skip_malformed=True,
        source_tz=settings.source_tz,
        local_tz=settings.display_tz,
    )
    events = select_events(events, time_filter, local_now.date(), settings.display_tz)
    rows = build_agenda(events, now, settings.display_tz)

    holidays = []
    if holiday_payload is not None:
        holidays = enhance_holidays(
            json_adapter.parse_holidays(holiday_payload),
            now,
            calendar_events=events,
            local_tz=settings.display_tz,
            settings=settings,
            skip_malformed=True,
        )

    return {
        "summary": _build_summary(rows),
        "agenda": rows,
        "upcoming_holidays": upcoming_holidays(holidays, settings),
        "all_holidays": all_holidays(holidays, settings),
    }


def _badge(text: str, color: str) -> str:
    return f"<span style='color:{color};font-weight:600'>{text}</span>"


def main() -> None:
    import streamlit as st

    settings = Settings.from_env()

    st.set_page_config(page_title="Event Horizon", layout="wide")
    st.title("Event Horizon")

    with st.sidebar:
        st.header("Controls")
        events_file = st.file_uploader("Events JSON", type=["json"])
        holidays_file = st.file_uploader("Holidays JSON", type=["json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        time_filter = st.selectbox("Time filter", options=[f.value for f in TimeFilter], index=4)
        holiday_view = st.radio("Holidays", options=["Upcoming", "All Holidays"], horizontal=True)
        run = st.button("Refresh", type="primary")

    if not run and not use_demo:
        st.info("Upload an events file or enable the demo dataset, then click **Refresh**.")
        return

    try:
        if use_demo:
            event_payload = json_adapter.load("examples/sample_events.json")
            holiday_payload = json_adapter.load("examples/sample_holidays.json")
        elif events_file is not None:
            event_payload = _load_payload(events_file)
            holiday_payload = _load_payload(holidays_file) if holidays_file is not None else None
        else:
            st.error("Please upload an events JSON file or enable 'Load demo dataset'.")
            return

        now = dt.datetime.now(dt.timezone.utc)
        result = build_dashboard(event_payload, holiday_payload, now, time_filter, settings)

        st.subheader("Events")
        summary = result["summary"]
        columns = st.columns(len(URGENCY_COLORS) + 1)
        columns[0].metric("Events", summary["total_events"])
        for column, (level, count) in zip(columns[1:], summary["urgency_counts"].items()):
            column.metric(level, count)

        if not result["agenda"]:
            st.write("No events for this range.")
        for row in result["agenda"]:
            color = URGENCY_COLORS[row["urgency"]]
            st.markdown(
                f"**{row['title']}** · {row['when']} · {row['duration']} · {_badge(row['relative'], color)}",
                unsafe_allow_html=True,
            )

        st.subheader("Vacation")
        holidays = result["upcoming_holidays"] if holiday_view == "Upcoming" else result["all_holidays"]
        for holiday in holidays:
            icon = HOLIDAY_ICONS.get(holiday.category, "📅")
            color = VACATION_COLORS[classify_vacation(holiday.relative).value]
            flags = " · Long Weekend" if holiday.is_long_weekend else ""
            if holiday.has_calendar_conflicts:
                flags += " · ⚠️ calendar"
            st.markdown(
                f"{icon} **{holiday.name}** · {holiday.formatted_date}{flags} · "
                f"{_badge(holiday.relative.label, color)}",
                unsafe_allow_html=True,
            )

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while rendering the dashboard. Please verify the input format.")


if __name__ == "__main__":
    main()
