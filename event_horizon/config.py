"""Runtime settings, overridable through ``EVENT_HORIZON_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Backend emits Pacific wall-clock strings; legacy behaviour is a fixed UTC-8.
SOURCE_TZ = "-08:00"
DISPLAY_TZ = "local"

UPCOMING_WINDOW_DAYS = 60
CONFLICT_WINDOW_DAYS = 3
UPCOMING_HOLIDAY_LIMIT = 8
ALL_HOLIDAY_LIMIT = 12

_ENV_PREFIX = "EVENT_HORIZON_"


@dataclass(frozen=True)
class Settings:
    source_tz: str = SOURCE_TZ
    display_tz: str = DISPLAY_TZ
    upcoming_window_days: int = UPCOMING_WINDOW_DAYS
    conflict_window_days: int = CONFLICT_WINDOW_DAYS
    upcoming_holiday_limit: int = UPCOMING_HOLIDAY_LIMIT
    all_holiday_limit: int = ALL_HOLIDAY_LIMIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        def _int(name: str, default: int) -> int:
            raw = env.get(_ENV_PREFIX + name)
            if raw in (None, ""):
                return default
            try:
                value = int(raw)
            except ValueError as exc:
                raise ValueError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
            if value < 0:
                raise ValueError(f"{_ENV_PREFIX}{name} must be non-negative")
            return value

        return cls(
            source_tz=env.get(_ENV_PREFIX + "SOURCE_TZ") or SOURCE_TZ,
            display_tz=env.get(_ENV_PREFIX + "DISPLAY_TZ") or DISPLAY_TZ,
            upcoming_window_days=_int("UPCOMING_WINDOW_DAYS", UPCOMING_WINDOW_DAYS),
            conflict_window_days=_int("CONFLICT_WINDOW_DAYS", CONFLICT_WINDOW_DAYS),
            upcoming_holiday_limit=_int("UPCOMING_HOLIDAY_LIMIT", UPCOMING_HOLIDAY_LIMIT),
            all_holiday_limit=_int("ALL_HOLIDAY_LIMIT", ALL_HOLIDAY_LIMIT),
        )
