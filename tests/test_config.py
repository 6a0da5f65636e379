import pytest

from event_horizon.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.source_tz == "-08:00"
    assert settings.display_tz == "local"
    assert settings.upcoming_window_days == 60
    assert settings.conflict_window_days == 3


def test_env_overrides():
    settings = Settings.from_env(
        {
            "EVENT_HORIZON_SOURCE_TZ": "America/Los_Angeles",
            "EVENT_HORIZON_DISPLAY_TZ": "Europe/London",
            "EVENT_HORIZON_UPCOMING_WINDOW_DAYS": "30",
        }
    )
    assert settings.source_tz == "America/Los_Angeles"
    assert settings.display_tz == "Europe/London"
    assert settings.upcoming_window_days == 30
    assert settings.all_holiday_limit == 12


@pytest.mark.parametrize("raw", ["soon", "-1"])
def test_invalid_integer_settings(raw):
    with pytest.raises(ValueError):
        Settings.from_env({"EVENT_HORIZON_CONFLICT_WINDOW_DAYS": raw})
