import json
import logging

from quarters import QuarterBoundary, QuarterRange
from settings import (
    CalendarConfig,
    calendar_config,
    load_settings,
    reset_settings,
    save_settings,
)


def test_missing_file_returns_defaults(tmp_path) -> None:
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings["week_starts_on"] == 1
    assert settings["first_week_min_days"] == 1
    assert settings["quarters"] is None
    assert settings["show_quarters"] is True
    assert settings["months_before"] == 1


def test_corrupt_file_returns_defaults_and_logs(tmp_path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="settings"):
        settings = load_settings(str(path))
    assert settings["week_starts_on"] == 1
    assert "Could not read settings" in caplog.text


def test_non_object_file_returns_defaults(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_settings(str(path))["week_starts_on"] == 1


def test_invalid_values_are_ignored(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "week_starts_on": 9,
        "first_week_min_days": True,
        "show_quarters": "yes",
        "months_after": 3,
        "quarters": ["Q1"],
    }), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings["week_starts_on"] == 1
    assert settings["first_week_min_days"] == 1
    assert settings["show_quarters"] is True
    assert settings["months_after"] == 3
    assert settings["quarters"] is None


def test_save_and_load_round_trip(tmp_path) -> None:
    path = str(tmp_path / "settings.json")
    settings = load_settings(path)
    settings["week_starts_on"] = 0
    settings["show_day_of_year"] = False
    settings["quarters"] = {
        "1": {"start_month": 11, "start_day": 1, "end_month": 1, "end_day": 31},
    }
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_reset_settings_overwrites_file(tmp_path) -> None:
    path = str(tmp_path / "settings.json")
    save_settings({"week_starts_on": 6}, path)
    assert reset_settings(path)["week_starts_on"] == 1
    assert load_settings(path)["week_starts_on"] == 1


def test_calendar_config_from_settings(tmp_path) -> None:
    settings = load_settings(str(tmp_path / "missing.json"))
    assert calendar_config(settings) == CalendarConfig()

    settings["week_starts_on"] = 6
    settings["quarters"] = {
        "1": {"start_month": 11, "start_day": 1, "end_month": 1, "end_day": 31},
        "7": {"start_month": 1, "start_day": 1, "end_month": 1, "end_day": 2},
    }
    config = calendar_config(settings)
    assert config.week_starts_on == 6
    assert config.quarters == {
        1: QuarterRange(QuarterBoundary(11, 1), QuarterBoundary(1, 31)),
    }
