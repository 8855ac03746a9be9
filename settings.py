"""JSON-based settings persistence for the quarter calendar."""

import json
import logging
import os
from dataclasses import dataclass

from quarters import QuarterConfig, parse_quarter_config

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".quarter-calendar-settings.json")

_DEFAULTS = {
    "week_starts_on": 1,
    "first_week_min_days": 1,
    "quarters": None,
    "show_week_numbers": True,
    "show_day_of_year": True,
    "show_quarters": True,
    "months_before": 1,
    "months_after": 1,
}

# key -> inclusive (low, high) for integer settings
_INT_RANGES = {
    "week_starts_on": (0, 6),
    "first_week_min_days": (1, 7),
    "months_before": (0, 6),
    "months_after": (0, 6),
}

_BOOL_KEYS = ("show_week_numbers", "show_day_of_year", "show_quarters")


@dataclass(frozen=True)
class CalendarConfig:
    """Everything the calendar engine and views need from the settings."""

    week_starts_on: int = 1
    quarters: QuarterConfig | None = None
    first_week_min_days: int = 1
    show_week_numbers: bool = True
    show_day_of_year: bool = True
    show_quarters: bool = True


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing or invalid keys."""
    settings = dict(_DEFAULTS)
    path = path or _SETTINGS_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read settings from %s: %s", path, exc)
        return settings

    if not isinstance(stored, dict):
        logger.warning("Settings file %s does not hold an object; using defaults", path)
        return settings

    for key, (low, high) in _INT_RANGES.items():
        if key in stored and _is_int(stored[key]) and low <= stored[key] <= high:
            settings[key] = stored[key]
    for key in _BOOL_KEYS:
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    if "quarters" in stored and isinstance(stored["quarters"], dict):
        settings["quarters"] = dict(stored["quarters"])
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    path = path or _SETTINGS_PATH
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def reset_settings(path: str | None = None) -> dict:
    """Overwrite the stored settings with the defaults and return them."""
    settings = dict(_DEFAULTS)
    save_settings(settings, path)
    return settings


def calendar_config(settings: dict) -> CalendarConfig:
    """Build the explicit configuration record passed into the engine."""
    return CalendarConfig(
        week_starts_on=settings.get("week_starts_on", _DEFAULTS["week_starts_on"]),
        quarters=parse_quarter_config(settings.get("quarters")),
        first_week_min_days=settings.get("first_week_min_days",
                                         _DEFAULTS["first_week_min_days"]),
        show_week_numbers=settings.get("show_week_numbers", True),
        show_day_of_year=settings.get("show_day_of_year", True),
        show_quarters=settings.get("show_quarters", True),
    )
