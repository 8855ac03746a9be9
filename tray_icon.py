"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from calendar_logic import week_number_of
from quarters import quarter_name, quarter_of
from settings import CalendarConfig


def tray_title(config: CalendarConfig, today: date) -> str:
    week = week_number_of(today, config.week_starts_on, config.first_week_min_days)
    quarter = quarter_of(today, config.quarters)
    return f"Quarter Calendar – CW {week} · {quarter_name(quarter)}"


def create_tray(
    icon_image: Image.Image,
    config: CalendarConfig,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_print: Callable[[], None] | None = None,
    on_settings: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_print is not None:
        items.append(MenuItem("Print Year", lambda _icon, _item: on_print()))
    if on_settings is not None:
        items.append(MenuItem("Settings", lambda _icon, _item: on_settings()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    return pystray.Icon("quarter-calendar", icon_image,
                        tray_title(config, date.today()), menu)
