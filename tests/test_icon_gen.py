from datetime import date

from icon_gen import QUARTER_ICON_BG, create_icon_image
from quarters import fiscal_quarters
from settings import CalendarConfig


def _hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16), 255


def test_icon_is_64px_rgba() -> None:
    img = create_icon_image(today=date(2024, 3, 15))
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_icon_background_follows_quarter() -> None:
    img = create_icon_image(today=date(2024, 3, 15))
    colors = {color for _count, color in img.getcolors(64 * 64)}
    assert _hex_to_rgba(QUARTER_ICON_BG[1]) in colors

    # Fiscal year from October: March is Q2
    config = CalendarConfig(quarters=fiscal_quarters(10))
    img = create_icon_image(config, today=date(2024, 3, 15))
    colors = {color for _count, color in img.getcolors(64 * 64)}
    assert _hex_to_rgba(QUARTER_ICON_BG[2]) in colors
