"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

from calendar_logic import week_number_of
from quarters import quarter_of
from settings import CalendarConfig

# Background per quarter so the icon also shows where in the year we are
QUARTER_ICON_BG = {1: "#E3F2FD", 2: "#E8F5E9", 3: "#FFF8E1", 4: "#FCE4EC"}


def _fit_font(draw: ImageDraw.ImageDraw, text: str, size: int):
    font_size = 120
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= size and bbox[3] - bbox[1] <= size:
            break
        font_size -= 1
    return font


def create_icon_image(config: CalendarConfig | None = None,
                      today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA image: the current week number on its quarter colour."""
    config = config or CalendarConfig()
    today = today or date.today()
    size = 64

    quarter = quarter_of(today, config.quarters)
    img = Image.new("RGBA", (size, size), QUARTER_ICON_BG[quarter])
    draw = ImageDraw.Draw(img)

    week = str(week_number_of(today, config.week_starts_on, config.first_week_min_days))
    font = _fit_font(draw, week, size)

    # Centre the visible pixels (compensate for font metric offsets)
    bbox = draw.textbbox((0, 0), week, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = (size - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), week, fill="black", font=font)

    return img
