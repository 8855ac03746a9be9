"""Printable twelve-month HTML view of a year."""

import logging
import tempfile
import webbrowser
from datetime import date

from calendar_logic import DAY_NAMES, CalendarMonth, build_month, day_headers
from settings import CalendarConfig

logger = logging.getLogger(__name__)

PRINT_STYLES = """
  @page { size: A4 portrait; margin: 1cm; }
  body { font-family: Arial, sans-serif; margin: 0; padding: 0; }
  .month-container { padding: 10px; page-break-inside: avoid; }
  .month-header { display: flex; justify-content: space-between; align-items: baseline; }
  .month-title { font-size: 24px; font-weight: bold; }
  .year { font-size: 18px; color: #555; }
  .month-info { font-size: 11px; color: #555; margin: 6px 0; }
  .calendar-grid { width: 100%; border-collapse: collapse; }
  .calendar-grid th, .calendar-grid td { border: 1px solid #ccc; padding: 4px; }
  .week-number { width: 48px; text-align: center; font-weight: bold; color: #888; }
  .week-quarter { display: block; font-size: 9px; font-weight: normal; }
  .day-content { display: flex; justify-content: space-between; }
  .day-of-year { font-size: 9px; color: #888; }
  .other-month { opacity: 0.4; }
  .today { outline: 2px solid #d00; }
  .q1 { background-color: #e3f2fd; }
  .q2 { background-color: #e8f5e9; }
  .q3 { background-color: #fff8e1; }
  .q4 { background-color: #fce4ec; }
"""


def _month_section(month: CalendarMonth, headers: list[str]) -> str:
    start_week, end_week = month.week_range
    parts = [
        f'<div class="month-container q{month.current_month_days[0].quarter}">',
        '<div class="month-header">',
        f'<div class="month-title">{month.month_name}</div>',
        f'<div class="year">{month.year}</div>',
        "</div>",
        '<div class="month-info">',
        f"<div>Initial Day: {month.first_day_of_year} of {month.year}</div>",
        f"<div>Final Day: {month.last_day_of_year} of {month.year}</div>",
        f"<div>Week Range: {start_week} - {end_week}</div>",
        "</div>",
        '<table class="calendar-grid">',
        '<thead><tr><th class="week-number">Week</th>',
    ]
    parts.extend(f'<th class="day-column">{name}</th>' for name in headers)
    parts.append("</tr></thead><tbody>")

    for week in month.weeks:
        parts.append("<tr>")
        parts.append(
            f'<td class="week-number">{week.week_number}'
            f'<span class="week-quarter">Q{week.days[0].quarter}</span></td>'
        )
        for day in week.days:
            classes = [f"q{day.quarter}"]
            if day.is_today:
                classes.append("today")
            if not day.is_current_month:
                classes.append("other-month")
            classes.append("day-column")
            parts.append(
                f'<td class="{" ".join(classes)}"><div class="day-content">'
                f'<span class="day-of-month">{day.day_of_month}</span>'
                f'<span class="day-of-year">{day.day_of_year}</span>'
                "</div></td>"
            )
        parts.append("</tr>")

    parts.append("</tbody></table></div>")
    return "\n".join(parts)


def generate_printable_content(
    year: int,
    config: CalendarConfig | None = None,
    *,
    today: date | None = None,
) -> str:
    """Return a standalone HTML document with all twelve months of ``year``."""
    config = config or CalendarConfig()
    today = today or date.today()
    headers = day_headers(config.week_starts_on, DAY_NAMES)

    sections: list[str] = []
    for month in range(1, 13):
        cal_month = build_month(
            date(year, month, 1), config.week_starts_on, config.quarters,
            today=today, first_week_min_days=config.first_week_min_days,
        )
        sections.append(_month_section(cal_month, headers))

    page_break = '\n<div style="page-break-after: always;"></div>\n'
    return (
        "<html>\n<head>\n"
        f"<title>Calendar {year}</title>\n"
        f"<style>{PRINT_STYLES}</style>\n"
        "</head>\n<body>\n"
        f"{page_break.join(sections)}\n"
        "</body>\n</html>\n"
    )


def open_print_window(html_content: str) -> str:
    """Write the document to a temporary file and open it in the browser."""
    with tempfile.NamedTemporaryFile(
        "w", suffix=".html", prefix="calendar-", delete=False, encoding="utf-8",
    ) as f:
        f.write(html_content)
        path = f.name
    logger.info("Printable calendar written to %s", path)
    webbrowser.open(f"file://{path}")
    return path
