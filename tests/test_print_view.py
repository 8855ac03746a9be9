import os
from datetime import date

import print_view
from print_view import generate_printable_content, open_print_window
from quarters import fiscal_quarters
from settings import CalendarConfig


def test_year_document_has_twelve_months() -> None:
    html = generate_printable_content(2024, today=date(2024, 3, 15))
    assert "<title>Calendar 2024</title>" in html
    assert html.count('<div class="month-container') == 12
    assert html.count("page-break-after: always") == 11
    assert '<div class="month-title">January</div>' in html
    assert '<div class="month-title">December</div>' in html


def test_month_info_lines() -> None:
    html = generate_printable_content(2024, today=date(2024, 3, 15))
    assert "Initial Day: 61 of 2024" in html
    assert "Final Day: 91 of 2024" in html
    assert "Final Day: 366 of 2024" in html
    assert "Week Range: 9 - 13" in html


def test_today_and_overflow_classes() -> None:
    html = generate_printable_content(2024, today=date(2024, 3, 15))
    assert html.count('class="q1 today day-column"') == 1
    assert "other-month" in html


def test_header_follows_week_start() -> None:
    monday = generate_printable_content(2024, CalendarConfig(week_starts_on=1),
                                        today=date(2024, 3, 15))
    first_header = monday.index('<th class="day-column">')
    assert monday.startswith('<th class="day-column">Monday</th>', first_header)

    sunday = generate_printable_content(2024, CalendarConfig(week_starts_on=0),
                                        today=date(2024, 3, 15))
    first_header = sunday.index('<th class="day-column">')
    assert sunday.startswith('<th class="day-column">Sunday</th>', first_header)


def test_custom_quarters_drive_cell_classes() -> None:
    config = CalendarConfig(quarters=fiscal_quarters(10))
    html = generate_printable_content(2024, config, today=date(2000, 1, 1))
    # October opens fiscal Q1
    october = html.index('<div class="month-title">October</div>')
    container_start = html.rindex('<div class="month-container', 0, october)
    assert html.startswith('<div class="month-container q1">', container_start)


def test_open_print_window_writes_file_and_opens_browser(monkeypatch) -> None:
    opened: list[str] = []
    monkeypatch.setattr(print_view.webbrowser, "open", opened.append)

    path = open_print_window("<html><body>calendar</body></html>")
    try:
        with open(path, encoding="utf-8") as f:
            assert f.read() == "<html><body>calendar</body></html>"
        assert path.endswith(".html")
        assert opened == [f"file://{path}"]
    finally:
        os.remove(path)
