"""Pure calendar calculations — no UI dependencies."""

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from typing import Literal

from quarters import QuarterConfig, quarter_of

# Index 0 is Sunday, matching the week_starts_on convention.
DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

Direction = Literal["prev", "next"]


@dataclass(frozen=True)
class CalendarDay:
    date: date
    day_of_month: int
    is_current_month: bool
    is_today: bool
    week_number: int
    quarter: int
    day_of_year: int


@dataclass(frozen=True)
class CalendarWeek:
    week_number: int
    days: tuple[CalendarDay, ...]

    @property
    def quarter_band(self) -> tuple[int, int]:
        """Quarters of the first and last day; they differ when the week straddles quarters."""
        return self.days[0].quarter, self.days[-1].quarter


@dataclass(frozen=True)
class CalendarMonth:
    month_name: str
    year: int
    month: int
    weeks: tuple[CalendarWeek, ...]

    @property
    def days(self) -> list[CalendarDay]:
        return [day for week in self.weeks for day in week.days]

    @property
    def current_month_days(self) -> list[CalendarDay]:
        return [day for day in self.days if day.is_current_month]

    @property
    def first_day_of_year(self) -> int:
        return self.current_month_days[0].day_of_year

    @property
    def last_day_of_year(self) -> int:
        return self.current_month_days[-1].day_of_year

    @property
    def week_range(self) -> tuple[int, int]:
        return self.weeks[0].week_number, self.weeks[-1].week_number

    @property
    def quarters(self) -> list[int]:
        """Distinct quarters of the month's own days, for the legend."""
        return sorted({day.quarter for day in self.current_month_days})


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    d = _as_date(d)
    return sum(days_in_month(d.year, m) for m in range(1, d.month)) + d.day


def weekday_index(d: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def start_of_week(d: date, week_starts_on: int) -> date:
    """Most recent ``week_starts_on`` day on or before ``d``."""
    return d - timedelta(days=(weekday_index(d) - week_starts_on) % 7)


def end_of_week(d: date, week_starts_on: int) -> date:
    return start_of_week(d, week_starts_on) + timedelta(days=6)


def day_headers(week_starts_on: int, names: list[str] = DAY_ABBR) -> list[str]:
    """Weekday labels in grid column order."""
    start = week_starts_on % 7
    return names[start:] + names[:start]


# ------------------------------------------------------------------
# Week numbering
# ------------------------------------------------------------------
def _jan1_ordinal(year: int) -> int:
    # Ordinals let the years just outside date.min/date.max act as neighbours.
    if year > MAXYEAR:
        return date(MAXYEAR, 12, 31).toordinal() + 1
    if year < MINYEAR:
        return date(MINYEAR, 1, 1).toordinal() - (366 if calendar.isleap(year) else 365)
    return date(year, 1, 1).toordinal()


def _first_week_start(year: int, week_starts_on: int, first_week_min_days: int) -> int:
    """Ordinal of the first day of week 1, the week holding January <first_week_min_days>."""
    anchor = _jan1_ordinal(year) + first_week_min_days - 1
    # Ordinal 1 (0001-01-01) is a Monday, so ordinal % 7 is the Sunday-based weekday.
    return anchor - (anchor % 7 - week_starts_on) % 7


def week_year(d: date, week_starts_on: int = 1, first_week_min_days: int = 1) -> int:
    """Year that ``d``'s week number belongs to (may differ from ``d.year``)."""
    ordinal = _as_date(d).toordinal()
    if ordinal >= _first_week_start(d.year + 1, week_starts_on, first_week_min_days):
        return d.year + 1
    if ordinal < _first_week_start(d.year, week_starts_on, first_week_min_days):
        return d.year - 1
    return d.year


def week_number_of(d: date, week_starts_on: int = 1, first_week_min_days: int = 1) -> int:
    """Week number of ``d`` for a configurable first day of week.

    By default week 1 is the week containing January 1, so late December
    days can already be week 1 of the next year. Monday with a four-day
    minimum gives ISO 8601 numbering, where early January days can belong
    to the last week of the previous year.
    """
    d = _as_date(d)
    year = week_year(d, week_starts_on, first_week_min_days)
    start = _first_week_start(year, week_starts_on, first_week_min_days)
    return (d.toordinal() - start) // 7 + 1


# ------------------------------------------------------------------
# Month grid
# ------------------------------------------------------------------
def build_month(
    d: date,
    week_starts_on: int = 1,
    quarters: QuarterConfig | None = None,
    *,
    today: date | None = None,
    first_week_min_days: int = 1,
) -> CalendarMonth:
    """Build full weeks covering ``d``'s month, padded with adjacent-month days.

    ``today`` defaults to the wall clock, read on every call. The first and
    last months of the ``date`` range raise OverflowError when their padding
    days would fall before ``date.min`` or after ``date.max``.
    """
    d = _as_date(d)
    today = _as_date(today) if today is not None else date.today()

    first = d.replace(day=1)
    last = d.replace(day=days_in_month(d.year, d.month))
    grid_start = start_of_week(first, week_starts_on)
    grid_end = end_of_week(last, week_starts_on)

    weeks: list[CalendarWeek] = []
    row: list[CalendarDay] = []
    current = grid_start
    while current <= grid_end:
        row.append(CalendarDay(
            date=current,
            day_of_month=current.day,
            is_current_month=(current.year, current.month) == (d.year, d.month),
            is_today=current == today,
            week_number=week_number_of(current, week_starts_on, first_week_min_days),
            quarter=quarter_of(current, quarters),
            day_of_year=day_of_year(current),
        ))
        if len(row) == 7:
            weeks.append(CalendarWeek(week_number=row[0].week_number, days=tuple(row)))
            row = []
        current += timedelta(days=1)

    return CalendarMonth(
        month_name=calendar.month_name[d.month],
        year=d.year,
        month=d.month,
        weeks=tuple(weeks),
    )


# ------------------------------------------------------------------
# Navigation
# ------------------------------------------------------------------
def shift_months(d: date, months: int) -> date:
    """Move ``d`` by a number of months, clamping the day to the target month."""
    d = _as_date(d)
    year, month_zero_based = divmod(d.year * 12 + (d.month - 1) + months, 12)
    month = month_zero_based + 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def shift_month(d: date, direction: Direction) -> date:
    """Return ``d`` moved one month back ("prev") or forward ("next")."""
    if direction == "prev":
        return shift_months(d, -1)
    if direction == "next":
        return shift_months(d, 1)
    raise ValueError(f"Unknown direction: {direction!r}")


def shift_quarter(d: date, quarters: int) -> date:
    return shift_months(d, 3 * quarters)


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
