"""Quarter schemes: default calendar quarters and configurable boundaries."""

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping

logger = logging.getLogger(__name__)

QUARTER_NUMBERS = (1, 2, 3, 4)


@dataclass(frozen=True)
class QuarterBoundary:
    """A year-agnostic month/day boundary."""

    month: int
    day: int

    def anchor(self, year: int) -> date:
        """Place the boundary in ``year``, clamping the day to the month length."""
        last = calendar.monthrange(year, self.month)[1]
        return date(year, self.month, min(self.day, last))

    def key(self) -> tuple[int, int]:
        return self.month, self.day


@dataclass(frozen=True)
class QuarterRange:
    """Inclusive start/end boundaries of one quarter."""

    start: QuarterBoundary
    end: QuarterBoundary

    @property
    def spans_year_end(self) -> bool:
        return self.end.key() < self.start.key()

    def contains(self, d: date) -> bool:
        year = d.year
        if not self.spans_year_end:
            return self.start.anchor(year) <= d <= self.end.anchor(year)
        # Started last year and ends this year, or starts this year and ends next.
        if self.start.anchor(year - 1) <= d <= self.end.anchor(year):
            return True
        return self.start.anchor(year) <= d <= self.end.anchor(year + 1)


QuarterConfig = Mapping[int, QuarterRange]

DEFAULT_QUARTERS: dict[int, QuarterRange] = {
    1: QuarterRange(QuarterBoundary(1, 1), QuarterBoundary(3, 31)),
    2: QuarterRange(QuarterBoundary(4, 1), QuarterBoundary(6, 30)),
    3: QuarterRange(QuarterBoundary(7, 1), QuarterBoundary(9, 30)),
    4: QuarterRange(QuarterBoundary(10, 1), QuarterBoundary(12, 31)),
}


def default_quarter(d: date) -> int:
    """Calendar quarter: Jan-Mar is Q1, Apr-Jun Q2, and so on."""
    return (d.month - 1) // 3 + 1


def quarter_of(d: date, quarters: QuarterConfig | None = None) -> int:
    """Return the quarter (1-4) that ``d`` falls in.

    Configured quarters are tried in ascending order and the first match
    wins. Without a configuration, or when no configured quarter contains
    the date, the calendar quarter is used.
    """
    if not quarters:
        return default_quarter(d)
    for number in sorted(k for k in quarters if k in QUARTER_NUMBERS):
        rng = quarters[number]
        if not isinstance(rng, QuarterRange):
            continue
        try:
            matched = rng.contains(d)
        except (TypeError, ValueError):
            # Boundary that cannot be placed in a calendar year, e.g. month 13
            continue
        if matched:
            return number
    return default_quarter(d)


def quarter_name(quarter: int) -> str:
    return f"Q{quarter}"


def fiscal_quarters(start_month: int) -> dict[int, QuarterRange]:
    """Build four three-month quarters with Q1 starting on ``start_month``/1.

    fiscal_quarters(7) -> Q1 Jul-Sep, Q2 Oct-Dec, Q3 Jan-Mar, Q4 Apr-Jun
    """
    result: dict[int, QuarterRange] = {}
    for number in QUARTER_NUMBERS:
        first = (start_month - 1 + (number - 1) * 3) % 12 + 1
        last = (first + 1) % 12 + 1
        result[number] = QuarterRange(
            QuarterBoundary(first, 1),
            QuarterBoundary(last, calendar.monthrange(2000, last)[1]),
        )
    return result


# --- JSON codec --------------------------------------------------------------

def _valid_boundary(month, day) -> QuarterBoundary | None:
    if not isinstance(month, int) or not isinstance(day, int):
        return None
    if isinstance(month, bool) or isinstance(day, bool):
        return None
    if not 1 <= month <= 12:
        return None
    # Leap-year maximum so Feb 29 is accepted and clamped on anchoring.
    if not 1 <= day <= calendar.monthrange(2000, month)[1]:
        return None
    return QuarterBoundary(month, day)


def _boundary_from_iso(text) -> QuarterBoundary | None:
    if not isinstance(text, str):
        return None
    try:
        parsed = date.fromisoformat(text[:10])
    except ValueError:
        return None
    return QuarterBoundary(parsed.month, parsed.day)


def _range_from_entry(entry) -> QuarterRange | None:
    if isinstance(entry, QuarterRange):
        return entry
    if not isinstance(entry, Mapping):
        return None

    if "start_month" in entry and "end_month" in entry:
        start = _valid_boundary(entry.get("start_month"), entry.get("start_day", 1))
        end_month = entry.get("end_month")
        end_day = entry.get("end_day")
        if end_day is None and isinstance(end_month, int) and 1 <= end_month <= 12:
            end_day = calendar.monthrange(2000, end_month)[1]
        end = _valid_boundary(end_month, end_day)
    elif "startMonth" in entry and "endMonth" in entry:
        start = _valid_boundary(entry.get("startMonth"), 1)
        end_month = entry.get("endMonth")
        end = None
        if isinstance(end_month, int) and 1 <= end_month <= 12:
            end = _valid_boundary(end_month, calendar.monthrange(2000, end_month)[1])
    elif "start" in entry and "end" in entry:
        start = _boundary_from_iso(entry.get("start"))
        end = _boundary_from_iso(entry.get("end"))
    else:
        return None

    if start is None or end is None:
        return None
    return QuarterRange(start, end)


def parse_quarter_config(raw) -> dict[int, QuarterRange] | None:
    """Turn the stored quarter mapping into a QuarterConfig.

    Keys may be ints or their string form (JSON object keys). Entries that
    cannot be understood are skipped; the resolver falls back to calendar
    quarters for any date they would have covered.
    """
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring quarter configuration of type %s", type(raw).__name__)
        return {}

    result: dict[int, QuarterRange] = {}
    for key, entry in raw.items():
        try:
            number = int(key)
        except (TypeError, ValueError):
            logger.warning("Ignoring quarter key %r", key)
            continue
        if number not in QUARTER_NUMBERS:
            logger.warning("Ignoring quarter number %d", number)
            continue
        rng = _range_from_entry(entry)
        if rng is None:
            logger.warning("Ignoring malformed boundaries for %s: %r",
                           quarter_name(number), entry)
            continue
        result[number] = rng
    return result


def quarter_config_to_dict(quarters: QuarterConfig | None) -> dict[str, dict[str, int]] | None:
    """Serialize a QuarterConfig to its canonical JSON shape."""
    if quarters is None:
        return None
    return {
        str(number): {
            "start_month": rng.start.month,
            "start_day": rng.start.day,
            "end_month": rng.end.month,
            "end_day": rng.end.day,
        }
        for number, rng in sorted(quarters.items())
    }
