"""Displayed/selected date state and keyboard navigation, kept free of tkinter."""

from dataclasses import dataclass, replace
from datetime import date, timedelta

from calendar_logic import shift_month, shift_quarter

# tkinter keysym -> days to move the selection
ARROW_STEPS = {"Left": -1, "Right": 1, "Up": -7, "Down": 7}


@dataclass(frozen=True)
class CalendarState:
    current: date
    selected: date | None = None


def today_state(today: date) -> CalendarState:
    return CalendarState(current=today, selected=today)


def prev_month_state(state: CalendarState) -> CalendarState:
    return replace(state, current=shift_month(state.current, "prev"))


def next_month_state(state: CalendarState) -> CalendarState:
    return replace(state, current=shift_month(state.current, "next"))


def shift_quarter_state(state: CalendarState, quarters: int) -> CalendarState:
    return replace(state, current=shift_quarter(state.current, quarters))


def select_day(state: CalendarState, d: date) -> CalendarState:
    """Select ``d``; selecting the already-selected day clears the selection."""
    if state.selected == d:
        return replace(state, selected=None)
    return replace(state, selected=d)


def _same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def handle_key(state: CalendarState, keysym: str, *, today: date) -> CalendarState | None:
    """Apply a key press. Returns None when the key is not a navigation key."""
    if keysym in ARROW_STEPS:
        if state.selected is None:
            return today_state(today)
        selected = state.selected + timedelta(days=ARROW_STEPS[keysym])
        current = state.current if _same_month(selected, state.current) else selected
        return CalendarState(current=current, selected=selected)
    if keysym == "Prior":
        return prev_month_state(state)
    if keysym == "Next":
        return next_month_state(state)
    if keysym == "Home":
        return today_state(today)
    return None
