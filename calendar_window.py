"""Month calendar window (tkinter) with quarter bands and mini calendars."""

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk
from typing import Callable

from calendar_logic import (
    DAY_ABBR,
    DAY_NAMES,
    CalendarMonth,
    build_month,
    day_headers,
    day_of_year,
    shift_months,
    week_number_of,
)
from calendar_state import (
    handle_key,
    next_month_state,
    prev_month_state,
    select_day,
    shift_quarter_state,
    today_state,
)
from print_view import generate_printable_content, open_print_window
from quarters import (
    DEFAULT_QUARTERS,
    QUARTER_NUMBERS,
    fiscal_quarters,
    parse_quarter_config,
    quarter_config_to_dict,
    quarter_name,
    quarter_of,
)
from settings import calendar_config, load_settings, reset_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
WN_FG = "#555555"
OTHER_MONTH_FG = "#AAAAAA"
WEEKEND_FG = "#CC0000"
QUARTER_BG = {1: "#E3F2FD", 2: "#E8F5E9", 3: "#FFF8E1", 4: "#FCE4EC"}
QUARTER_BAND = {1: "#90CAF9", 2: "#A5D6A7", 3: "#FFE082", 4: "#F48FB1"}

MAX_WEEKS = 6


class _MonthPanel:
    """Widget pool for a single month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "wk_header", "day_headers",
                 "week_nums", "day_cells", "main")

    def __init__(self, parent: tk.Frame, fonts: dict, main: bool, on_click) -> None:
        self.main = main
        self.frame = tk.Frame(parent, bg=GRID_BG)
        cell_w = fonts["cell_w"] * (2 if main else 1)
        cell_h = fonts["cell_h"] * (2 if main else 1)

        self.header = tk.Label(
            self.frame, font=fonts["header"] if main else fonts["bold"],
            bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=0, columnspan=8, sticky="we", pady=(0, 2))

        self.wk_header = tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=GRID_BG, fg=WN_FG,
        )
        self.wk_header.grid(row=1, column=0)

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self.frame, font=fonts["bold"], bg=GRID_BG, fg="#333333")
            lbl.grid(row=1, column=col + 1)
            self.day_headers.append(lbl)

        self.week_nums: list[tk.Canvas] = []
        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(MAX_WEEKS):
            grid_row = r + 2
            wn = tk.Canvas(
                self.frame, width=fonts["cell_w"], height=cell_h,
                bg=GRID_BG, highlightthickness=0, borderwidth=0,
            )
            wn.grid(row=grid_row, column=0, padx=(0, 2), pady=1)
            self.week_nums.append(wn)

            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=cell_w, height=cell_h,
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=grid_row, column=c + 1, padx=1, pady=1)
                cell.bind("<Button-1>", on_click)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class CalendarWindow:
    """Month view with adjacent mini calendars."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)

        self._setup_fonts()

        settings = load_settings()
        self.config = calendar_config(settings)
        self.months_before: int = settings["months_before"]
        self.months_after: int = settings["months_after"]

        self.state = today_state(date.today())
        self.on_config_change: Callable[[], None] | None = None

        # Widget-to-date mapping (filled during _rebuild)
        self._widget_dates: dict[int, date] = {}

        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        self._panel_fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "small": self.font_small,
            "cell_w": _tmp.winfo_reqwidth(), "cell_h": _tmp.winfo_reqheight(),
        }
        _tmp.destroy()

        self._panels: list[_MonthPanel] = []
        self._build_shell()
        self._build_panels()
        self._rebuild()

        self.root.bind("<Key>", self._on_key)
        self.root.bind("<Control-Prior>", lambda _e: self._navigate_quarter(-1))
        self.root.bind("<Control-Next>", lambda _e: self._navigate_quarter(1))
        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=12, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_small = tkfont.Font(family=base, size=7)

    @staticmethod
    def _title() -> str:
        return f"Quarter Calendar  Day: {day_of_year(date.today())}"

    # ------------------------------------------------------------------
    # Build shell (once) — nav bar, info line, legend, months, footer
    # ------------------------------------------------------------------
    def _nav_button(self, parent: tk.Frame, text: str, command, side: str,
                    font=None, fg: str = "black") -> None:
        btn = tk.Label(parent, text=text, font=font or self.font_nav, bg=GRID_BG,
                       fg=fg, cursor="hand2")
        btn.pack(side=side, padx=6)
        btn.bind("<Button-1>", lambda _e: command())

    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4)

        # Navigation row: ◀◀  ◀  Today  ▶  ▶▶      Print  Settings
        nav = tk.Frame(self._outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))
        self._nav_button(nav, "◀◀", lambda: self._navigate_quarter(-1), "left")
        self._nav_button(nav, "◀", lambda: self._navigate(-1), "left")
        self._nav_button(nav, "Today", self._go_today, "left",
                         font=self.font_bold, fg=ACCENT)
        self._nav_button(nav, "▶", lambda: self._navigate(1), "left")
        self._nav_button(nav, "▶▶", lambda: self._navigate_quarter(1), "left")
        self._nav_button(nav, "Settings", self.open_settings, "right",
                         font=self.font_bold, fg=ACCENT)
        self._nav_button(nav, "Print", self.print_year, "right",
                         font=self.font_bold, fg=ACCENT)

        self._info_label = tk.Label(self._outer, font=self.font_normal,
                                    bg=GRID_BG, fg="#333333")
        self._info_label.pack(fill="x")

        self._legend = tk.Frame(self._outer, bg=GRID_BG)
        self._legend.pack(fill="x", pady=(2, 4))

        self._months_frame = tk.Frame(self._outer, bg=GRID_BG)
        self._months_frame.pack()

        self._footer_label = tk.Label(
            self._outer, font=self.font_normal, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    def _build_panels(self) -> None:
        for panel in self._panels:
            panel.frame.destroy()
        self._panels = []
        total = self.months_before + 1 + self.months_after
        for i in range(total):
            main = i == self.months_before
            panel = _MonthPanel(self._months_frame, self._panel_fonts, main,
                                self._on_cell_click)
            panel.frame.grid(row=0, column=i, padx=6, pady=2, sticky="n")
            self._panels.append(panel)

    # ------------------------------------------------------------------
    # Rebuild month panels from fresh CalendarMonth data
    # ------------------------------------------------------------------
    def _build(self, d: date, today: date) -> CalendarMonth:
        return build_month(
            d, self.config.week_starts_on, self.config.quarters,
            today=today, first_week_min_days=self.config.first_week_min_days,
        )

    def _rebuild(self) -> None:
        self._widget_dates.clear()
        today = date.today()
        main_month = None

        for i, panel in enumerate(self._panels):
            offset = i - self.months_before
            month = self._build(shift_months(self.state.current, offset), today)
            self._fill_panel(panel, month)
            if panel.main:
                main_month = month

        if main_month is not None:
            self._update_legend(main_month)
        self._info_label.configure(text=self._info_text(today))
        self._footer_label.configure(text=self._footer_text())

    def _fill_panel(self, panel: _MonthPanel, month: CalendarMonth) -> None:
        """Reconfigure an existing panel's widgets for ``month``."""
        panel.header.configure(text=f"{month.month_name} {month.year}")

        show_wn = self.config.show_week_numbers
        if show_wn:
            panel.wk_header.grid()
        else:
            panel.wk_header.grid_remove()

        for col, name in enumerate(day_headers(self.config.week_starts_on, DAY_ABBR)):
            fg = WEEKEND_FG if name in ("Sat", "Sun") else "#333333"
            panel.day_headers[col].configure(text=name, fg=fg)

        for r in range(MAX_WEEKS):
            wn = panel.week_nums[r]
            if r >= len(month.weeks):
                wn.grid_remove()
                for cell in panel.day_cells[r]:
                    cell.grid_remove()
                continue

            week = month.weeks[r]
            if show_wn:
                wn.grid()
                self._draw_week(wn, week.week_number, week.quarter_band)
            else:
                wn.grid_remove()

            for c, day in enumerate(week.days):
                cell = panel.day_cells[r][c]
                cell.grid()
                self._draw_day(cell, day, panel.main)
                self._widget_dates[id(cell)] = day.date

    # ------------------------------------------------------------------
    # Canvas drawing
    # ------------------------------------------------------------------
    @staticmethod
    def _canvas_size(canvas: tk.Canvas) -> tuple[int, int]:
        w = canvas.winfo_width()
        h = canvas.winfo_height()
        if w <= 1:
            w = int(canvas["width"])
        if h <= 1:
            h = int(canvas["height"])
        return w, h

    def _draw_week(self, canvas: tk.Canvas, number: int,
                   band: tuple[int, int]) -> None:
        canvas.delete("all")
        w, h = self._canvas_size(canvas)
        if not self.config.show_quarters:
            canvas.configure(bg=GRID_BG)
        elif band[0] == band[1]:
            canvas.configure(bg=QUARTER_BAND[band[0]])
        else:
            # Week straddles two quarters: first day's colour on top, last day's below
            canvas.configure(bg=QUARTER_BAND[band[0]])
            canvas.create_rectangle(0, h // 2, w, h, fill=QUARTER_BAND[band[1]],
                                    outline="")
        canvas.create_text(w // 2, h // 2, text=str(number), fill=WN_FG,
                           font=self.font_bold)

    def _day_colors(self, day) -> tuple[str, str]:
        if self.state.selected == day.date:
            bg = SEL_BG
        elif self.config.show_quarters:
            bg = QUARTER_BG[day.quarter]
        else:
            bg = GRID_BG
        if not day.is_current_month:
            fg = OTHER_MONTH_FG
        elif day.date.weekday() >= 5:
            fg = WEEKEND_FG
        else:
            fg = "black"
        return bg, fg

    def _draw_day(self, cell: tk.Canvas, day, main: bool) -> None:
        cell.delete("all")
        w, h = self._canvas_size(cell)
        bg, fg = self._day_colors(day)
        cell.configure(bg=bg, cursor="hand2")
        font = self.font_bold if day.is_today else self.font_normal
        if day.is_today:
            cell.create_rectangle(1, 1, w - 2, h - 2, outline=ACCENT, width=2)

        if main and self.config.show_day_of_year:
            cell.create_text(w // 2, h // 2 - 4, text=str(day.day_of_month),
                             fill=fg, font=font)
            cell.create_text(w - 3, h - 2, text=str(day.day_of_year), anchor="se",
                             fill=OTHER_MONTH_FG, font=self.font_small)
        else:
            cell.create_text(w // 2, h // 2, text=str(day.day_of_month),
                             fill=fg, font=font)

    def _update_legend(self, month: CalendarMonth) -> None:
        for child in self._legend.winfo_children():
            child.destroy()
        if not self.config.show_quarters:
            return
        tk.Label(self._legend, text="Quarters:", font=self.font_bold,
                 bg=GRID_BG).pack(side="left", padx=(6, 4))
        for quarter in month.quarters:
            tk.Label(self._legend, text="  ", bg=QUARTER_BAND[quarter],
                     relief="solid", borderwidth=1).pack(side="left", padx=(4, 2))
            tk.Label(self._legend, text=quarter_name(quarter), font=self.font_normal,
                     bg=GRID_BG).pack(side="left")

    # ------------------------------------------------------------------
    # Info / footer text
    # ------------------------------------------------------------------
    def _info_text(self, today: date) -> str:
        d = self.state.selected or today
        week = week_number_of(d, self.config.week_starts_on,
                              self.config.first_week_min_days)
        quarter = quarter_of(d, self.config.quarters)
        return (f"{d.strftime('%d.%m.%Y')}   Week {week}   "
                f"Day {day_of_year(d)}   {quarter_name(quarter)}")

    @staticmethod
    def _footer_text() -> str:
        return f"Today: {date.today().strftime('%d.%m.%Y')}"

    # ------------------------------------------------------------------
    # Mouse / keyboard
    # ------------------------------------------------------------------
    def _on_cell_click(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d is None:
            return
        self.state = select_day(self.state, d)
        self._rebuild()

    def _on_key(self, event: tk.Event) -> None:
        new_state = handle_key(self.state, event.keysym, today=date.today())
        if new_state is None:
            return
        self.state = new_state
        self._rebuild()

    def _on_escape(self, _event: tk.Event) -> None:
        if self.state.selected is not None:
            self.state = select_day(self.state, self.state.selected)
            self._rebuild()
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        if direction < 0:
            self.state = prev_month_state(self.state)
        else:
            self.state = next_month_state(self.state)
        self._rebuild()

    def _navigate_quarter(self, direction: int) -> None:
        self.state = shift_quarter_state(self.state, direction)
        self._rebuild()

    def _go_today(self) -> None:
        self.state = today_state(date.today())
        self._rebuild()

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------
    def print_year(self) -> None:
        year = self.state.current.year
        html = generate_printable_content(year, self.config, today=date.today())
        open_print_window(html)

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def _spinbox(self, parent, low: int, high: int, value: int) -> tk.Spinbox:
        spin = tk.Spinbox(parent, from_=low, to=high, width=4, font=self.font_normal)
        spin.delete(0, "end")
        spin.insert(0, str(value))
        return spin

    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        # --- Weeks ---
        tk.Label(frame, text="Week starts on:", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        week_start_var = tk.StringVar(value=DAY_NAMES[self.config.week_starts_on])
        tk.OptionMenu(frame, week_start_var, *DAY_NAMES).grid(
            row=0, column=1, sticky="w", padx=(8, 0), pady=4,
        )

        tk.Label(frame, text="Week 1 contains January:", font=self.font_normal).grid(
            row=1, column=0, sticky="w", pady=4,
        )
        spin_min_days = self._spinbox(frame, 1, 7, self.config.first_week_min_days)
        spin_min_days.grid(row=1, column=1, sticky="w", padx=(8, 0), pady=4)

        # --- Quarters ---
        q_frame = tk.LabelFrame(frame, text="Quarters", font=self.font_bold,
                                padx=8, pady=4)
        q_frame.grid(row=2, column=0, columnspan=2, sticky="we", pady=(8, 0))

        custom_var = tk.BooleanVar(value=bool(self.config.quarters))
        tk.Checkbutton(q_frame, text="Custom quarter boundaries", variable=custom_var,
                       font=self.font_normal).grid(row=0, column=0, columnspan=5,
                                                   sticky="w")
        for col, text in enumerate(("", "Start month", "Start day", "End month", "End day")):
            tk.Label(q_frame, text=text, font=self.font_normal).grid(row=1, column=col)

        current = dict(DEFAULT_QUARTERS)
        current.update(self.config.quarters or {})
        boundary_spins: dict[int, tuple[tk.Spinbox, ...]] = {}
        for number in QUARTER_NUMBERS:
            row = number + 1
            rng = current[number]
            tk.Label(q_frame, text=quarter_name(number), font=self.font_bold,
                     bg=QUARTER_BAND[number]).grid(row=row, column=0, padx=(0, 6))
            spins = (
                self._spinbox(q_frame, 1, 12, rng.start.month),
                self._spinbox(q_frame, 1, 31, rng.start.day),
                self._spinbox(q_frame, 1, 12, rng.end.month),
                self._spinbox(q_frame, 1, 31, rng.end.day),
            )
            for col, spin in enumerate(spins):
                spin.grid(row=row, column=col + 1, padx=2, pady=2)
            boundary_spins[number] = spins

        fiscal_row = tk.Frame(q_frame)
        fiscal_row.grid(row=6, column=0, columnspan=5, sticky="w", pady=(4, 0))
        tk.Label(fiscal_row, text="Fiscal year starts in month:",
                 font=self.font_normal).pack(side="left")
        spin_fiscal = self._spinbox(fiscal_row, 1, 12, current[1].start.month)
        spin_fiscal.pack(side="left", padx=4)

        def apply_fiscal() -> None:
            try:
                start_month = int(spin_fiscal.get())
            except ValueError:
                return
            if not 1 <= start_month <= 12:
                return
            for number, rng in fiscal_quarters(start_month).items():
                values = (rng.start.month, rng.start.day, rng.end.month, rng.end.day)
                for spin, value in zip(boundary_spins[number], values):
                    spin.delete(0, "end")
                    spin.insert(0, str(value))
            custom_var.set(True)

        tk.Button(fiscal_row, text="Apply", command=apply_fiscal).pack(side="left")

        # --- Display ---
        d_frame = tk.LabelFrame(frame, text="Display", font=self.font_bold,
                                padx=8, pady=4)
        d_frame.grid(row=3, column=0, columnspan=2, sticky="we", pady=(8, 0))
        show_vars = {
            "show_week_numbers": tk.BooleanVar(value=self.config.show_week_numbers),
            "show_day_of_year": tk.BooleanVar(value=self.config.show_day_of_year),
            "show_quarters": tk.BooleanVar(value=self.config.show_quarters),
        }
        labels = {
            "show_week_numbers": "Week numbers",
            "show_day_of_year": "Day of year",
            "show_quarters": "Quarter colours",
        }
        for row, (key, var) in enumerate(show_vars.items()):
            tk.Checkbutton(d_frame, text=labels[key], variable=var,
                           font=self.font_normal).grid(row=row, column=0, sticky="w")

        tk.Label(d_frame, text="Months before:", font=self.font_normal).grid(
            row=0, column=1, sticky="w", padx=(16, 0),
        )
        spin_before = self._spinbox(d_frame, 0, 6, self.months_before)
        spin_before.grid(row=0, column=2, padx=(8, 0))
        tk.Label(d_frame, text="Months after:", font=self.font_normal).grid(
            row=1, column=1, sticky="w", padx=(16, 0),
        )
        spin_after = self._spinbox(d_frame, 0, 6, self.months_after)
        spin_after.grid(row=1, column=2, padx=(8, 0))

        # --- Buttons ---
        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=4, column=0, columnspan=2, pady=(8, 0))

        def on_ok() -> None:
            try:
                min_days = max(1, min(7, int(spin_min_days.get())))
                months_before = max(0, min(6, int(spin_before.get())))
                months_after = max(0, min(6, int(spin_after.get())))
                raw_quarters = {
                    str(number): {
                        "start_month": int(spins[0].get()),
                        "start_day": int(spins[1].get()),
                        "end_month": int(spins[2].get()),
                        "end_day": int(spins[3].get()),
                    }
                    for number, spins in boundary_spins.items()
                }
            except ValueError:
                return

            settings = load_settings()
            settings["week_starts_on"] = DAY_NAMES.index(week_start_var.get())
            settings["first_week_min_days"] = min_days
            settings["quarters"] = (
                quarter_config_to_dict(parse_quarter_config(raw_quarters))
                if custom_var.get() else None
            )
            for key, var in show_vars.items():
                settings[key] = var.get()
            settings["months_before"] = months_before
            settings["months_after"] = months_after
            save_settings(settings)
            dlg.destroy()
            self._apply_settings(settings)

        def on_reset() -> None:
            dlg.destroy()
            self._apply_settings(reset_settings())

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Reset", width=8, command=on_reset).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    def _apply_settings(self, settings: dict) -> None:
        self.config = calendar_config(settings)
        self.months_before = settings["months_before"]
        self.months_after = settings["months_after"]
        logger.info("Calendar settings applied: week starts on %s, %s quarters",
                    DAY_NAMES[self.config.week_starts_on],
                    "custom" if self.config.quarters else "calendar")
        self._build_panels()
        self._rebuild()
        if self.on_config_change is not None:
            self.on_config_change()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.state = today_state(date.today())
        self.root.title(self._title())
        self._rebuild()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"+{x}+{y}")
