import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from datetime import date, datetime, time
from utils.date_helpers import format_display_date, parse_date, parse_display_date


class DatePickerWidget(ctk.CTkFrame):
    """Entry (in the user's display format) + calendar popup button.

    .get_date() returns a date or None; used for custom export range bounds.
    """

    def __init__(
        self,
        master,
        initial_date: date | None = None,
        date_format: str = "MM/DD/YYYY",
        state: str = "normal",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._date_format = date_format
        self._popup: ctk.CTkToplevel | None = None
        self._var = tk.StringVar(value=format_display_date(initial_date, date_format))

        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110, state=state)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._on_focus_out)
        self._entry.bind("<Return>", self._on_focus_out)

        self._btn = ctk.CTkButton(
            self, text="📅", width=32, state=state, command=self._open_popup
        )
        self._btn.grid(row=0, column=1, padx=(4, 0))

    def get_date(self) -> date | None:
        return self._parse(self._var.get())

    def start_of_day(self) -> datetime | None:
        d = self.get_date()
        return datetime.combine(d, time.min) if d else None

    def end_of_day(self) -> datetime | None:
        d = self.get_date()
        return datetime.combine(d, time.max) if d else None

    def set_enabled(self, enabled: bool):
        state = "normal" if enabled else "disabled"
        self._entry.configure(state=state)
        self._btn.configure(state=state)

    def is_blank(self) -> bool:
        return not self._var.get().strip()

    def is_valid(self) -> bool:
        return self.get_date() is not None

    def _parse(self, raw: str) -> date | None:
        raw = raw.strip()
        if not raw:
            return None
        d = parse_display_date(raw, self._date_format)
        if d is None:
            d = parse_date(raw.replace("/", "-").replace(".", "-"))
        return d

    def _on_focus_out(self, _event=None):
        raw = self._var.get().strip()
        if not raw:
            self._reset_border()
            return
        d = self._parse(raw)
        if d:
            self._var.set(format_display_date(d, self._date_format))
            self._reset_border()
        else:
            self._entry.configure(border_color="#F44336")

    def _reset_border(self):
        self._entry.configure(border_color=("gray65", "gray35"))

    def _open_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
            self._popup = None
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        # Theme the calendar to match CTk appearance
        if ctk.get_appearance_mode() == "Dark":
            bg, fg = "#2b2b2b", "#ffffff"
        else:
            bg, fg = "#ffffff", "#000000"
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = self.get_date() or date.today()
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_date_selected(cal, popup))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

        popup.bind("<FocusOut>", lambda e: self._maybe_close(popup))

    def _on_date_selected(self, cal, popup):
        # cal always returns yyyy-mm-dd
        d = parse_date(cal.get_date())
        if d:
            self._var.set(format_display_date(d, self._date_format))
        self._reset_border()
        popup.destroy()
        self._popup = None

    def _maybe_close(self, popup):
        try:
            focused = popup.focus_get()
        except (KeyError, tk.TclError):
            focused = None
        if focused is None or not str(focused).startswith(str(popup)):
            popup.destroy()
            self._popup = None
