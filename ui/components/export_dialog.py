import logging
import threading
import customtkinter as ctk
from tkinter import messagebox

from models.export_options import DateRange, ExportFormat, ExportOptions
from models.export_result import ErrorKind, ExportResult
from services.export_service import ExportService
from ui.components.date_picker import DatePickerWidget
from utils.constants import FORMAT_LABELS, RANGE_LABELS
from utils.currency import format_currency

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MSG = "Unexpected error during export"


class ExportDialog(ctk.CTkToplevel):
    """Modal export options dialog. Outcome is left in .result (None if closed)."""

    def __init__(
        self,
        master,
        export_service: ExportService,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = export_service
        self._date_format = date_format
        self._preview_gen = 0
        self.result: ExportResult | None = None

        self.title("Export Data")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        self._format_var = ctk.StringVar(value=ExportFormat.CSV.value)
        self._range_var = ctk.StringVar(value=DateRange.ALL.value)
        self._expenses_var = ctk.BooleanVar(value=True)
        self._deposits_var = ctk.BooleanVar(value=True)
        self._preview_var = ctk.StringVar(value="")
        self._status_var = ctk.StringVar(value="")

        self._build_format_section(row=0)
        self._build_range_section(row=1)
        self._build_include_section(row=2)
        self._build_buttons(row=3)

        self.transient(master)
        self.grab_set()
        self._center()
        self._refresh_preview()

    # ── Sections ──────────────────────────────────────────────────────────────

    def _make_section(self, title: str, row: int) -> ctk.CTkFrame:
        outer = ctk.CTkFrame(self, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=16, pady=(12 if row == 0 else 4, 4))
        outer.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            outer, text=title,
            font=ctk.CTkFont(size=14, weight="bold"),
            anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(8, 2))
        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        return inner

    def _build_format_section(self, row: int):
        section = self._make_section("Export Format", row)
        for i, fmt in enumerate(ExportFormat):
            ctk.CTkRadioButton(
                section, text=FORMAT_LABELS[fmt.value],
                variable=self._format_var, value=fmt.value,
            ).grid(row=i, column=0, sticky="w", padx=12, pady=2)

    def _build_range_section(self, row: int):
        section = self._make_section("Date Range", row)
        for i, rng in enumerate(DateRange):
            ctk.CTkRadioButton(
                section, text=RANGE_LABELS[rng.value],
                variable=self._range_var, value=rng.value,
                command=self._on_range_changed,
            ).grid(row=i, column=0, columnspan=2, sticky="w", padx=12, pady=2)

        custom = ctk.CTkFrame(section, fg_color="transparent")
        custom.grid(row=len(DateRange), column=0, sticky="w", padx=36, pady=(2, 0))
        ctk.CTkLabel(custom, text="From:").pack(side="left", padx=(0, 4))
        self._start_picker = DatePickerWidget(custom, date_format=self._date_format, state="disabled")
        self._start_picker.pack(side="left", padx=(0, 8))
        ctk.CTkLabel(custom, text="To:").pack(side="left", padx=(0, 4))
        self._end_picker = DatePickerWidget(custom, date_format=self._date_format, state="disabled")
        self._end_picker.pack(side="left")

    def _build_include_section(self, row: int):
        section = self._make_section("Include Data", row)
        ctk.CTkCheckBox(
            section, text="Expenses", variable=self._expenses_var,
            command=self._refresh_preview,
        ).grid(row=0, column=0, sticky="w", padx=12, pady=2)
        ctk.CTkCheckBox(
            section, text="Deposits", variable=self._deposits_var,
            command=self._refresh_preview,
        ).grid(row=1, column=0, sticky="w", padx=12, pady=2)
        ctk.CTkLabel(
            section, textvariable=self._preview_var,
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=2, column=0, sticky="w", padx=12, pady=(6, 0))

    def _build_buttons(self, row: int):
        ctk.CTkLabel(
            self, textvariable=self._status_var,
            text_color="#FF9800", font=ctk.CTkFont(size=11),
        ).grid(row=row, column=0, sticky="w", padx=20)

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=row + 1, column=0, pady=(4, 16), padx=16, sticky="e")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))

        self._email_btn = ctk.CTkButton(
            btn_frame, text="Export & Email", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._export_email,
        )
        self._email_btn.pack(side="left", padx=(0, 8))

        self._share_btn = ctk.CTkButton(
            btn_frame, text="Download Export", width=130,
            command=self._export_share,
        )
        self._share_btn.pack(side="left")

    # ── Options ───────────────────────────────────────────────────────────────

    def _on_range_changed(self):
        custom = self._range_var.get() == DateRange.CUSTOM.value
        self._start_picker.set_enabled(custom)
        self._end_picker.set_enabled(custom)
        self._refresh_preview()

    def _current_options(self) -> ExportOptions:
        custom = self._range_var.get() == DateRange.CUSTOM.value
        return ExportOptions(
            format=self._format_var.get(),
            date_range=self._range_var.get(),
            start_date=self._start_picker.start_of_day() if custom else None,
            end_date=self._end_picker.end_of_day() if custom else None,
            include_expenses=self._expenses_var.get(),
            include_deposits=self._deposits_var.get(),
        )

    def _validated_options(self) -> ExportOptions | None:
        for picker in (self._start_picker, self._end_picker):
            if self._range_var.get() == DateRange.CUSTOM.value and not picker.is_blank() and not picker.is_valid():
                messagebox.showwarning("Invalid Date", "Please enter a valid date.", parent=self)
                return None
        options = self._current_options()
        try:
            options.validate()
        except ValueError as e:
            messagebox.showwarning("Selection Required", str(e), parent=self)
            return None
        return options

    # ── Preview ───────────────────────────────────────────────────────────────

    def _refresh_preview(self):
        self._preview_gen += 1
        gen = self._preview_gen
        options = self._current_options()

        def fetch():
            data = self._svc.try_preview(options)
            if data is None:
                text = "Stored transactions could not be read."
            else:
                summary, n_exp, n_dep = data
                text = (
                    f"{n_exp} expenses, {n_dep} deposits · "
                    f"Balance {format_currency(summary.balance)}"
                )
            self.after(0, lambda: self._on_preview_ready(gen, text))

        threading.Thread(target=fetch, daemon=True).start()

    def _on_preview_ready(self, gen: int, text: str):
        if gen != self._preview_gen:
            return  # superseded by a newer preview
        if not self.winfo_exists():
            return
        self._preview_var.set(text)

    # ── Export actions ────────────────────────────────────────────────────────

    def _set_busy(self, busy: bool, text: str = ""):
        state = "disabled" if busy else "normal"
        self._share_btn.configure(state=state)
        self._email_btn.configure(state=state)
        self._status_var.set(text)

    def _export_share(self):
        options = self._validated_options()
        if options is None:
            return
        self._set_busy(True, "Exporting…")

        def work():
            try:
                result = self._svc.export(options)
            except Exception:
                logger.error("Export worker failed", exc_info=True)
                result = ExportResult.failed(ErrorKind.WRITE_FAILED, UNEXPECTED_ERROR_MSG)
            self.after(0, lambda: self._on_exported_for_share(result))

        threading.Thread(target=work, daemon=True).start()

    def _on_exported_for_share(self, result: ExportResult):
        if not self.winfo_exists():
            return
        if result.succeeded:
            # File dialogs must run on the Tk main thread
            result = self._svc.share(result.artifact_path)
        self._finish(result)

    def _export_email(self):
        options = self._validated_options()
        if options is None:
            return
        dlg = ctk.CTkInputDialog(
            text="Recipient email (leave blank for the default):",
            title="Email Export",
        )
        recipient = dlg.get_input()
        if recipient is None:
            return
        self._set_busy(True, "Exporting and sending…")

        def work():
            try:
                result = self._svc.export_and_email(options, recipient.strip() or None)
            except Exception:
                logger.error("Export worker failed", exc_info=True)
                result = ExportResult.failed(ErrorKind.EMAIL_FAILED, UNEXPECTED_ERROR_MSG)
            self.after(0, lambda: self._finish(result))

        threading.Thread(target=work, daemon=True).start()

    def _finish(self, result: ExportResult):
        if not self.winfo_exists():
            return
        if result.succeeded:
            self.result = result
            self.destroy()
            return
        self._set_busy(False)
        if result.capability_unavailable:
            messagebox.showinfo("Not Available", result.error_message, parent=self)
            # The file was still written; report it to the caller
            self.result = result
        else:
            messagebox.showerror("Export Failed", result.error_message, parent=self)

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
