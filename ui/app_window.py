import threading
import customtkinter as ctk

from services.export_service import ExportService
from models.export_options import ExportOptions
from ui.components.alert_banner import AlertBanner
from ui.components.export_dialog import ExportDialog
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT
from utils.currency import format_currency


class AppWindow(ctk.CTk):
    """Main window: all-time totals of the offline data plus the export entry point."""

    def __init__(
        self,
        export_service: ExportService,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._export_svc = export_service
        self._date_format = date_format
        self._load_gen = 0
        self._banner: AlertBanner | None = None

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, 320)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT // 2}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_totals()

        self.after(100, self._load)

    # ── Header ──────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=15, weight="bold"),
        ).pack(side="left", padx=12, pady=8)

        ctk.CTkButton(
            bar, text="Export Data…", width=120,
            command=self._open_export_dialog,
        ).pack(side="right", padx=12)

        ctk.CTkButton(
            bar, text="Refresh", width=80,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._load,
        ).pack(side="right", padx=4)

    # ── Banner ──────────────────────────────────────────────────────────────
    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8, pady=(6, 0))
        self._banner_frame.grid_columnconfigure(0, weight=1)

    def _show_banner(self, banner: AlertBanner):
        if self._banner is not None and self._banner.winfo_exists():
            self._banner.destroy()
        self._banner = banner
        banner.grid(row=0, column=0, sticky="ew")

    # ── Totals ──────────────────────────────────────────────────────────────
    def _build_totals(self):
        card = ctk.CTkFrame(self, corner_radius=8)
        card.grid(row=2, column=0, sticky="nsew", padx=8, pady=8)
        for col in range(3):
            card.grid_columnconfigure(col, weight=1)

        self._total_vars: dict[str, ctk.StringVar] = {}
        for col, (key, label, color) in enumerate([
            ("expenses", "Total Expenses", "#F44336"),
            ("deposits", "Total Deposits", "#4CAF50"),
            ("balance", "Balance", "#2196F3"),
        ]):
            ctk.CTkLabel(card, text=label, text_color="gray60").grid(row=0, column=col, pady=(16, 2))
            var = ctk.StringVar(value="…")
            self._total_vars[key] = var
            ctk.CTkLabel(
                card, textvariable=var, text_color=color,
                font=ctk.CTkFont(size=20, weight="bold"),
            ).grid(row=1, column=col, pady=(0, 4))

        self._counts_var = ctk.StringVar(value="")
        ctk.CTkLabel(
            card, textvariable=self._counts_var,
            text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=2, column=0, columnspan=3, pady=(4, 12))

    def _load(self):
        self._load_gen += 1
        gen = self._load_gen

        def fetch():
            data = self._export_svc.try_preview(ExportOptions())
            self.after(0, lambda: self._on_data_ready(gen, data))

        threading.Thread(target=fetch, daemon=True).start()

    def _on_data_ready(self, gen: int, data):
        if gen != self._load_gen:
            return  # superseded by a newer load
        if not self.winfo_exists():
            return
        if data is None:
            for var in self._total_vars.values():
                var.set("—")
            self._counts_var.set("Stored transactions could not be read.")
            return
        summary, n_exp, n_dep = data
        self._total_vars["expenses"].set(format_currency(summary.total_expenses))
        self._total_vars["deposits"].set(format_currency(summary.total_deposits))
        self._total_vars["balance"].set(format_currency(summary.balance))
        self._counts_var.set(f"{n_exp} expenses · {n_dep} deposits")

    # ── Export ──────────────────────────────────────────────────────────────
    def _open_export_dialog(self):
        dlg = ExportDialog(self, self._export_svc, date_format=self._date_format)
        self.wait_window(dlg)
        if dlg.result is not None:
            self._show_banner(AlertBanner.for_result(self._banner_frame, dlg.result))
