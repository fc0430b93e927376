import customtkinter as ctk

from models.export_result import ExportResult

SEVERITY_COLORS = {
    "success": "#4CAF50",
    "warning": "#FF9800",
    "error":   "#F44336",
}


class AlertBanner(ctk.CTkFrame):
    """A dismissible colored banner for export outcomes."""

    def __init__(self, master, message: str, severity: str = "success",
                 auto_dismiss_ms: int | None = None, **kwargs):
        super().__init__(
            master, fg_color=SEVERITY_COLORS.get(severity, SEVERITY_COLORS["success"]),
            corner_radius=6, **kwargs,
        )
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", padx=10, pady=6, wraplength=420, justify="left",
        ).grid(row=0, column=0, sticky="ew")

        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent",
            hover_color="#ffffff",
            text_color="white",
            command=self.destroy,
        ).grid(row=0, column=1, padx=(0, 4))

        if auto_dismiss_ms:
            self.after(auto_dismiss_ms, self._dismiss)

    @classmethod
    def for_result(cls, master, result: ExportResult, **kwargs) -> "AlertBanner":
        if result.succeeded:
            return cls(master, f"Exported to {result.artifact_path}", "success",
                       auto_dismiss_ms=8000, **kwargs)
        if result.capability_unavailable:
            message = f"{result.error_message}. The file was saved to {result.artifact_path}"
            return cls(master, message, "warning", **kwargs)
        return cls(master, result.error_message or "Export failed", "error", **kwargs)

    def _dismiss(self):
        if self.winfo_exists():
            self.destroy()
