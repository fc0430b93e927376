import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from services.delivery import DeliveryAdapter
from services.export_service import ExportService
from services.mail_composer import SmtpMailComposer
from services.platform_share import FileDialogShare
from services.record_source import OfflineRecordSource

from ui.app_window import AppWindow
from utils.app_config import get_setting, get_smtp_settings, load_config


def main():
    # ── Bootstrap: config and logging ─────────────────────────────────────────
    config = load_config()
    logging.basicConfig(
        level=str(get_setting("log_level", config)).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    date_format = get_setting("date_format", config)

    # ── Services ─────────────────────────────────────────────────────────────
    record_source = OfflineRecordSource(get_setting("snapshot_path", config))
    delivery = DeliveryAdapter(
        export_dir=get_setting("export_dir", config),
        share_capability=FileDialogShare(),
        mail_composer=SmtpMailComposer(get_smtp_settings(config)),
        date_format=date_format,
    )
    export_svc = ExportService(record_source, delivery, date_format=date_format)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode("system")
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(export_service=export_svc, date_format=date_format)
    app.mainloop()


if __name__ == "__main__":
    main()
