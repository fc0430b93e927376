"""Desktop share surface: a native "save as" dialog that copies the artifact."""
import logging
import shutil
import tkinter as tk
from pathlib import Path
from tkinter import filedialog

from utils.constants import FILE_TYPE_LABELS

logger = logging.getLogger(__name__)


class FileDialogShare:
    """Must be called from the Tk main thread."""

    def is_available(self) -> bool:
        if getattr(tk, "_default_root", None) is not None:
            return True
        try:
            root = tk.Tk()
        except tk.TclError:
            return False
        root.destroy()
        return True

    def share(self, path: str, mime_type: str, dialog_title: str) -> bool:
        """Return False when the user cancels the dialog.

        Tk errors surface as OSError, the failure type callers handle.
        """
        src = Path(path)
        ext = src.suffix
        label = FILE_TYPE_LABELS.get(ext.lstrip("."), "Export files")
        try:
            target = filedialog.asksaveasfilename(
                title=dialog_title,
                initialfile=src.name,
                defaultextension=ext,
                filetypes=[(f"{label} ({mime_type})", f"*{ext}"), ("All files", "*.*")],
            )
        except tk.TclError as e:
            raise OSError(f"Save dialog failed: {e}") from e
        if not target:
            return False
        if Path(target).resolve() != src.resolve():
            shutil.copyfile(src, target)
        logger.info("Export saved to %s", target)
        return True
