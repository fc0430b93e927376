"""Offline record store: the locally cached expenses and deposits.

The snapshot file is a JSON object with "expenses" and "deposits" arrays.
Older writers wrapped each array as {"$values": [...]}; both shapes load.
"""
import json
import logging
import os
from pathlib import Path

from models.transaction import RecordSnapshot

logger = logging.getLogger(__name__)


class RecordSourceError(Exception):
    """The snapshot file exists but cannot be read as records."""


def _unwrap(value) -> list[dict]:
    if isinstance(value, dict):
        value = value.get("$values", [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise RecordSourceError(f"Expected a list of records, got {type(value).__name__}")
    return [r for r in value if isinstance(r, dict) and not r.get("deleted")]


class OfflineRecordSource:
    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_raw(self) -> tuple[list[dict], list[dict]]:
        """Return (expenses, deposits) as raw dicts, deleted records excluded."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No offline snapshot at %s; exporting empty data", self._path)
            return [], []
        except (OSError, json.JSONDecodeError) as e:
            raise RecordSourceError(f"Could not read {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise RecordSourceError(f"{self._path} does not contain a JSON object")
        return _unwrap(data.get("expenses")), _unwrap(data.get("deposits"))

    def snapshot(self) -> RecordSnapshot:
        """Load and normalize every record once; later file changes are not seen."""
        expenses, deposits = self.load_raw()
        snap = RecordSnapshot.from_raw(expenses, deposits)
        logger.debug(
            "Loaded snapshot: %d expenses, %d deposits",
            len(snap.expenses), len(snap.deposits),
        )
        return snap

    def save(self, expenses: list[dict], deposits: list[dict]) -> None:
        """Atomic write via .tmp + os.replace()."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump({"expenses": expenses, "deposits": deposits}, f, indent=2, default=str)
            os.replace(tmp, self._path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
