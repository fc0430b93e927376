"""Select the records an export covers: include flags, then date window."""
from datetime import datetime, timedelta
from typing import Optional

from models.export_options import DateRange, ExportOptions
from models.transaction import RecordSnapshot, Transaction
from utils.constants import RANGE_WINDOWS
from utils.date_helpers import EARLIEST, parse_instant, utc_now


def date_window(
    options: ExportOptions, now: Optional[datetime] = None
) -> Optional[tuple[datetime, datetime]]:
    """Return the inclusive (start, end) window, or None for all-time."""
    if options.date_range == DateRange.ALL:
        return None
    now = now or utc_now()

    if options.date_range == DateRange.CUSTOM:
        start = parse_instant(options.start_date) or EARLIEST
        end = parse_instant(options.end_date) or now
        return start, end

    days = RANGE_WINDOWS[options.date_range.value]
    return now - timedelta(days=days), now


def _in_window(tx: Transaction, start: datetime, end: datetime) -> bool:
    # Undated records never match a bounded window
    return tx.occurred_at is not None and start <= tx.occurred_at <= end


def filter_records(
    snapshot: RecordSnapshot,
    options: ExportOptions,
    now: Optional[datetime] = None,
) -> RecordSnapshot:
    expenses = snapshot.expenses if options.include_expenses else ()
    deposits = snapshot.deposits if options.include_deposits else ()

    window = date_window(options, now)
    if window is not None:
        start, end = window
        expenses = tuple(e for e in expenses if _in_window(e, start, end))
        deposits = tuple(d for d in deposits if _in_window(d, start, end))

    return RecordSnapshot(expenses=tuple(expenses), deposits=tuple(deposits))
