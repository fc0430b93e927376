"""Render filtered records as CSV or JSON export text.

Both renderers are pure: the same records, options and `now` always give
the same output. The JSON key order is fixed so exports diff cleanly.
"""
import json
from datetime import datetime
from typing import Optional

from models.category import category_label
from models.export_options import ExportFormat, ExportOptions
from models.transaction import Deposit, Expense, RecordSnapshot
from services.summary_service import summarize
from utils.constants import DEFAULT_DISPLAY_DATE_FORMAT
from utils.currency import format_plain, json_number
from utils.date_helpers import format_display_date, to_iso, utc_now

EXPENSE_COLUMNS = "Date,Title,Amount,Category,Description"
DEPOSIT_COLUMNS = "Date,Title,Amount,Description"


def _included(records: RecordSnapshot, options: ExportOptions):
    expenses = records.expenses if options.include_expenses else ()
    deposits = records.deposits if options.include_deposits else ()
    return expenses, deposits


# ── CSV ───────────────────────────────────────────────────────────────────────

def _quote(text: Optional[str]) -> str:
    # Commas become semicolons so free text can never add a column
    cleaned = (text or "").replace(",", ";").replace('"', '""')
    return f'"{cleaned}"'


def _display(dt: Optional[datetime], date_format: str) -> str:
    return format_display_date(dt.date(), date_format) if dt else ""


def _expense_row(e: Expense, date_format: str) -> str:
    return ",".join([
        _display(e.occurred_at, date_format),
        _quote(e.title),
        _quote(format_plain(e.amount)),
        _quote(category_label(e.category_id)),
        _quote(e.description),
    ])


def _deposit_row(d: Deposit, date_format: str) -> str:
    return ",".join([
        _display(d.occurred_at, date_format),
        _quote(d.title),
        _quote(format_plain(d.amount)),
        _quote(d.description),
    ])


def to_csv(
    records: RecordSnapshot,
    options: ExportOptions,
    now: Optional[datetime] = None,
    date_format: str = DEFAULT_DISPLAY_DATE_FORMAT,
) -> str:
    now = now or utc_now()
    expenses, deposits = _included(records, options)
    lines: list[str] = []

    if expenses:
        lines.append("EXPENSES")
        lines.append(EXPENSE_COLUMNS)
        lines.extend(_expense_row(e, date_format) for e in expenses)
        lines.append("")

    if deposits:
        lines.append("DEPOSITS")
        lines.append(DEPOSIT_COLUMNS)
        lines.extend(_deposit_row(d, date_format) for d in deposits)
        lines.append("")

    summary = summarize(expenses, deposits)
    lines.extend([
        "SUMMARY",
        f"Total Expenses,{format_plain(summary.total_expenses)}",
        f"Total Deposits,{format_plain(summary.total_deposits)}",
        f"Balance,{format_plain(summary.balance)}",
        f"Export Date,{format_display_date(now.date(), date_format)}",
    ])
    return "\n".join(lines) + "\n"


# ── JSON ──────────────────────────────────────────────────────────────────────

def _expense_dict(e: Expense) -> dict:
    return {
        "id": e.id,
        "date": to_iso(e.occurred_at),
        "title": e.title,
        "amount": json_number(e.amount),
        "category": category_label(e.category_id),
        "categoryId": e.category_id,
        "description": e.description,
    }


def _deposit_dict(d: Deposit) -> dict:
    return {
        "id": d.id,
        "date": to_iso(d.occurred_at),
        "title": d.title,
        "amount": json_number(d.amount),
        "description": d.description,
    }


def build_json_document(
    records: RecordSnapshot,
    options: ExportOptions,
    now: Optional[datetime] = None,
) -> dict:
    now = now or utc_now()
    expenses, deposits = _included(records, options)
    summary = summarize(expenses, deposits)
    return {
        "metadata": {
            "exportDate": to_iso(now),
            "format": ExportFormat.JSON.value,
            "dateRange": options.date_range.value,
            "includeExpenses": options.include_expenses,
            "includeDeposits": options.include_deposits,
            "totalExpenses": len(expenses),
            "totalDeposits": len(deposits),
        },
        "summary": {
            "totalExpenseAmount": json_number(summary.total_expenses),
            "totalDepositAmount": json_number(summary.total_deposits),
            "balance": json_number(summary.balance),
        },
        "data": {
            "expenses": [_expense_dict(e) for e in expenses],
            "deposits": [_deposit_dict(d) for d in deposits],
        },
    }


def to_json(
    records: RecordSnapshot,
    options: ExportOptions,
    now: Optional[datetime] = None,
) -> str:
    return json.dumps(build_json_document(records, options, now), indent=2, ensure_ascii=False)


def render(
    records: RecordSnapshot,
    options: ExportOptions,
    now: Optional[datetime] = None,
    date_format: str = DEFAULT_DISPLAY_DATE_FORMAT,
) -> str:
    """Dispatch on options.format."""
    if options.format == ExportFormat.JSON:
        return to_json(records, options, now)
    return to_csv(records, options, now, date_format)
