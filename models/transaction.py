from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from utils.currency import to_decimal
from utils.date_helpers import parse_instant

# Legacy field names, most preferred first
DATE_FIELDS = ("createdAt", "dateTime", "date")
TITLE_FIELDS = ("tittle", "title")
EXPENSE_ID_FIELDS = ("expenseId", "id")
DEPOSIT_ID_FIELDS = ("depositId", "id")
CATEGORY_ID_FIELDS = ("expenseCategoryID", "categoryId")


def _first(raw: dict, keys: tuple[str, ...]):
    """First value under keys that is neither None nor an empty string."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _first_instant(raw: dict, keys: tuple[str, ...]) -> Optional[datetime]:
    for key in keys:
        parsed = parse_instant(raw.get(key))
        if parsed is not None:
            return parsed
    return None


def _coerce_int(value):
    """int for int-like values; anything else is passed through unchanged."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return value


@dataclass(frozen=True)
class Transaction:
    id: Optional[int]
    occurred_at: Optional[datetime]
    title: str
    amount: Decimal
    description: Optional[str] = None

    @classmethod
    def _common_fields(cls, raw: dict, id_fields: tuple[str, ...]) -> dict:
        title = _first(raw, TITLE_FIELDS)
        description = raw.get("description")
        return {
            "id": _coerce_int(_first(raw, id_fields)),
            "occurred_at": _first_instant(raw, DATE_FIELDS),
            "title": "" if title is None else str(title),
            "amount": to_decimal(raw.get("amount")),
            "description": None if description is None else str(description),
        }


@dataclass(frozen=True)
class Expense(Transaction):
    category_id: Optional[int] = None

    @classmethod
    def from_record(cls, raw: dict) -> "Expense":
        """Build from a stored record, whichever historical writer produced it."""
        return cls(
            **cls._common_fields(raw, EXPENSE_ID_FIELDS),
            category_id=_coerce_int(_first(raw, CATEGORY_ID_FIELDS)),
        )


@dataclass(frozen=True)
class Deposit(Transaction):

    @classmethod
    def from_record(cls, raw: dict) -> "Deposit":
        """Build from a stored record, whichever historical writer produced it."""
        return cls(**cls._common_fields(raw, DEPOSIT_ID_FIELDS))


@dataclass(frozen=True)
class RecordSnapshot:
    """Immutable view of the record store taken at the start of an export."""
    expenses: tuple[Expense, ...] = field(default_factory=tuple)
    deposits: tuple[Deposit, ...] = field(default_factory=tuple)

    @classmethod
    def from_raw(cls, expenses: list[dict], deposits: list[dict]) -> "RecordSnapshot":
        return cls(
            expenses=tuple(Expense.from_record(r) for r in expenses),
            deposits=tuple(Deposit.from_record(r) for r in deposits),
        )
