from decimal import Decimal
from typing import Iterable

from models.summary import Summary
from models.transaction import Transaction


def total(records: Iterable[Transaction]) -> Decimal:
    return sum((r.amount if r.amount is not None else Decimal(0) for r in records), Decimal(0))


def summarize(
    expenses: Iterable[Transaction], deposits: Iterable[Transaction]
) -> Summary:
    """Totals and balance (deposits minus expenses) for an export."""
    total_expenses = total(expenses)
    total_deposits = total(deposits)
    return Summary(
        total_expenses=total_expenses,
        total_deposits=total_deposits,
        balance=total_deposits - total_expenses,
    )
