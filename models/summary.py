from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Summary:
    total_expenses: Decimal
    total_deposits: Decimal
    balance: Decimal        # total_deposits - total_expenses
