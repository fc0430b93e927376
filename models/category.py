from types import MappingProxyType

UNKNOWN_CATEGORY = "Unknown"

CATEGORY_LABELS = MappingProxyType({
    1: "Food",
    2: "Hospital",
    3: "Investment",
    4: "Rent",
    5: "Bill",
    6: "Education",
    7: "Transport",
    8: "Entertainment",
    9: "Utilities",
    10: "Grocery",
    11: "Travel",
    12: "Insurance",
    13: "Shopping",
    14: "Loan",
    15: "Miscellaneous",
    16: "Credit Card Bill",
})


def category_label(category_id) -> str:
    """Display label for an expense category id; never raises."""
    if isinstance(category_id, bool) or not isinstance(category_id, int):
        return UNKNOWN_CATEGORY
    return CATEGORY_LABELS.get(category_id, UNKNOWN_CATEGORY)
