from decimal import Decimal, InvalidOperation


def to_decimal(value) -> Decimal:
    """Coerce a raw amount to Decimal; None, blanks and garbage become 0."""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return d if d.is_finite() else Decimal(0)


def format_plain(amount: Decimal) -> str:
    """Shortest plain rendering, e.g. 100 -> '100', 12.50 -> '12.5'."""
    if not amount:
        return "0"
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def json_number(amount: Decimal) -> int | float:
    """Decimal as a JSON-friendly number, int when integral."""
    # ints past ~4300 digits can't be serialized, so huge values go out as floats
    if amount.adjusted() < 300 and amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format as currency string, e.g. '$1,234.56'."""
    return f"{symbol}{amount:,.2f}"
