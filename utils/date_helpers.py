import re
from datetime import date, datetime, time, timezone

from utils.constants import DEFAULT_DISPLAY_DATE_FORMAT

# ── Display date format options ───────────────────────────────────────────────

_STRFTIME_MAP = {
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
    "MM-DD-YYYY": "%m-%d-%Y",
}

_PLAIN_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d")

# fromisoformat on 3.10 only reads 3 or 6 fractional digits
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")

# Earliest instant a custom range may start from
EARLIEST = datetime(1970, 1, 1)


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in _PLAIN_DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def parse_instant(value) -> datetime | None:
    """Normalize a raw record timestamp to a naive UTC datetime.

    Accepts datetime/date objects, ISO 8601 strings (a trailing 'Z' is
    understood), plain YYYY-MM-DD style dates and epoch milliseconds.
    Returns None for anything that cannot be read.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    iso = _FRACTION.sub(lambda m: m.group(1) + "." + m.group(2)[:6].ljust(6, "0"), raw, count=1)
    try:
        return _to_naive_utc(datetime.fromisoformat(iso))
    except ValueError:
        pass
    d = parse_date(raw)
    if d is not None:
        return datetime.combine(d, time.min)
    return None


def _to_naive_utc(dt: datetime) -> datetime | None:
    """None when the UTC shift leaves the representable range."""
    if dt.tzinfo is None:
        return dt
    try:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    except (OverflowError, ValueError):
        return None


def to_iso(dt: datetime | None) -> str | None:
    """ISO 8601 with millisecond precision and a 'Z' suffix."""
    if dt is None:
        return None
    return dt.isoformat(timespec="milliseconds") + "Z"


def format_display_date(value: date | str | None, fmt_key: str = DEFAULT_DISPLAY_DATE_FORMAT) -> str:
    """Render a date (or YYYY-MM-DD storage string) in the user-facing format."""
    if not value:
        return ""
    if isinstance(value, str):
        d = parse_date(value)
        if d is None:
            return value
        value = d
    return value.strftime(_STRFTIME_MAP.get(fmt_key, "%m/%d/%Y"))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Parse a date in the given display format. Returns None on failure.

    Falls back to ISO 8601 parse if the display format doesn't match.
    """
    if not display_str:
        return None
    fmt = _STRFTIME_MAP.get(fmt_key, "%m/%d/%Y")
    try:
        return datetime.strptime(display_str.strip(), fmt).date()
    except ValueError:
        return parse_date(display_str)
