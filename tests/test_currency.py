from decimal import Decimal

import pytest

from utils.currency import format_currency, format_plain, json_number, to_decimal


@pytest.mark.parametrize("raw, expected", [
    (100, Decimal(100)),
    ("12.50", Decimal("12.50")),
    (0.1, Decimal("0.1")),
    (None, Decimal(0)),
    ("", Decimal(0)),
    ("n/a", Decimal(0)),
    (float("nan"), Decimal(0)),
    (True, Decimal(0)),
])
def test_to_decimal(raw, expected):
    assert to_decimal(raw) == expected


def test_format_plain_drops_trailing_zeros():
    assert format_plain(Decimal(100)) == "100"
    assert format_plain(Decimal("100.00")) == "100"
    assert format_plain(Decimal("12.50")) == "12.5"
    assert format_plain(Decimal("-3.25")) == "-3.25"
    assert format_plain(Decimal("1E+3")) == "1000"


def test_json_number():
    assert json_number(Decimal("400.00")) == 400
    assert isinstance(json_number(Decimal("400.00")), int)
    assert json_number(Decimal("0.5")) == 0.5


def test_format_currency():
    assert format_currency(Decimal("1234.5")) == "$1,234.50"


def test_huge_amounts_render_without_int_conversion():
    huge = to_decimal("1e5000")
    text = format_plain(huge)
    assert text == "1" + "0" * 5000
    assert format_plain(Decimal("0.00")) == "0"
    assert isinstance(json_number(huge), float)
