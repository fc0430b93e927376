from datetime import datetime

import pytest

from models.export_options import DateRange, ExportFormat, ExportOptions


def test_strings_are_coerced_to_enums():
    opts = ExportOptions(format="json", date_range="last90days")
    assert opts.format is ExportFormat.JSON
    assert opts.date_range is DateRange.LAST_90_DAYS


@pytest.mark.parametrize("raw, expected", [
    ("last30", DateRange.LAST_30_DAYS),
    ("last365", DateRange.LAST_365_DAYS),
    ("ALL", DateRange.ALL),
    (DateRange.CUSTOM, DateRange.CUSTOM),
])
def test_date_range_parse_accepts_short_spellings(raw, expected):
    assert DateRange.parse(raw) is expected


def test_unknown_values_are_rejected():
    with pytest.raises(ValueError):
        ExportOptions(format="xml")
    with pytest.raises(ValueError):
        DateRange.parse("last7")


def test_validate_rejects_empty_selection():
    opts = ExportOptions(include_expenses=False, include_deposits=False)
    with pytest.raises(ValueError, match="at least expenses or deposits"):
        opts.validate()


def test_validate_rejects_inverted_custom_range():
    opts = ExportOptions(
        date_range="custom",
        start_date=datetime(2024, 6, 1),
        end_date=datetime(2024, 5, 1),
    )
    with pytest.raises(ValueError):
        opts.validate()


def test_validate_accepts_normal_options():
    ExportOptions().validate()
    ExportOptions(include_expenses=False).validate()
    ExportOptions(date_range="custom", start_date=datetime(2024, 1, 1)).validate()
