from datetime import datetime, timedelta

import pytest

from models.export_options import ExportOptions
from models.transaction import Deposit, Expense, RecordSnapshot
from services.export_filter import date_window, filter_records
from utils.date_helpers import EARLIEST
from tests.conftest import NOW


def _expense(id_, when):
    return Expense(id=id_, occurred_at=when, title=f"e{id_}", amount=1, category_id=1)


def _deposit(id_, when):
    return Deposit(id=id_, occurred_at=when, title=f"d{id_}", amount=1)


@pytest.fixture
def spread():
    """Records at various ages relative to NOW, plus one without a date."""
    ages = [0, 1, 29, 30, 31, 89, 91, 364, 366, 1000]
    expenses = tuple(_expense(i, NOW - timedelta(days=a)) for i, a in enumerate(ages))
    deposits = tuple(_deposit(i, NOW - timedelta(days=a)) for i, a in enumerate(ages))
    expenses += (_expense(99, None),)
    deposits += (_deposit(99, NOW + timedelta(days=1)),)
    return RecordSnapshot(expenses, deposits)


def test_all_time_keeps_everything_including_undated(spread):
    out = filter_records(spread, ExportOptions(date_range="all"), NOW)
    assert out.expenses == spread.expenses
    assert out.deposits == spread.deposits


@pytest.mark.parametrize("range_, days", [
    ("last30days", 30),
    ("last90days", 90),
    ("last365days", 365),
])
def test_preset_windows_only_keep_records_inside(spread, range_, days):
    out = filter_records(spread, ExportOptions(date_range=range_), NOW)
    start = NOW - timedelta(days=days)
    for tx in out.expenses + out.deposits:
        assert start <= tx.occurred_at <= NOW
    kept = {tx.id for tx in out.expenses}
    expected = {
        tx.id for tx in spread.expenses
        if tx.occurred_at is not None and start <= tx.occurred_at <= NOW
    }
    assert kept == expected


def test_window_bounds_are_inclusive(spread):
    out = filter_records(spread, ExportOptions(date_range="last30days"), NOW)
    ages = sorted((NOW - e.occurred_at).days for e in out.expenses)
    assert ages == [0, 1, 29, 30]


def test_undated_and_future_records_are_dropped_from_windows(spread):
    out = filter_records(spread, ExportOptions(date_range="last365days"), NOW)
    assert 99 not in {e.id for e in out.expenses}
    assert 99 not in {d.id for d in out.deposits}


def test_old_records_are_excluded_from_last_30_days(snapshot):
    out = filter_records(snapshot, ExportOptions(date_range="last30days"), NOW)
    assert out.expenses == ()
    assert out.deposits == ()


def test_include_flags_empty_the_excluded_list(snapshot):
    out = filter_records(snapshot, ExportOptions(include_expenses=False), NOW)
    assert out.expenses == ()
    assert len(out.deposits) == 1

    out = filter_records(snapshot, ExportOptions(include_deposits=False), NOW)
    assert len(out.expenses) == 1
    assert out.deposits == ()


def test_custom_range_with_both_bounds(snapshot):
    opts = ExportOptions(
        date_range="custom",
        start_date=datetime(2024, 5, 2),
        end_date=datetime(2024, 5, 31),
    )
    out = filter_records(snapshot, opts, NOW)
    assert out.expenses == ()
    assert [d.title for d in out.deposits] == ["Salary"]


def test_custom_range_defaults_missing_bounds():
    opts = ExportOptions(date_range="custom")
    assert date_window(opts, NOW) == (EARLIEST, NOW)

    opts = ExportOptions(date_range="custom", start_date=datetime(2024, 1, 1))
    assert date_window(opts, NOW) == (datetime(2024, 1, 1), NOW)


def test_all_time_has_no_window():
    assert date_window(ExportOptions(), NOW) is None
