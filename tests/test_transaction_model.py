from datetime import datetime
from decimal import Decimal

from models.transaction import Deposit, Expense, RecordSnapshot


def test_expense_prefers_created_at_over_other_date_fields():
    e = Expense.from_record({
        "createdAt": "2024-05-01T10:00:00Z",
        "dateTime": "2023-01-01T00:00:00Z",
        "date": "2022-01-01",
    })
    assert e.occurred_at == datetime(2024, 5, 1, 10, 0, 0)


def test_date_falls_back_to_date_time_then_plain_date():
    assert Expense.from_record({"dateTime": "2024-03-04T05:06:07"}).occurred_at == datetime(2024, 3, 4, 5, 6, 7)
    assert Deposit.from_record({"date": "2024-03-04"}).occurred_at == datetime(2024, 3, 4)


def test_unparseable_dates_leave_occurred_at_empty():
    e = Expense.from_record({"createdAt": "not a date", "date": ""})
    assert e.occurred_at is None


def test_unparseable_created_at_falls_through_to_next_field():
    e = Expense.from_record({"createdAt": "garbage", "date": "2024-01-02"})
    assert e.occurred_at == datetime(2024, 1, 2)


def test_offset_timestamps_are_normalized_to_utc():
    d = Deposit.from_record({"createdAt": "2024-05-01T02:00:00+02:00"})
    assert d.occurred_at == datetime(2024, 5, 1, 0, 0, 0)


def test_epoch_milliseconds_are_accepted():
    d = Deposit.from_record({"createdAt": 1714521600000})
    assert d.occurred_at == datetime(2024, 5, 1)


def test_legacy_id_title_and_category_names():
    e = Expense.from_record({
        "expenseId": 42, "id": 7,
        "tittle": "Old title", "title": "New title",
        "expenseCategoryID": 3, "categoryId": 9,
    })
    assert e.id == 42
    assert e.title == "Old title"
    assert e.category_id == 3

    d = Deposit.from_record({"depositId": "15", "title": "Bonus"})
    assert d.id == 15
    assert d.title == "Bonus"


def test_missing_fields_get_safe_defaults():
    e = Expense.from_record({})
    assert e.id is None
    assert e.title == ""
    assert e.amount == Decimal(0)
    assert e.description is None
    assert e.category_id is None


def test_amounts_become_decimals():
    assert Expense.from_record({"amount": "12.50"}).amount == Decimal("12.50")
    assert Expense.from_record({"amount": 0.1}).amount == Decimal("0.1")
    assert Expense.from_record({"amount": None}).amount == Decimal(0)
    assert Expense.from_record({"amount": "abc"}).amount == Decimal(0)


def test_snapshot_from_raw_builds_typed_records(raw_records):
    snap = RecordSnapshot.from_raw(*raw_records)
    assert len(snap.expenses) == 1 and isinstance(snap.expenses[0], Expense)
    assert len(snap.deposits) == 1 and isinstance(snap.deposits[0], Deposit)
