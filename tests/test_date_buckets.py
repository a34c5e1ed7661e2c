from datetime import date, datetime

from receipt_ledger.services.date_buckets import (
    DayTotal,
    by_date,
    compute_date_buckets,
    month_days,
    previous_month_range,
    top_days,
)

from .conftest import make_expense

NOW = datetime(2024, 3, 15, 9, 30)


def ledger():
    return [
        make_expense(1, date(2024, 2, 10), "rent share", 500),
        make_expense(2, date(2024, 2, 29), "snacks", 20),
        make_expense(3, date(2024, 3, 1), "groceries", 120),
        make_expense(4, date(2024, 3, 8), "lunch", 15),
        make_expense(5, date(2024, 3, 14), "dinner", 40),
        make_expense(6, date(2024, 3, 15), "coffee", 5),
        make_expense(7, date(2024, 3, 15), "bagel", 3),
    ]


def test_by_date_first_appearance_order():
    items = [
        make_expense(1, date(2024, 1, 2), "a", 1),
        make_expense(2, date(2024, 1, 1), "b", 2),
        make_expense(3, date(2024, 1, 2), "c", 3),
    ]
    assert list(by_date(items).items()) == [(date(2024, 1, 2), 4), (date(2024, 1, 1), 2)]


def test_period_buckets():
    b = compute_date_buckets(ledger(), NOW)
    assert b.today == 8
    assert b.yesterday == 40
    # 2024-03-08 is exactly seven days back and counts
    assert b.this_week == 15 + 40 + 8
    assert b.this_month == 120 + 15 + 40 + 8
    assert b.last_month == 520


def test_period_buckets_empty():
    b = compute_date_buckets([], NOW)
    assert (b.today, b.yesterday, b.this_week, b.this_month, b.last_month) == (0, 0, 0, 0, 0)


def test_previous_month_range_crosses_year():
    assert previous_month_range(date(2024, 1, 20)) == (date(2023, 12, 1), date(2023, 12, 31))
    assert previous_month_range(date(2024, 3, 1)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_month_days():
    assert month_days(NOW) == (15, 31)
    assert month_days(datetime(2023, 2, 28, 23, 59)) == (28, 28)


def test_top_days_ranks_and_truncates():
    result = top_days(ledger(), 3)
    assert result == [
        DayTotal(date(2024, 2, 10), 500),
        DayTotal(date(2024, 3, 1), 120),
        DayTotal(date(2024, 3, 14), 40),
    ]


def test_top_days_ties_keep_first_appearance():
    items = [
        make_expense(1, date(2024, 1, 3), "a", 10),
        make_expense(2, date(2024, 1, 1), "b", 10),
        make_expense(3, date(2024, 1, 2), "c", 30),
    ]
    assert [d.date for d in top_days(items, 5)] == [
        date(2024, 1, 2),
        date(2024, 1, 3),
        date(2024, 1, 1),
    ]
    assert top_days(items, 0) == []
    assert top_days([], 3) == []
