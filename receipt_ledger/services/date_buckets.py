"""Calendar-date buckets over an expense snapshot.

"now" is always a parameter. Bucket boundaries are computed on calendar
dates (the same granularity records are stored with), never on timestamps:

    - today / yesterday: exact date match relative to ``now.date()``
    - this week: dates on or after ``(now - 7 days).date()``
    - this month: dates on or after the first of ``now``'s month
    - last month: first..last day of the previous calendar month
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Tuple

from receipt_ledger.models import Expense


@dataclass(frozen=True)
class DateBuckets:
    today: float
    yesterday: float
    this_week: float
    this_month: float
    last_month: float


@dataclass(frozen=True)
class DayTotal:
    date: date
    total: float


def by_date(items: Iterable[Expense]) -> Dict[date, float]:
    """Sum of amounts per date, keyed in order of first appearance."""
    totals: Dict[date, float] = {}
    for e in items:
        totals[e.date] = totals.get(e.date, 0.0) + e.amount
    return totals


def month_start(d: date) -> date:
    return d.replace(day=1)


def previous_month_range(d: date) -> Tuple[date, date]:
    last = month_start(d) - timedelta(days=1)
    return month_start(last), last


def month_days(now: datetime) -> Tuple[int, int]:
    """Return ``(days_passed, days_in_month)``; days passed counts today."""
    today = now.date()
    return today.day, calendar.monthrange(today.year, today.month)[1]


def sum_between(totals: Dict[date, float], start: date, end: date | None = None) -> float:
    return sum(
        amount
        for d, amount in totals.items()
        if d >= start and (end is None or d <= end)
    )


def compute_date_buckets(items: Iterable[Expense], now: datetime) -> DateBuckets:
    totals = by_date(items)
    today = now.date()
    yesterday = today - timedelta(days=1)
    week_start = (now - timedelta(days=7)).date()
    last_start, last_end = previous_month_range(today)
    return DateBuckets(
        today=totals.get(today, 0.0),
        yesterday=totals.get(yesterday, 0.0),
        this_week=sum_between(totals, week_start),
        this_month=sum_between(totals, month_start(today)),
        last_month=sum_between(totals, last_start, last_end),
    )


def month_total(items: Iterable[Expense], now: datetime) -> float:
    return sum_between(by_date(items), month_start(now.date()))


def top_days(items: Iterable[Expense], limit: int) -> List[DayTotal]:
    """Days ranked by total spend, highest first.

    ``sorted`` is stable and ``by_date`` preserves first appearance, so equal
    totals stay in the order their dates first showed up.
    """
    if limit <= 0:
        return []
    ranked = sorted(by_date(items).items(), key=lambda kv: kv[1], reverse=True)
    return [DayTotal(date=d, total=t) for d, t in ranked[:limit]]


__all__ = [
    "DateBuckets",
    "DayTotal",
    "by_date",
    "month_start",
    "previous_month_range",
    "month_days",
    "compute_date_buckets",
    "month_total",
    "top_days",
]
