from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from receipt_ledger.models import Category, Expense, SortOrder
from receipt_ledger.services.money import round2, round_half_up

"""List view and scalar statistics over an expense snapshot.

Scopes implemented:
    - View selection (category filter, title search, sort order)
    - Scalar summary (count, total, rounded average, extrema)
    - Category breakdown and top category

Design notes:
    Every function takes the snapshot as an argument and returns fresh
    values. Nothing here reads storage or the clock, so routers decide when
    to recompute and tests need no fixtures beyond plain lists.
"""


# ---------------- View selection -----------------
def matches_keyword(title: str, keyword: str) -> bool:
    if not keyword:
        return True
    return keyword.casefold() in title.casefold()


def filter_expenses(
    items: Iterable[Expense],
    category: Optional[Category] = None,
    keyword: str = "",
) -> List[Expense]:
    """Category equality (when given) ANDed with a title search, input order kept."""
    return [
        e
        for e in items
        if (category is None or e.category == category)
        and matches_keyword(e.title, keyword)
    ]


def select_expenses(
    items: Sequence[Expense],
    category: Optional[Category] = None,
    keyword: str = "",
    sort: SortOrder = SortOrder.LATEST,
) -> List[Expense]:
    """Return the filtered, ordered view of ``items``.

    ``highest``/``lowest`` use Python's stable sort on amount, so equal
    amounts keep their relative input order. ``latest`` is insertion order
    reversed and does not look at the ``date`` field: two records from the
    same day still list the most recently added first.
    """
    view = filter_expenses(items, category=category, keyword=keyword)
    if sort == SortOrder.HIGHEST:
        return sorted(view, key=lambda e: e.amount, reverse=True)
    if sort == SortOrder.LOWEST:
        return sorted(view, key=lambda e: e.amount)
    view.reverse()
    return view


# ---------------- Scalar summary -----------------
@dataclass(frozen=True)
class ExpenseSummary:
    count: int
    total: float
    average: int
    max_amount: float
    min_amount: float
    max_item: Optional[Expense]
    min_item: Optional[Expense]


EMPTY_SUMMARY = ExpenseSummary(
    count=0,
    total=0.0,
    average=0,
    max_amount=0.0,
    min_amount=0.0,
    max_item=None,
    min_item=None,
)


def summarize(items: Sequence[Expense]) -> ExpenseSummary:
    """Count, total, rounded mean and extrema of ``items``.

    Extrema keep the first record reaching the value; strict comparisons
    below are what make that hold.
    """
    if not items:
        return EMPTY_SUMMARY
    total = 0.0
    max_item = min_item = items[0]
    for e in items:
        total += e.amount
        if e.amount > max_item.amount:
            max_item = e
        if e.amount < min_item.amount:
            min_item = e
    count = len(items)
    mean = total / count
    if not math.isfinite(mean):
        # running total overflowed the float range; scale before adding
        mean = sum(e.amount / count for e in items)
    return ExpenseSummary(
        count=count,
        total=total,
        average=round_half_up(mean),
        max_amount=max_item.amount,
        min_amount=min_item.amount,
        max_item=max_item,
        min_item=min_item,
    )


# ---------------- Category breakdown -----------------
@dataclass(frozen=True)
class CategoryTotal:
    category: Category
    count: int
    total: float


def by_category(items: Iterable[Expense]) -> Dict[Category, CategoryTotal]:
    """Per-category count and total, keyed in order of first appearance.

    Only categories present in ``items`` get an entry.
    """
    counts: Dict[Category, int] = {}
    totals: Dict[Category, float] = {}
    for e in items:
        counts[e.category] = counts.get(e.category, 0) + 1
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
    return {
        c: CategoryTotal(category=c, count=counts[c], total=totals[c]) for c in counts
    }


def top_category(items: Iterable[Expense]) -> Optional[Category]:
    """Category with the most records; ties go to the earliest to appear."""
    best: Optional[CategoryTotal] = None
    for entry in by_category(items).values():
        if best is None or entry.count > best.count:
            best = entry
    return best.category if best else None


def category_share(entry: CategoryTotal, grand_total: float) -> float:
    """Percent of ``grand_total`` spent in ``entry``.

    0 when the total is not positive or has overflowed the float range.
    """
    if grand_total <= 0 or not math.isfinite(grand_total):
        return 0.0
    share = entry.total / grand_total * 100
    return round2(share) if math.isfinite(share) else 0.0


__all__ = [
    "ExpenseSummary",
    "EMPTY_SUMMARY",
    "CategoryTotal",
    "matches_keyword",
    "filter_expenses",
    "select_expenses",
    "summarize",
    "by_category",
    "top_category",
    "category_share",
]
