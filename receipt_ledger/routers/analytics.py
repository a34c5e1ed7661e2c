from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from receipt_ledger.core.config import Settings
from receipt_ledger.db.store import ExpenseStorage
from receipt_ledger.models import Category, Expense
from receipt_ledger.routers.deps import (
    ViewFilters,
    get_app_settings,
    get_storage,
    resolve_now,
)
from receipt_ledger.services.aggregation import (
    by_category,
    category_share,
    filter_expenses,
    summarize,
    top_category,
)
from receipt_ledger.services.date_buckets import by_date, compute_date_buckets, top_days
from receipt_ledger.services.projection import compute_month_projection

router = APIRouter(prefix="/analytics", tags=["analytics"])


class Summary(BaseModel):
    count: int
    total: float
    average: int
    max_amount: float
    min_amount: float
    max_item: Optional[Expense] = None
    min_item: Optional[Expense] = None
    top_category: Optional[Category] = None


class CategoryBreakdownItem(BaseModel):
    category: Category
    count: int
    total: float
    percent: float


class DailyTotal(BaseModel):
    date: date
    total: float


class PeriodTotals(BaseModel):
    as_of: datetime
    today: float
    yesterday: float
    this_week: float
    this_month: float
    last_month: float


class Projection(BaseModel):
    as_of: datetime
    month_total: float
    days_passed: int
    days_in_month: int
    per_day_average: int
    projected_total: float


def _filtered(storage: ExpenseStorage, filters: ViewFilters) -> List[Expense]:
    return filter_expenses(
        storage.load(), category=filters.category, keyword=filters.keyword
    )


@router.get(
    "/summary",
    response_model=Summary,
    summary="Count, total, average and extrema of the filtered view",
)
async def summary_endpoint(
    filters: ViewFilters = Depends(),
    storage: ExpenseStorage = Depends(get_storage),
):
    """Scalar statistics over the same filtered set the list shows.

    Empty collections return zeros and null extremum items.
    """
    items = _filtered(storage, filters)
    s = summarize(items)
    return Summary(
        count=s.count,
        total=s.total,
        average=s.average,
        max_amount=s.max_amount,
        min_amount=s.min_amount,
        max_item=s.max_item,
        min_item=s.min_item,
        top_category=top_category(items),
    )


@router.get(
    "/category-breakdown",
    response_model=List[CategoryBreakdownItem],
    summary="Count and total per category in first-appearance order",
)
async def category_breakdown_endpoint(
    filters: ViewFilters = Depends(),
    storage: ExpenseStorage = Depends(get_storage),
):
    items = _filtered(storage, filters)
    breakdown = by_category(items)
    grand = sum(entry.total for entry in breakdown.values())
    return [
        CategoryBreakdownItem(
            category=entry.category,
            count=entry.count,
            total=entry.total,
            percent=category_share(entry, grand),
        )
        for entry in breakdown.values()
    ]


@router.get(
    "/daily-totals",
    response_model=List[DailyTotal],
    summary="Total per calendar date in first-appearance order",
)
async def daily_totals_endpoint(storage: ExpenseStorage = Depends(get_storage)):
    return [DailyTotal(date=d, total=t) for d, t in by_date(storage.load()).items()]


@router.get(
    "/periods",
    response_model=PeriodTotals,
    summary="Totals for today, yesterday, this week, this month and last month",
)
async def periods_endpoint(
    now: datetime = Depends(resolve_now),
    storage: ExpenseStorage = Depends(get_storage),
):
    b = compute_date_buckets(storage.load(), now)
    return PeriodTotals(
        as_of=now,
        today=b.today,
        yesterday=b.yesterday,
        this_week=b.this_week,
        this_month=b.this_month,
        last_month=b.last_month,
    )


@router.get(
    "/top-days",
    response_model=List[DailyTotal],
    summary="Highest-spending days",
)
async def top_days_endpoint(
    limit: Optional[int] = Query(
        None, ge=1, description="Number of days (defaults to TOP_DAYS_LIMIT)"
    ),
    settings: Settings = Depends(get_app_settings),
    storage: ExpenseStorage = Depends(get_storage),
):
    n = limit if limit is not None else settings.top_days_limit
    return [DailyTotal(date=d.date, total=d.total) for d in top_days(storage.load(), n)]


@router.get(
    "/projection",
    response_model=Projection,
    summary="Month-end spend projection from the average so far",
)
async def projection_endpoint(
    now: datetime = Depends(resolve_now),
    storage: ExpenseStorage = Depends(get_storage),
):
    """Project the current month's total to its last day.

    per_day_average = round(month_total / days_passed); days_passed counts
    from the first of the month through ``as_of`` inclusive.
    """
    p = compute_month_projection(storage.load(), now)
    return Projection(
        as_of=now,
        month_total=p.month_total,
        days_passed=p.days_passed,
        days_in_month=p.days_in_month,
        per_day_average=p.per_day_average,
        projected_total=p.projected_total,
    )
