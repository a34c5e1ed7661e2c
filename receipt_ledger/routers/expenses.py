import logging
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from receipt_ledger.db.store import ExpenseStorage
from receipt_ledger.models import (
    AmountUpdateIn,
    Category,
    DEFAULT_SORT,
    Expense,
    ExpenseIn,
    SortOrder,
)
from receipt_ledger.routers.deps import ViewFilters, get_clock, get_storage
from receipt_ledger.services import commands
from receipt_ledger.services.aggregation import select_expenses
from receipt_ledger.services.clock import Clock

router = APIRouter(prefix="/expenses", tags=["expenses"])
logger = logging.getLogger("receipt_ledger.routers.expenses")


# Response models --------------------------------------------------
class ClearByDateResponse(BaseModel):
    date: date
    removed: int


# Routes -----------------------------------------------------------
@router.get(
    "/categories", response_model=List[Category], summary="Selectable categories"
)
async def list_categories():
    return list(Category)


@router.get("", response_model=List[Expense], summary="List expenses for display")
async def list_expenses_endpoint(
    filters: ViewFilters = Depends(),
    sort: SortOrder = Query(DEFAULT_SORT, description="latest | highest | lowest"),
    storage: ExpenseStorage = Depends(get_storage),
):
    return select_expenses(
        storage.load(), category=filters.category, keyword=filters.keyword, sort=sort
    )


@router.post("", response_model=Expense, status_code=201, summary="Add an expense")
async def create_expense(
    payload: ExpenseIn,
    storage: ExpenseStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    now: datetime = clock.now()
    items, expense = commands.add_expense(storage.load(), payload, today=now.date())
    storage.save(items)
    logger.info("expense created id=%s", expense.id)
    return expense


@router.patch("/{expense_id}", response_model=Expense, summary="Edit an amount")
async def patch_amount(
    expense_id: str,
    payload: AmountUpdateIn,
    storage: ExpenseStorage = Depends(get_storage),
):
    items = commands.update_amount(storage.load(), expense_id, payload.amount)
    storage.save(items)
    return next(e for e in items if e.id == expense_id)


@router.delete("/by-date/{day}", response_model=ClearByDateResponse, summary="Delete one day")
async def clear_day(day: date, storage: ExpenseStorage = Depends(get_storage)):
    before = storage.load()
    after = commands.clear_by_date(before, day)
    storage.save(after)
    removed = len(before) - len(after)
    logger.info("cleared %d expenses dated %s", removed, day.isoformat())
    return ClearByDateResponse(date=day, removed=removed)


@router.delete("/{expense_id}", status_code=204, summary="Delete an expense")
async def delete_expense(
    expense_id: str, storage: ExpenseStorage = Depends(get_storage)
):
    storage.save(commands.delete_expense(storage.load(), expense_id))
    logger.info("expense deleted id=%s", expense_id)
    return None


@router.delete("", status_code=204, summary="Delete every expense")
async def clear_expenses(storage: ExpenseStorage = Depends(get_storage)):
    storage.save(commands.clear_all(storage.load()))
    logger.info("all expenses cleared")
    return None
