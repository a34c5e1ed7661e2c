"""Mutation commands over the expense collection.

Each command takes the current snapshot and returns a new list; the input
list and its records are never modified. Persisting the result is the
caller's job (see ``receipt_ledger.routers.expenses``).
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Callable, List, Sequence, Tuple

from receipt_ledger.core.errors import ExpenseNotFoundError
from receipt_ledger.models import Expense, ExpenseIn

logger = logging.getLogger("receipt_ledger.commands")


def new_expense_id() -> str:
    return uuid.uuid4().hex


def _index_of(items: Sequence[Expense], expense_id: str) -> int:
    for i, e in enumerate(items):
        if e.id == expense_id:
            return i
    raise ExpenseNotFoundError(expense_id)


def add_expense(
    items: Sequence[Expense],
    payload: ExpenseIn,
    today: date,
    id_factory: Callable[[], str] = new_expense_id,
) -> Tuple[List[Expense], Expense]:
    """Append a new record dated ``today`` and return ``(items, record)``."""
    taken = {e.id for e in items}
    expense_id = id_factory()
    while expense_id in taken:
        expense_id = id_factory()
    expense = Expense(
        id=expense_id,
        date=today,
        title=payload.title,
        amount=payload.amount,
        category=payload.category,
    )
    logger.debug("expense added id=%s", expense.id)
    return [*items, expense], expense


def update_amount(
    items: Sequence[Expense], expense_id: str, amount: float
) -> List[Expense]:
    idx = _index_of(items, expense_id)
    updated = list(items)
    # re-validated so a non-finite amount is rejected here as well
    updated[idx] = Expense.model_validate(
        {**items[idx].model_dump(), "amount": amount}
    )
    logger.debug("expense amount updated id=%s", expense_id)
    return updated


def delete_expense(items: Sequence[Expense], expense_id: str) -> List[Expense]:
    _index_of(items, expense_id)
    return [e for e in items if e.id != expense_id]


def clear_all(items: Sequence[Expense]) -> List[Expense]:
    logger.debug("clearing %d expenses", len(items))
    return []


def clear_by_date(items: Sequence[Expense], day: date) -> List[Expense]:
    """Drop every record dated ``day``; unknown dates leave the list as is."""
    return [e for e in items if e.date != day]


__all__ = [
    "new_expense_id",
    "add_expense",
    "update_amount",
    "delete_expense",
    "clear_all",
    "clear_by_date",
]
