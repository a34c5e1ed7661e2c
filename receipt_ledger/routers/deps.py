"""Shared FastAPI dependencies.

Settings live on ``app.state`` (set by ``create_app``) so tests can point an
app at a temporary database without touching the cached global settings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import Depends, Query, Request

from receipt_ledger.core.config import Settings
from receipt_ledger.db.store import ExpenseStorage, KeyValueStore
from receipt_ledger.models import Category
from receipt_ledger.services.clock import Clock, SystemClock


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(settings: Settings = Depends(get_app_settings)) -> ExpenseStorage:
    return ExpenseStorage(KeyValueStore(settings.db_path), key=settings.storage_key)  # type: ignore[arg-type]


def get_clock(settings: Settings = Depends(get_app_settings)) -> Clock:
    return SystemClock(timezone=settings.timezone)


def resolve_now(
    as_of: Optional[datetime] = Query(
        None, description="Optional 'as of' instant (defaults to now)"
    ),
    clock: Clock = Depends(get_clock),
) -> datetime:
    return as_of or clock.now()


class ViewFilters:
    """Category filter and title search shared by list and analytics routes."""

    def __init__(
        self,
        category: Optional[Category] = Query(None, description="Filter by category"),
        q: str = Query("", description="Case-insensitive title search"),
    ):
        self.category = category
        self.keyword = q
