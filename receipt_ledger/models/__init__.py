"""Pydantic domain models for Receipt Ledger."""

from .constants import Category, SortOrder, DEFAULT_CATEGORY, DEFAULT_SORT  # re-export
from .expense import Expense, ExpenseIn, AmountUpdateIn

__all__ = [
    "Category",
    "SortOrder",
    "DEFAULT_CATEGORY",
    "DEFAULT_SORT",
    "Expense",
    "ExpenseIn",
    "AmountUpdateIn",
]
