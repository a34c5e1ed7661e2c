from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import Category, DEFAULT_CATEGORY


def _clean_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("title must not be empty")
    return v


class Expense(BaseModel):
    """A stored expense record.

    Records are frozen: amount edits build a replacement record in the
    command layer, leaving snapshots held by callers untouched.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    date: dt.date
    title: str
    amount: float = Field(..., allow_inf_nan=False)
    category: Category

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _clean_title(v)


class ExpenseIn(BaseModel):
    """Add-form payload. Id and date are assigned by the server."""

    title: str
    amount: float = Field(..., allow_inf_nan=False)
    category: Category = DEFAULT_CATEGORY

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _clean_title(v)


class AmountUpdateIn(BaseModel):
    """Inline amount edit. Negative and zero values are accepted (refunds)."""

    amount: float = Field(..., allow_inf_nan=False)
