from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from receipt_ledger.models import Expense
from receipt_ledger.services.date_buckets import month_days, month_total
from receipt_ledger.services.money import round_half_up


@dataclass(frozen=True)
class MonthProjection:
    month_total: float
    days_passed: int
    days_in_month: int
    per_day_average: int
    projected_total: float


def project_month_end(
    month_total: float, days_passed: int, days_in_month: int
) -> MonthProjection:
    """Extrapolate the month total from the rounded average so far.

    ``per_day_average = round(month_total / days_passed)`` and
    ``projected_total = month_total + per_day_average * (days_in_month - days_passed)``.
    A ``days_passed`` beyond the month length gives a negative remainder
    and the formula is applied as is. With ``days_passed <= 0`` nothing has
    elapsed to average over: the per-day average is 0 and the projection
    equals the current total. A month total that overflowed the float range
    is treated the same way.
    """
    per_day_float = month_total / days_passed if days_passed > 0 else 0.0
    if days_passed <= 0 or not math.isfinite(per_day_float):
        return MonthProjection(
            month_total=month_total,
            days_passed=days_passed,
            days_in_month=days_in_month,
            per_day_average=0,
            projected_total=month_total,
        )
    per_day = round_half_up(per_day_float)
    return MonthProjection(
        month_total=month_total,
        days_passed=days_passed,
        days_in_month=days_in_month,
        per_day_average=per_day,
        # float product: a huge int would not convert back when added
        projected_total=month_total + float(per_day) * (days_in_month - days_passed),
    )


def compute_month_projection(items: Iterable[Expense], now: datetime) -> MonthProjection:
    days_passed, days_in_month = month_days(now)
    return project_month_end(month_total(items, now), days_passed, days_in_month)
