"""Money / rounding helpers.

Centralized so summary averages and the month-end projection use identical
rounding semantics.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP, localcontext

# enough digits for the integer part of any finite float (~1.8e308) plus cents
_PRECISION = 400


def _quantize(value: float, exp: str, rounding: str) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(str(value)).quantize(Decimal(exp), rounding=rounding)


def round2(value: float) -> float:
    return float(_quantize(value, "0.01", ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    2.5 -> 3, -2.5 -> -2. Goes through the decimal repr so 0.5-boundaries
    that are not exact in binary do not drift. ``value`` must be finite.
    """
    mode = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return int(_quantize(value, "1", mode))
