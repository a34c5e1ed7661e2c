"""Clock collaborators.

Aggregation never reads the wall clock itself; routers resolve "now" through
one of these and pass it down explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...


@dataclass(frozen=True)
class SystemClock:
    timezone: Optional[str] = None

    def now(self) -> datetime:
        if self.timezone:
            return datetime.now(ZoneInfo(self.timezone))
        return datetime.now()


@dataclass(frozen=True)
class FixedClock:
    instant: datetime

    def now(self) -> datetime:
        return self.instant


__all__ = ["Clock", "SystemClock", "FixedClock"]
