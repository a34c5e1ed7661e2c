"""Text encoding of the expense collection.

The stored form is one JSON array of objects with the five record fields,
``date`` as ``YYYY-MM-DD`` and ``category`` as its display value. Decoding is
forgiving and never raises:

    - absent or unparseable text, or JSON that is not an array, yields an
      empty collection
    - array entries that fail record validation are skipped one by one, so
      a single bad entry does not cost the rest of the collection
    - entries repeating an earlier ``id`` are skipped

Every skip logs a warning. Skipped entries are gone from storage after the
next save.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from receipt_ledger.models import Expense

logger = logging.getLogger("receipt_ledger.codec")

_expense_list = TypeAdapter(List[Expense])


def encode_expenses(items: Sequence[Expense]) -> str:
    return _expense_list.dump_json(list(items)).decode("utf-8")


def decode_expenses(text: Optional[str]) -> List[Expense]:
    if text is None or not text.strip():
        return []
    try:
        rows = json.loads(text)
    except ValueError:
        logger.warning("discarding unreadable expense data (not JSON)")
        return []
    if not isinstance(rows, list):
        logger.warning("discarding unreadable expense data (not an array)")
        return []

    seen: set[str] = set()
    items: List[Expense] = []
    for index, row in enumerate(rows):
        try:
            expense = Expense.model_validate(row)
        except ValidationError as exc:
            logger.warning(
                "skipping invalid expense record at index %d (%d errors)",
                index,
                exc.error_count(),
            )
            continue
        if expense.id in seen:
            logger.warning("dropping record with duplicate id=%s", expense.id)
            continue
        seen.add(expense.id)
        items.append(expense)
    return items
