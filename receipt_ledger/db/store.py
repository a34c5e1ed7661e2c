"""Key/value persistence for the expense collection.

Responsibilities
----------------
- ``KeyValueStore`` offers get/set/remove of text values by key on top of the
  ``storage`` table, the same contract a browser's local storage has.
- ``ExpenseStorage`` loads the full collection at startup of a request and
  writes the full collection back after every mutation.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Sequence

from receipt_ledger.db.codec import decode_expenses, encode_expenses
from receipt_ledger.db.schema import BASIC_UTC_NOW
from receipt_ledger.models import Expense

logger = logging.getLogger("receipt_ledger.store")


class KeyValueStore:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def get_item(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM storage WHERE key = ?", (key,))
            row = cur.fetchone()
            return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO storage (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = ({BASIC_UTC_NOW})
                """,
                (key, value),
            )

    def remove_item(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM storage WHERE key = ?", (key,))


class ExpenseStorage:
    def __init__(self, kv: KeyValueStore, key: str = "expenses"):
        self.kv = kv
        self.key = key

    def load(self) -> List[Expense]:
        return decode_expenses(self.kv.get_item(self.key))

    def save(self, items: Sequence[Expense]) -> None:
        self.kv.set_item(self.key, encode_expenses(items))
        logger.debug("saved %d expenses under key=%s", len(items), self.key)

    def clear(self) -> None:
        self.kv.remove_item(self.key)
