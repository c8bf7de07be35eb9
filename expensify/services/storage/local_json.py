"""
Local JSON Storage Implementation

The local-only variant: each user's collection is one JSON document on
disk, a mapping keyed by expense id:

    {"expenses": {"1718000000000": {"id": 1718000000000, "title": ...}}}

File names are derived from a hash of the user key, so arbitrary keys
(emails, provider uids) are safe to use.

TRADEOFFS:
- The whole collection is rewritten on every save (fine for what one
  person can type in)
- No locking across processes (single-session use)
"""

import hashlib
import json
import os
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError as SchemaError

from expensify.activity import get_logger
from expensify.models.expense import Expense
from expensify.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)


class LocalJsonExpenseStorage(ExpenseStorageInterface):
    """Stores each user's expenses in `<data_dir>/expenses/<hash>.json`."""

    def __init__(self, data_dir: Path):
        self._dir = Path(data_dir) / "expenses"
        self._logger = get_logger(__name__)

    def path_for(self, user_key: str) -> Path:
        """Get the file holding a user's collection."""
        digest = hashlib.sha256(user_key.encode("utf-8")).hexdigest()[:32]
        return self._dir / f"{digest}.json"

    def _read_document(self, path: Path) -> Optional[dict]:
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path.name}: {e}")

    async def load_expenses(self, user_key: str) -> list[Expense]:
        """Load a user's expenses, skipping records that no longer parse."""
        document = self._read_document(self.path_for(user_key))
        if not document:
            return []

        records = document.get("expenses", {})
        if isinstance(records, list):
            # Older files stored a plain newest-first list
            records = {str(r.get("id")): r for r in records if isinstance(r, dict)}

        expenses = []
        for key, record in records.items():
            try:
                expenses.append(Expense.model_validate(record))
            except SchemaError as e:
                self._logger.warning(
                    "skipped_malformed_expense",
                    record_key=key,
                    error=str(e),
                )
        return expenses

    async def save_expenses(self, user_key: str, expenses: Sequence[Expense]) -> bool:
        """Rewrite a user's file atomically."""
        path = self.path_for(user_key)
        document = {
            "expenses": {
                str(expense.id): expense.to_storage_dict() for expense in expenses
            }
        }
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
            return True
        except OSError as e:
            raise StorageError(f"Failed to save expenses: {e}")
