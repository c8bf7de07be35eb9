"""In-memory storage, for tests and throwaway sessions."""

from typing import Optional, Sequence

from expensify.models.expense import Expense
from expensify.services.storage.interface import ExpenseStorageInterface


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Keeps each user's collection in a dict. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, Sequence[Expense]]] = None):
        self._collections: dict[str, list[Expense]] = {
            key: list(expenses) for key, expenses in (initial or {}).items()
        }
        self.save_count = 0

    async def load_expenses(self, user_key: str) -> list[Expense]:
        return list(self._collections.get(user_key, []))

    async def save_expenses(self, user_key: str, expenses: Sequence[Expense]) -> bool:
        self._collections[user_key] = list(expenses)
        self.save_count += 1
        return True
