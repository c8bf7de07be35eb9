"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the local JSON file for Google Sheets (or anything else)
2. Use in-memory storage for testing
3. Keep the tracker decoupled from where expenses live

The interface is intentionally tiny. The tracker owns the authoritative
collection and hands the whole of it back after every mutation; each
backend picks its own format (the local file is a mapping keyed by id,
Sheets is one row per expense).
"""

from abc import ABC, abstractmethod
from typing import Sequence

from expensify.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for per-user expense collections.

    `user_key` is opaque: collections of different users never mix.
    """

    @abstractmethod
    async def load_expenses(self, user_key: str) -> list[Expense]:
        """
        Load a user's collection.

        Args:
            user_key: Opaque identity of the collection's owner

        Returns:
            The stored expenses (empty list for a new user), in any order

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def save_expenses(self, user_key: str, expenses: Sequence[Expense]) -> bool:
        """
        Replace a user's stored collection.

        Args:
            user_key: Opaque identity of the collection's owner
            expenses: The complete current collection

        Returns:
            True if saved successfully

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
