"""
Storage Services Package

Provides the abstract interface and concrete implementations for expense storage:
a local JSON file per user, Google Sheets for the remote-backed variant, and an
in-memory store for tests.
"""

from expensify.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    StorageError,
)
from expensify.services.storage.memory import InMemoryExpenseStorage
from expensify.services.storage.local_json import LocalJsonExpenseStorage
from expensify.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
)

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsExpenseStorage",
    "InMemoryExpenseStorage",
    "LocalJsonExpenseStorage",
]
