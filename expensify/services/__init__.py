"""Services package."""

from expensify.services.auth import (
    AuthError,
    AuthProviderInterface,
    GoogleSheetsAuthProvider,
    LocalAuthProvider,
)
from expensify.services.storage import (
    ConnectionError,
    ExpenseStorageInterface,
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
    InMemoryExpenseStorage,
    LocalJsonExpenseStorage,
    StorageError,
)

__all__ = [
    # Auth services
    "AuthError",
    "AuthProviderInterface",
    "GoogleSheetsAuthProvider",
    "LocalAuthProvider",
    # Storage services
    "ConnectionError",
    "ExpenseStorageInterface",
    "GoogleSheetsClient",
    "GoogleSheetsExpenseStorage",
    "InMemoryExpenseStorage",
    "LocalJsonExpenseStorage",
    "StorageError",
]
