"""
Data Models Package

This package contains all Pydantic models used in Expensify.
All data flowing through the system must conform to these schemas.
"""

from expensify.models.category import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    FALLBACK_CATEGORY,
    Category,
    category_names,
    get_category,
)
from expensify.models.expense import (
    CategoryTotal,
    ChartSlice,
    Expense,
    ExpenseForm,
    ExpenseSummary,
)
from expensify.models.user import (
    AuthForm,
    AuthMode,
    AuthResult,
    User,
)

__all__ = [
    # Category taxonomy
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "FALLBACK_CATEGORY",
    "Category",
    "category_names",
    "get_category",
    # Expense models
    "CategoryTotal",
    "ChartSlice",
    "Expense",
    "ExpenseForm",
    "ExpenseSummary",
    # User models
    "AuthForm",
    "AuthMode",
    "AuthResult",
    "User",
]
