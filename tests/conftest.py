"""Shared fixtures for the Expensify tests."""

from decimal import Decimal

import pytest

from expensify.config import AuthSettings
from expensify.models.expense import Expense


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_expense(
    expense_id: int,
    amount: str,
    category: str = "Food & Dining",
    date: str = "2024-03-05",
    title: str = "Lunch",
    note=None,
) -> Expense:
    return Expense(
        id=expense_id,
        title=title,
        amount=Decimal(amount),
        category=category,
        date=date,
        note=note,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_settings():
    return AuthSettings(
        min_password_length=6,
        otp_length=6,
        min_phone_digits=10,
        max_phone_digits=15,
        local_error_messages="specific",
        sheets_error_messages="generic",
    )


@pytest.fixture
def sample_expenses():
    """Three expenses across two months and two categories, newest first."""
    return [
        make_expense(3, "50.00", "Transport", "2024-03-10", "Cab"),
        make_expense(2, "150.00", "Food & Dining", "2024-03-05", "Dinner"),
        make_expense(1, "100.00", "Food & Dining", "2024-02-20", "Groceries"),
    ]
