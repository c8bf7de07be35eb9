"""
Tests for Expensify models

Test strategy:
1. Unit tests for individual components (models, validators, aggregation)
2. Flow tests for the tracker and auth with in-memory or mocked collaborators
3. No real API calls in tests (use mocks)
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from expensify.models import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    FALLBACK_CATEGORY,
    AuthForm,
    AuthResult,
    CategoryTotal,
    Expense,
    ExpenseForm,
    User,
    category_names,
    get_category,
)


class TestCategories:
    """Tests for the fixed category taxonomy."""

    def test_taxonomy_order(self):
        """Test the eight categories come in display order."""
        assert category_names() == [
            "Food & Dining",
            "Transport",
            "Shopping",
            "Entertainment",
            "Health",
            "Bills & Utilities",
            "Education",
            "Other",
        ]

    def test_names_are_unique(self):
        names = [c.name for c in CATEGORIES]
        assert len(names) == len(set(names))

    def test_default_and_fallback(self):
        """Test new expenses default to the first category, unknowns to Other."""
        assert DEFAULT_CATEGORY.name == "Food & Dining"
        assert FALLBACK_CATEGORY.name == "Other"

    def test_get_category_known(self):
        category = get_category("Transport")
        assert category.icon == "🚖"
        assert category.color == "#4EC9FF"

    def test_get_category_unknown_falls_back(self):
        assert get_category("Groceries") == FALLBACK_CATEGORY
        assert get_category("") == FALLBACK_CATEGORY
        assert get_category(None) == FALLBACK_CATEGORY

    def test_lookup_is_exact(self):
        assert get_category("food & dining") == FALLBACK_CATEGORY
        assert get_category("Food & Dining").name == "Food & Dining"


class TestExpenseModel:
    """Tests for the stored Expense record."""

    def test_expense_creation(self):
        expense = Expense(id=1, title="Lunch", amount=Decimal("12.50"), date="2024-03-05")
        assert expense.category == "Food & Dining"
        assert expense.note is None

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from the title."""
        expense = Expense(id=1, title="  Lunch  ", amount=Decimal("1.00"))
        assert expense.title == "Lunch"

    def test_expense_rejects_non_positive_amount(self):
        with pytest.raises(ValidationError):
            Expense(id=1, title="Lunch", amount=Decimal("0"))
        with pytest.raises(ValidationError):
            Expense(id=1, title="Lunch", amount=Decimal("-5.00"))

    def test_expense_rejects_extra_precision(self):
        """Test amounts must already be rounded to cents."""
        with pytest.raises(ValidationError):
            Expense(id=1, title="Lunch", amount=Decimal("1.005"))

    def test_expense_is_frozen(self):
        expense = Expense(id=1, title="Lunch", amount=Decimal("1.00"))
        with pytest.raises(ValidationError):
            expense.title = "Dinner"

    def test_empty_note_becomes_none(self):
        expense = Expense(id=1, title="Lunch", amount=Decimal("1.00"), note="")
        assert expense.note is None

    def test_unknown_category_kept_but_resolves_to_other(self):
        """Test an unknown category name survives storage and displays as Other."""
        expense = Expense(id=1, title="Lunch", amount=Decimal("1.00"), category="Pets")
        assert expense.category == "Pets"
        assert expense.resolved_category.name == "Other"

    def test_to_storage_dict(self):
        expense = Expense(id=7, title="Cab", amount=Decimal("120.50"), category="Transport", date="2024-03-05")
        data = expense.to_storage_dict()
        assert data == {
            "id": 7,
            "title": "Cab",
            "amount": "120.50",
            "category": "Transport",
            "date": "2024-03-05",
            "note": None,
        }
        assert Expense.model_validate(data) == expense


class TestFormModels:
    """Tests for the untrusted form inputs."""

    def test_expense_form_defaults(self):
        form = ExpenseForm()
        assert form.title == ""
        assert form.amount == ""
        assert form.category == "Food & Dining"

    def test_auth_form_keeps_password_spaces(self):
        form = AuthForm(email="a@b.co", password="  pass word  ")
        assert form.password == "  pass word  "

    def test_auth_result_defaults(self):
        result = AuthResult(success=False)
        assert result.field_errors == {}
        assert result.user is None

    def test_user_requires_uid(self):
        with pytest.raises(ValidationError):
            User(uid="", name="Asha")


class TestCategoryTotal:
    """Tests for breakdown rows."""

    def test_total_must_be_positive(self):
        with pytest.raises(ValidationError):
            CategoryTotal(category=CATEGORIES[0], total=Decimal("0"), percent=Decimal("0"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
