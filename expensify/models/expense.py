"""
Expense Models

DESIGN DECISION: Amounts are Decimal end to end. They are rounded to two
places exactly once, when an expense is created from form input, and never
again during aggregation (repeated rounding compounds error).

Stored records are frozen: an expense is immutable once created and can
only be deleted.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expensify.models.category import Category, DEFAULT_CATEGORY, get_category


# Raw amount as it arrives from a form or a legacy store
RawAmount = Union[str, int, float, Decimal, None]


class Expense(BaseModel):
    """
    A single stored spending event.

    `id` is the creation timestamp in milliseconds. It is both the identity
    and the default sort key (descending = newest first).
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        gt=0,
        description="Creation timestamp in ms, unique within a collection"
    )
    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount, rounded to 2 places at creation"
    )
    category: str = Field(
        default=DEFAULT_CATEGORY.name,
        description="Category name (unknown names display as 'Other')"
    )
    date: Optional[str] = Field(
        default=None,
        description="ISO calendar date (YYYY-MM-DD)"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Optional free-text note"
    )

    @field_validator('note')
    @classmethod
    def empty_note_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def resolved_category(self) -> Category:
        """Category used for display (falls back to 'Other')."""
        return get_category(self.category)

    def to_storage_dict(self) -> dict:
        """Serialize for a persistence collaborator (amount kept as a string)."""
        return self.model_dump(mode="json")


class ExpenseForm(BaseModel):
    """
    Raw create-input for an expense.

    Nothing here is trusted: the validator turns it into an Expense or
    raises a ValidationError.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    amount: RawAmount = ""
    category: str = DEFAULT_CATEGORY.name
    date: Optional[str] = None
    note: Optional[str] = None


class CategoryTotal(BaseModel):
    """One row of the per-category breakdown."""
    model_config = ConfigDict(frozen=True)

    category: Category
    total: Decimal = Field(..., gt=0)
    percent: Decimal = Field(
        ...,
        ge=0,
        description="Share of the overall total, 0-100"
    )


class ChartSlice(BaseModel):
    """
    A drawable arc of the donut chart.

    `dash`, `gap` and `offset` are lengths along the ring's circumference.
    """
    model_config = ConfigDict(frozen=True)

    category: Category
    amount: Decimal
    percent: float = Field(..., ge=0.0, le=100.0)
    dash: float = Field(..., ge=0.0)
    gap: float = Field(..., ge=0.0)
    offset: float = Field(..., ge=0.0)


class ExpenseSummary(BaseModel):
    """Aggregates shown on the overview card."""
    model_config = ConfigDict(frozen=True)

    total: Decimal
    this_month: Decimal
    count: int = Field(..., ge=0)
    average: Decimal
    breakdown: list[CategoryTotal] = Field(default_factory=list)
