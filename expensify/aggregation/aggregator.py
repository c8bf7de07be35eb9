"""
Expense Aggregation

DESIGN DECISION: Every function here is pure and synchronous.
They take the authoritative in-memory collection and return derived
numbers, so they are safe to recompute on every state change.

No rounding happens here. Amounts were rounded once at creation; sums,
averages and percentages are exact Decimal arithmetic and only the
display layer decides how many places to show.
"""

import math
import re
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from expensify.models.category import CATEGORIES, Category, get_category
from expensify.models.expense import (
    CategoryTotal,
    ChartSlice,
    Expense,
    ExpenseSummary,
)


ALL_CATEGORIES = "all"

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _month_of(value: Optional[str]) -> Optional[str]:
    """Get the YYYY-MM prefix of an ISO date, or None if it is malformed."""
    if not value or not _ISO_DATE.match(value):
        return None
    return value[:7]


def total(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all amounts. Empty input gives 0."""
    return sum((expense.amount for expense in expenses), ZERO)


def total_for_month(expenses: Iterable[Expense], year_month: str) -> Decimal:
    """
    Sum of amounts whose date falls in `year_month` (YYYY-MM).

    Records with a missing or malformed date are excluded.
    """
    return total(e for e in expenses if _month_of(e.date) == year_month)


def total_for_date(expenses: Iterable[Expense], on_date: str) -> Decimal:
    """Sum of amounts dated exactly `on_date`."""
    return total(e for e in expenses if e.date is not None and e.date == on_date)


def average_per_transaction(expenses: Sequence[Expense]) -> Decimal:
    """Mean amount per expense; 0 for an empty collection."""
    if not expenses:
        return ZERO
    return total(expenses) / len(expenses)


def percent_of_total(category_sum: Decimal, overall_total: Decimal) -> Decimal:
    """Share of `overall_total` in percent; 0 when the total is 0."""
    if not overall_total:
        return ZERO
    return Decimal(category_sum) / Decimal(overall_total) * HUNDRED


def breakdown_by_category(
    expenses: Sequence[Expense],
    categories: Sequence[Category] = CATEGORIES,
) -> list[CategoryTotal]:
    """
    Per-category sums, largest first.

    Each record is attributed to get_category(record.category), so unknown
    names land in "Other" and the breakdown always sums to total(expenses).
    Categories with nothing spent are left out. Ties keep taxonomy order.
    """
    sums: dict[str, Decimal] = {category.name: ZERO for category in categories}
    for expense in expenses:
        name = get_category(expense.category).name
        if name in sums:
            sums[name] += expense.amount

    overall = sum(sums.values(), ZERO)
    rows = [
        CategoryTotal(
            category=category,
            total=sums[category.name],
            percent=percent_of_total(sums[category.name], overall),
        )
        for category in categories
        if sums[category.name] > 0
    ]
    # sorted() is stable, so equal sums stay in taxonomy order
    return sorted(rows, key=lambda row: row.total, reverse=True)


def filter_expenses(
    expenses: Iterable[Expense],
    category_filter: Optional[str] = ALL_CATEGORIES,
    date_filter: Optional[str] = "",
) -> list[Expense]:
    """
    Subsequence matching both filters, in input order.

    `category_filter` is "all" (any case) or an exact category name.
    `date_filter` is empty/None (no constraint) or an exact ISO date.
    """
    match_any_category = not category_filter or category_filter.lower() == ALL_CATEGORIES

    result = []
    for expense in expenses:
        if not match_any_category and expense.category != category_filter:
            continue
        if date_filter and expense.date != date_filter:
            continue
        result.append(expense)
    return result


class ChartGeometry(BaseModel):
    """Dimensions of the donut ring."""
    model_config = ConfigDict(frozen=True)

    size: float = Field(default=170.0, gt=0)
    stroke_width: float = Field(default=22.0, gt=0)
    min_arc: float = Field(default=2.0, ge=0)

    @property
    def radius(self) -> float:
        return (self.size - self.stroke_width) / 2

    @property
    def circumference(self) -> float:
        return 2 * math.pi * self.radius


def chart_slices(
    breakdown: Sequence[CategoryTotal],
    overall_total: Decimal,
    geometry: Optional[ChartGeometry] = None,
) -> list[ChartSlice]:
    """
    Arcs for the donut chart, in breakdown order.

    Percentages are clamped to [0, 100]. Arcs no longer than
    `geometry.min_arc` are dropped from the drawing, but they still advance
    the offset of the arcs after them and still count in every total.
    """
    geometry = geometry or ChartGeometry()
    circumference = geometry.circumference

    slices = []
    offset = 0.0
    for row in breakdown:
        percent = min(max(float(percent_of_total(row.total, overall_total)), 0.0), 100.0)
        dash = percent / 100 * circumference
        if dash > geometry.min_arc:
            slices.append(ChartSlice(
                category=row.category,
                amount=row.total,
                percent=percent,
                dash=dash,
                gap=circumference - dash,
                offset=offset,
            ))
        offset += dash
    return slices


def summarize(
    expenses: Sequence[Expense],
    current_month: str,
    categories: Sequence[Category] = CATEGORIES,
) -> ExpenseSummary:
    """All overview aggregates for one collection."""
    return ExpenseSummary(
        total=total(expenses),
        this_month=total_for_month(expenses, current_month),
        count=len(expenses),
        average=average_per_transaction(expenses),
        breakdown=breakdown_by_category(expenses, categories),
    )
