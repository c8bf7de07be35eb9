"""
Display formatting for amounts and dates.

Amounts use Indian digit grouping (1,23,456.50), matching the rupee
default currency symbol.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from html import escape
from typing import Optional, Union

from expensify.models.expense import Expense


def _group_indian(integer_digits: str) -> str:
    """Group as 12,34,56,789: last three digits, then pairs."""
    if len(integer_digits) <= 3:
        return integer_digits
    head, tail = integer_digits[:-3], integer_digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Union[Decimal, int, float], symbol: str = "₹") -> str:
    """Format an amount for display, e.g. Decimal("123456.5") -> "₹1,23,456.50"."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):.2f}".partition(".")
    return f"{sign}{symbol}{_group_indian(integer_part)}.{fraction}"


def format_short_date(iso_date: Optional[str]) -> str:
    """"2024-03-05" -> "5 Mar". Empty string if the date doesn't parse."""
    try:
        parsed = date.fromisoformat(iso_date)
    except (TypeError, ValueError):
        return ""
    return f"{parsed.day} {parsed.strftime('%b')}"


def format_long_date(value: date) -> str:
    """date(2024, 3, 5) -> "Tue, 5 Mar 2024"."""
    return f"{value.strftime('%a')}, {value.day} {value.strftime('%b %Y')}"


def expense_row_markup(expense: Expense, css_class: str = "") -> str:
    """
    HTML for the text column of a transaction row.

    Title, category and note are user input and are always escaped.
    """
    category = expense.resolved_category
    meta = escape(expense.category)
    if expense.date:
        meta = f"{meta} · {format_short_date(expense.date)}"
    note = f'<br><span class="row-note">{escape(expense.note)}</span>' if expense.note else ""
    return (
        f'<div class="{escape(css_class)}">{category.icon} <b>{escape(expense.title)}</b><br>'
        f'<span style="color:{category.color}">{meta}</span>{note}</div>'
    )
