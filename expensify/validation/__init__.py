from expensify.validation.validator import (
    AuthFormValidator,
    ExpenseValidator,
    ValidationError,
    parse_amount,
    parse_iso_date,
)

__all__ = [
    "AuthFormValidator",
    "ExpenseValidator",
    "ValidationError",
    "parse_amount",
    "parse_iso_date",
]
