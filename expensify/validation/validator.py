"""
Input Validation

DESIGN DECISION: Validation happens before anything enters the collection.
The aggregator never re-validates stored records.

Validation NEVER silently fixes input. The one normalisation it performs,
rounding the amount to two places, is the documented storage rule:
ROUND_HALF_UP, so "19.995" is stored as 20.00. An amount that rounds
down to 0.00 is rejected, because stored amounts must be positive.
"""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from expensify.config import AuthSettings, get_settings
from expensify.config import messages
from expensify.models.expense import Expense, ExpenseForm, RawAmount
from expensify.models.user import AuthForm, AuthMode


CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")

MAX_TITLE_LENGTH = 200
MAX_NOTE_LENGTH = 1000
MAX_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 320

_EMAIL = re.compile(r"\S+@\S+\.\S+")


class ValidationError(Exception):
    """
    Create-input was rejected.

    `errors` maps each offending field to the message shown next to it.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


def parse_amount(raw: RawAmount) -> Optional[Decimal]:
    """
    Parse and round a raw amount.

    Returns None for anything that is not a finite number greater than zero
    after rounding to two places, or that exceeds MAX_AMOUNT.
    """
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
        if not value.is_finite() or value > MAX_AMOUNT:
            return None
        rounded = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    if rounded <= 0:
        return None
    return rounded


def parse_iso_date(raw: Optional[str]) -> Optional[str]:
    """Normalise an ISO date string, or None if it is not a real date."""
    try:
        return date.fromisoformat(raw.strip()).isoformat()
    except (AttributeError, ValueError):
        return None


class ExpenseValidator:
    """Turns an ExpenseForm into an Expense, or raises ValidationError."""

    def validate(self, form: ExpenseForm) -> dict[str, str]:
        """
        Check a form without building anything.

        Returns {field: message} for every problem found (empty if valid).
        """
        errors = {}
        if not form.title.strip():
            errors["title"] = messages.TITLE_REQUIRED
        elif len(form.title) > MAX_TITLE_LENGTH:
            errors["title"] = messages.TITLE_TOO_LONG
        if parse_amount(form.amount) is None:
            errors["amount"] = messages.INVALID_AMOUNT
        if form.note and len(form.note) > MAX_NOTE_LENGTH:
            errors["note"] = messages.NOTE_TOO_LONG
        if form.date and parse_iso_date(form.date) is None:
            errors["date"] = messages.INVALID_DATE
        return errors

    def build(
        self,
        form: ExpenseForm,
        expense_id: int,
        today: date,
    ) -> Expense:
        """
        Build a stored Expense from validated form input.

        Args:
            form: Raw user input
            expense_id: Identity to assign (creation timestamp in ms)
            today: Used when the form carries no date

        Raises:
            ValidationError: If any field is invalid
        """
        errors = self.validate(form)
        if errors:
            raise ValidationError(errors)

        return Expense(
            id=expense_id,
            title=form.title,
            amount=parse_amount(form.amount),
            category=form.category,
            date=parse_iso_date(form.date) if form.date else today.isoformat(),
            note=form.note or None,
        )


class AuthFormValidator:
    """
    Validates auth forms per mode.

    Rules:
    - signup: name required, at most MAX_NAME_LENGTH characters
    - login/signup/forgot: email required and well-formed
    - login/signup: password of at least `min_password_length`
    - otp: exactly `otp_length` digits, for a valid phone number
    """

    def __init__(self, auth_settings: Optional[AuthSettings] = None):
        self._settings = auth_settings or get_settings().auth

    def validate(self, mode: AuthMode, form: AuthForm) -> dict[str, str]:
        """Return {field: message} for every problem found."""
        errors = {}

        if mode == AuthMode.SIGNUP:
            name = form.name.strip()
            if not name:
                errors["name"] = messages.NAME_REQUIRED
            elif len(name) > MAX_NAME_LENGTH:
                errors["name"] = messages.NAME_TOO_LONG

        if mode != AuthMode.OTP:
            email = form.email.strip()
            if not email:
                errors["email"] = messages.EMAIL_REQUIRED
            elif len(email) > MAX_EMAIL_LENGTH or not _EMAIL.search(email):
                errors["email"] = messages.INVALID_EMAIL

        if mode == AuthMode.OTP:
            errors.update(self.validate_phone(form.phone))
            otp = form.otp.strip()
            if len(otp) != self._settings.otp_length or not otp.isdigit():
                errors["otp"] = messages.otp_wrong_length(self._settings.otp_length)

        if mode in (AuthMode.LOGIN, AuthMode.SIGNUP):
            if len(form.password) < self._settings.min_password_length:
                errors["password"] = messages.password_too_short(
                    self._settings.min_password_length
                )

        return errors

    def validate_phone(self, phone: str) -> dict[str, str]:
        """Check a phone number before an OTP is requested or verified."""
        digits = re.sub(r"\D", "", phone or "")
        if not self._settings.min_phone_digits <= len(digits) <= self._settings.max_phone_digits:
            return {"phone": messages.INVALID_PHONE}
        return {}
