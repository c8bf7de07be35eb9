"""Authentication providers."""

from expensify.services.auth.interface import (
    EMAIL_ALREADY_IN_USE,
    INVALID_OTP,
    OPERATION_NOT_ALLOWED,
    UNAVAILABLE,
    USER_NOT_FOUND,
    WRONG_PASSWORD,
    AuthError,
    AuthProviderInterface,
)
from expensify.services.auth.local import LocalAuthProvider
from expensify.services.auth.google_sheets import GoogleSheetsAuthProvider

__all__ = [
    # Interface
    "AuthError",
    "AuthProviderInterface",
    # Error codes
    "EMAIL_ALREADY_IN_USE",
    "INVALID_OTP",
    "OPERATION_NOT_ALLOWED",
    "UNAVAILABLE",
    "USER_NOT_FOUND",
    "WRONG_PASSWORD",
    # Implementations
    "GoogleSheetsAuthProvider",
    "LocalAuthProvider",
]
