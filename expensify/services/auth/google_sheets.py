"""
Google Sheets Authentication Provider

Accounts are rows of the Users worksheet in the same spreadsheet as the
expenses. Only email/password is supported on this backend.
"""

from typing import Optional

from expensify.activity import ActivityLogger
from expensify.models.user import User
from expensify.services.auth.base import CredentialAuthProvider
from expensify.services.auth.interface import (
    OPERATION_NOT_ALLOWED,
    UNAVAILABLE,
    AuthError,
)
from expensify.services.storage.google_sheets import USER_COLUMNS, GoogleSheetsClient


class GoogleSheetsAuthProvider(CredentialAuthProvider):
    """Email/password accounts stored in a worksheet."""

    def __init__(
        self,
        client: Optional[GoogleSheetsClient] = None,
        activity: Optional[ActivityLogger] = None,
    ):
        super().__init__(activity)
        self._client = client or GoogleSheetsClient()

    def _find_user(self, email: str) -> Optional[dict]:
        try:
            rows = self._client.get_users_sheet().get_all_values()[1:]
        except Exception as e:
            raise AuthError(UNAVAILABLE, str(e))

        email_idx = USER_COLUMNS.index("email")
        for row in rows:
            if len(row) > email_idx and row[email_idx] == email:
                padded = list(row) + [""] * (len(USER_COLUMNS) - len(row))
                return dict(zip(USER_COLUMNS, padded))
        return None

    def _insert_user(self, record: dict) -> None:
        row = [str(record.get(column, "")) for column in USER_COLUMNS]
        try:
            self._client.get_users_sheet().append_row(row, value_input_option="RAW")
        except Exception as e:
            raise AuthError(UNAVAILABLE, str(e))

    async def sign_in_with_provider(self, provider: str) -> User:
        raise AuthError(OPERATION_NOT_ALLOWED, f"{provider} sign-in")

    async def send_otp(self, phone: str) -> bool:
        raise AuthError(OPERATION_NOT_ALLOWED, "phone sign-in")

    async def verify_otp(self, phone: str, code: str) -> User:
        raise AuthError(OPERATION_NOT_ALLOWED, "phone sign-in")
