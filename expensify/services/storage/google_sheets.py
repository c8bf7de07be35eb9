"""
Google Sheets Storage Implementation

The remote-backed variant. One spreadsheet holds every user's expenses
(and, see services/auth, the user accounts); each row carries the owner's
user key so collections never mix.

DESIGN DECISION: Google Sheets is used as the hosted store because:
1. Users can view their data directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- Not suitable for high-volume data (we're fine for personal use)
- No transactions: a save deletes the user's rows then appends the new ones
- Limited query capabilities (we filter in Python)
"""

from decimal import Decimal
from typing import Optional, Sequence

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from expensify.activity import get_logger
from expensify.config import GoogleSheetsSettings, get_settings
from expensify.models.expense import Expense
from expensify.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    StorageError,
)


# Column mappings for Expenses sheet
EXPENSE_COLUMNS = [
    "user_key",
    "id",
    "title",
    "amount",
    "category",
    "date",
    "note",
]

# Column mappings for Users sheet
USER_COLUMNS = [
    "uid",
    "name",
    "email",
    "phone",
    "salt",
    "password_hash",
    "created_at",
]


def contiguous_runs(indices: Sequence[int]) -> list[tuple[int, int]]:
    """Group ascending row indices into inclusive (start, end) runs."""
    runs: list[tuple[int, int]] = []
    for idx in indices:
        if runs and idx == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], idx)
        else:
            runs.append((idx, idx))
    return runs


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def _get_or_create_sheet(self, title: str, columns: list[str]) -> gspread.Worksheet:
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=1000,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet

    def get_expenses_sheet(self) -> gspread.Worksheet:
        """Get or create the Expenses worksheet."""
        return self._get_or_create_sheet(self._settings.expenses_sheet_name, EXPENSE_COLUMNS)

    def get_users_sheet(self) -> gspread.Worksheet:
        """Get or create the Users worksheet."""
        return self._get_or_create_sheet(self._settings.users_sheet_name, USER_COLUMNS)


class GoogleSheetsExpenseStorage(ExpenseStorageInterface):
    """
    Google Sheets implementation of expense storage.

    Expenses are stored as rows in a worksheet with one expense per row.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()
        self._logger = get_logger(__name__)

    def _expense_to_row(self, user_key: str, expense: Expense) -> list:
        """Convert an Expense to a spreadsheet row."""
        return [
            user_key,
            str(expense.id),
            expense.title,
            str(expense.amount),
            expense.category,
            expense.date or "",
            expense.note or "",
        ]

    def _row_to_expense(self, row: list) -> Expense:
        """Convert a spreadsheet row to an Expense."""
        # Handle missing columns gracefully
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return Expense(
            id=int(safe_get(1)),
            title=safe_get(2),
            amount=Decimal(safe_get(3)),
            category=safe_get(4),
            date=safe_get(5) or None,
            note=safe_get(6) or None,
        )

    async def load_expenses(self, user_key: str) -> list[Expense]:
        """Load a user's rows, skipping any that no longer parse."""
        try:
            sheet = self._client.get_expenses_sheet()
            all_rows = sheet.get_all_values()[1:]  # Skip header
        except Exception as e:
            raise StorageError(f"Failed to load expenses: {e}")

        expenses = []
        for row in all_rows:
            if not row or row[0] != user_key:
                continue
            try:
                expenses.append(self._row_to_expense(row))
            except (ValueError, ArithmeticError) as e:
                self._logger.warning("skipped_malformed_row", error=str(e))
        return expenses

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def save_expenses(self, user_key: str, expenses: Sequence[Expense]) -> bool:
        """
        Replace a user's rows with the current collection.

        New rows are appended before the old ones are deleted, so an
        interrupted save leaves duplicates (dropped on load by id) rather
        than a missing collection. Old rows are deleted one contiguous run
        per API call.
        """
        try:
            sheet = self._client.get_expenses_sheet()
            all_rows = sheet.get_all_values()

            # Row 1 is the header; sheet rows are 1-based
            owned = [
                idx for idx, row in enumerate(all_rows[1:], start=2)
                if row and row[0] == user_key
            ]

            rows = [self._expense_to_row(user_key, e) for e in expenses]
            if rows:
                sheet.append_rows(rows, value_input_option="RAW")

            # Bottom-up so earlier indices stay valid
            for start, end in reversed(contiguous_runs(owned)):
                sheet.delete_rows(start, end)
            return True
        except Exception as e:
            raise StorageError(f"Failed to save expenses: {e}")
