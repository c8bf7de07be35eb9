"""
Expense Tracker

The one owner of a user's expense collection for a session.

GUARANTEES:
- The in-memory collection is the source of truth. Aggregates are always
  computed from it, never from what storage has (or hasn't) confirmed.
- The collection is newest-first by id and ids are unique.
- Invalid input raises ValidationError and leaves the collection untouched.
- Deleting an id that isn't there is a silent no-op.
- A failed storage write is logged and surfaced through `last_error`;
  it is not retried or rolled back here.
"""

from datetime import date, datetime
from typing import Callable, Iterable, Optional

from expensify.activity import ActivityLogger
from expensify.aggregation import (
    ALL_CATEGORIES,
    ChartGeometry,
    chart_slices,
    filter_expenses,
    summarize,
)
from expensify.config import messages
from expensify.lifecycle import DisplayLifecycle, DisplayState
from expensify.models.expense import ChartSlice, Expense, ExpenseForm, ExpenseSummary
from expensify.services.storage import ExpenseStorageInterface, StorageError
from expensify.validation import ExpenseValidator, ValidationError


class ExpenseTracker:
    """
    Owns one user's collection and keeps storage informed of every change.

    Args:
        user_key: Opaque key scoping the collection (the user's uid)
        storage: Persistence collaborator
        validator: Builds expenses from form input
        lifecycle: Display state machine (highlight / pending deletion)
        activity: Structured logger
        now: Wall clock, used for ids and default dates
    """

    def __init__(
        self,
        user_key: str,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        lifecycle: Optional[DisplayLifecycle] = None,
        activity: Optional[ActivityLogger] = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.user_key = user_key
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._lifecycle = lifecycle or DisplayLifecycle()
        self._activity = (activity or ActivityLogger()).bind(user_key)
        self._now = now
        self._expenses: list[Expense] = []
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    @property
    def expenses(self) -> list[Expense]:
        """The current collection, newest first (a copy)."""
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __contains__(self, expense_id: int) -> bool:
        return any(e.id == expense_id for e in self._expenses)

    def replace_collection(self, expenses: Iterable[Expense]) -> None:
        """
        Adopt a collection supplied from outside (initial load or a change
        notification). Duplicate ids keep their first occurrence.
        """
        seen: set[int] = set()
        unique = []
        for expense in expenses:
            if expense.id in seen:
                continue
            seen.add(expense.id)
            unique.append(expense)
        self._expenses = sorted(unique, key=lambda e: e.id, reverse=True)

    async def load(self) -> list[Expense]:
        """Load the stored collection. On failure the current one is kept."""
        try:
            stored = await self._storage.load_expenses(self.user_key)
        except StorageError as e:
            self._activity.log_storage_failed("load", str(e))
            self.last_error = messages.OPERATION_FAILED
            return self.expenses

        self.replace_collection(stored)
        self._lifecycle.reset()
        self._activity.log_collection_loaded(len(self._expenses))
        return self.expenses

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _next_id(self) -> int:
        """Creation time in ms, bumped past the newest id if the clock lags."""
        now_ms = int(self._now().timestamp() * 1000)
        newest = self._expenses[0].id if self._expenses else 0
        return max(now_ms, newest + 1)

    def today(self) -> date:
        return self._now().date()

    async def add_expense(self, form: ExpenseForm) -> Expense:
        """
        Validate and add an expense at the head of the collection.

        Raises:
            ValidationError: If the form is invalid (collection unchanged)
        """
        try:
            expense = self._validator.build(form, self._next_id(), self.today())
        except ValidationError as e:
            self._activity.log_validation_failed("expense", sorted(e.errors))
            raise

        self._expenses.insert(0, expense)
        self._lifecycle.mark_created(expense.id)
        self._activity.log_expense_added(expense.id, expense.category, str(expense.amount))

        await self._persist("add")
        return expense

    def request_delete(self, expense_id: int) -> bool:
        """
        Put a record into pending-deletion.

        It stays in the collection (and in aggregates) until
        complete_deletions() runs after the transition. Returns False for
        unknown ids or records already pending.
        """
        if expense_id not in self:
            return False
        started = self._lifecycle.begin_deletion(expense_id)
        if started:
            self._activity.log_deletion_requested(expense_id)
        return started

    async def complete_deletions(self) -> list[int]:
        """Remove every record whose deletion transition has elapsed."""
        due = set(self._lifecycle.collect_removals())
        if not due:
            return []

        removed = [e.id for e in self._expenses if e.id in due]
        self._expenses = [e for e in self._expenses if e.id not in due]
        for expense_id in removed:
            self._activity.log_expense_deleted(expense_id)

        if removed:
            await self._persist("delete")
        return removed

    async def delete_expense(self, expense_id: int) -> bool:
        """Remove a record immediately, skipping the transition."""
        if expense_id not in self:
            return False

        self._expenses = [e for e in self._expenses if e.id != expense_id]
        self._lifecycle.forget(expense_id)
        self._activity.log_expense_deleted(expense_id)

        await self._persist("delete")
        return True

    async def _persist(self, operation: str) -> None:
        try:
            await self._storage.save_expenses(self.user_key, list(self._expenses))
        except StorageError as e:
            self._activity.log_storage_failed(operation, str(e))
            self.last_error = messages.OPERATION_FAILED
        else:
            self.last_error = None

    def clear_error(self) -> None:
        self.last_error = None

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def display_state(self, expense_id: int) -> DisplayState:
        if expense_id not in self:
            return DisplayState.REMOVED
        return self._lifecycle.state(expense_id)

    @property
    def has_pending_deletions(self) -> bool:
        return bool(self._lifecycle.pending_ids)

    def seconds_until_next_removal(self) -> Optional[float]:
        return self._lifecycle.seconds_until_next_removal()

    def summary(self) -> ExpenseSummary:
        """Overview aggregates for the current month."""
        return summarize(self._expenses, self.today().isoformat()[:7])

    def recent(self, limit: int = 5) -> list[Expense]:
        return self._expenses[:limit]

    def filtered(
        self,
        category_filter: Optional[str] = ALL_CATEGORIES,
        date_filter: Optional[str] = "",
    ) -> list[Expense]:
        return filter_expenses(self._expenses, category_filter, date_filter)

    def chart(self, geometry: Optional[ChartGeometry] = None) -> list[ChartSlice]:
        summary = self.summary()
        return chart_slices(summary.breakdown, summary.total, geometry)
