"""
Display Lifecycle

Each expense moves through:

    created -> visible -> [pending-deletion] -> removed

"created" is the short highlight right after an expense is added.
"pending-deletion" is a time-boxed transition: the record is still in
the collection (and in every aggregate) until the transition elapses and
the tracker collects it. Collected ids are forgotten; "removed" is simply
an id the tracker no longer holds.

DESIGN DECISION: State is derived from timestamps and an injected clock
instead of timer callbacks, so deletion timing is testable without sleeping.
"""

import time
from enum import Enum
from typing import Callable, Optional


class DisplayState(str, Enum):
    """How a record should be drawn right now."""
    CREATED = "created"
    VISIBLE = "visible"
    PENDING_DELETION = "pending_deletion"
    REMOVED = "removed"


class DisplayLifecycle:
    """Tracks highlight and pending-deletion windows per expense id."""

    def __init__(
        self,
        highlight_seconds: float = 1.6,
        transition_seconds: float = 0.38,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._highlight = highlight_seconds
        self._transition = transition_seconds
        self._clock = clock
        self._created_at: dict[int, float] = {}
        self._deleting_since: dict[int, float] = {}

    def mark_created(self, expense_id: int) -> None:
        self._created_at[expense_id] = self._clock()

    def begin_deletion(self, expense_id: int) -> bool:
        """
        Start the pending-deletion transition.

        Returns False if the record is already pending.
        """
        if expense_id in self._deleting_since:
            return False
        self._deleting_since[expense_id] = self._clock()
        return True

    def state(self, expense_id: int) -> DisplayState:
        if expense_id in self._deleting_since:
            return DisplayState.PENDING_DELETION
        created = self._created_at.get(expense_id)
        if created is not None and self._clock() - created < self._highlight:
            return DisplayState.CREATED
        return DisplayState.VISIBLE

    @property
    def pending_ids(self) -> list[int]:
        return list(self._deleting_since)

    def collect_removals(self) -> list[int]:
        """
        Finish every transition that has elapsed.

        Returns the ids whose transition is over, in the order deletion began.
        They are forgotten here; the caller drops them from its collection.
        """
        now = self._clock()
        due = [
            expense_id
            for expense_id, since in self._deleting_since.items()
            if now - since >= self._transition
        ]
        for expense_id in due:
            self.forget(expense_id)
        return due

    def forget(self, expense_id: int) -> None:
        self._deleting_since.pop(expense_id, None)
        self._created_at.pop(expense_id, None)

    def seconds_until_next_removal(self) -> Optional[float]:
        """Time left on the oldest pending transition, or None if nothing is pending."""
        if not self._deleting_since:
            return None
        oldest = min(self._deleting_since.values())
        return max(0.0, self._transition - (self._clock() - oldest))

    def reset(self) -> None:
        self._created_at.clear()
        self._deleting_since.clear()
