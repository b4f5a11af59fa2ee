"""
In-Memory Storage Implementation

Used by tests and by callers that drive the dispatcher without touching
the filesystem. Saved lists are deep-copied so later mutation of the
caller's list does not leak into what was "persisted".
"""

from typing import Optional

from expense_tracker.models.expense import ExpenseList
from expense_tracker.services.storage.interface import ExpenseStorageInterface


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Expense storage held in a Python list."""

    def __init__(self, expenses: Optional[ExpenseList] = None):
        self._expenses = expenses.model_copy(deep=True) if expenses else ExpenseList()
        self.save_count = 0

    def load(self) -> ExpenseList:
        return self._expenses.model_copy(deep=True)

    def save(self, expenses: ExpenseList) -> None:
        self._expenses = expenses.model_copy(deep=True)
        self.save_count += 1

    @property
    def expenses(self) -> ExpenseList:
        """What was last saved."""
        return self._expenses
