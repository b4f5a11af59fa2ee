"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep command handlers unaware of where expenses live
2. Use in-memory storage for testing
3. Swap the JSON file for something else later

The interface is intentionally tiny: the whole store is read once at
startup and written back as a whole. There are no per-record operations.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import ExpenseList


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> ExpenseList:
        """
        Load the full expense list.

        Returns:
            The stored expenses, or an empty list when nothing usable
            is stored. Never raises for missing or corrupt data.
        """
        pass

    @abstractmethod
    def save(self, expenses: ExpenseList) -> None:
        """
        Replace the stored expenses with this list.

        Args:
            expenses: The full list to persist

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
