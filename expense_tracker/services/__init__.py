"""Services package."""

from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    InMemoryExpenseStorage,
    JsonFileExpenseStorage,
    StorageError,
)

__all__ = [
    "ExpenseStorageInterface",
    "InMemoryExpenseStorage",
    "JsonFileExpenseStorage",
    "StorageError",
]
