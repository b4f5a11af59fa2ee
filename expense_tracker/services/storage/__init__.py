"""
Storage Services Package

Provides the abstract storage interface and its implementations.
The JSON file is the real backend; the in-memory one is for tests.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)
from expense_tracker.services.storage.json_file import (
    CORRUPT_STORE_WARNING,
    JsonFileExpenseStorage,
    load_expenses,
    save_expenses,
)
from expense_tracker.services.storage.memory import InMemoryExpenseStorage

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    # Exceptions
    "StorageError",
    # JSON file implementation
    "CORRUPT_STORE_WARNING",
    "JsonFileExpenseStorage",
    "load_expenses",
    "save_expenses",
    # In-memory implementation
    "InMemoryExpenseStorage",
]
