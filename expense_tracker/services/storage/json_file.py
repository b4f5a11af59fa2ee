"""
JSON File Storage Implementation

The store is a single JSON array on disk:

    [
        {
            "id": 1,
            "date": "2024-12-01",
            "description": "Coffee",
            "amount": 3.5
        }
    ]

TRADEOFFS:
- The whole file is read at startup and rewritten after a command
- No atomic rename and no backup; a crash mid-write can corrupt the file
- No file locking; concurrent invocations race and the last writer wins

A corrupt file is never repaired. It is reported, replaced in memory by
an empty list, and overwritten by the next save.
"""

import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import ExpenseList
from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)


CORRUPT_STORE_WARNING = "Warning: corrupt or invalid JSON, starting new array"

DEFAULT_INDENT = 4


def load_expenses(
    path: str | Path,
    audit_logger: Optional[AuditLogger] = None,
    err: Optional[TextIO] = None,
) -> ExpenseList:
    """
    Load expenses from a JSON file.

    - File missing or unreadable: empty list
    - File empty: empty list
    - Not JSON, not an array, or entries that are not expenses:
      warning on stderr, empty list
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return ExpenseList()
    except UnicodeDecodeError as e:
        return _reset(path, f"not valid UTF-8: {e}", audit_logger, err)
    except OSError:
        return ExpenseList()

    if not text:
        return ExpenseList()

    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        return _reset(path, f"invalid JSON: {e}", audit_logger, err)

    if not isinstance(payload, list):
        return _reset(
            path,
            f"top-level value is {type(payload).__name__}, expected array",
            audit_logger,
            err,
        )

    try:
        expenses = ExpenseList.model_validate(payload)
    except ValidationError as e:
        return _reset(
            path,
            f"{e.error_count()} invalid expense fields",
            audit_logger,
            err,
        )

    if audit_logger:
        audit_logger.log_store_loaded(str(path), len(expenses))
    return expenses


def save_expenses(
    path: str | Path,
    expenses: ExpenseList,
    indent: int = DEFAULT_INDENT,
    audit_logger: Optional[AuditLogger] = None,
) -> None:
    """
    Write the full list as a pretty-printed JSON array, truncating the file.

    Raises:
        StorageError: If the file cannot be written
    """
    path = Path(path)
    text = json.dumps(expenses.model_dump(mode="json"), indent=indent, ensure_ascii=False)
    try:
        with path.open("w", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as e:
        if audit_logger:
            audit_logger.log_store_save_failed(str(path), str(e))
        raise StorageError(f"Could not write {path}: {e}") from e

    if audit_logger:
        audit_logger.log_store_saved(str(path), len(expenses))


def _reset(
    path: Path,
    reason: str,
    audit_logger: Optional[AuditLogger],
    err: Optional[TextIO],
) -> ExpenseList:
    print(CORRUPT_STORE_WARNING, file=err or sys.stderr)
    if audit_logger:
        audit_logger.log_store_reset(str(path), reason)
    return ExpenseList()


class JsonFileExpenseStorage(ExpenseStorageInterface):
    """
    Expense storage backed by one JSON file.
    """

    def __init__(
        self,
        path: str | Path,
        indent: int = DEFAULT_INDENT,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.path = Path(path)
        self._indent = indent
        self._audit_logger = audit_logger

    def load(self) -> ExpenseList:
        return load_expenses(self.path, audit_logger=self._audit_logger)

    def save(self, expenses: ExpenseList) -> None:
        save_expenses(
            self.path,
            expenses,
            indent=self._indent,
            audit_logger=self._audit_logger,
        )
