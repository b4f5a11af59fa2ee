"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
Everything read from or written to the store file goes through these schemas.
"""

from expense_tracker.models.expense import (
    CommandResult,
    ErrorKind,
    Expense,
    ExpenseList,
    format_amount,
    today_iso,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CommandResult",
    "ErrorKind",
    "Expense",
    "ExpenseList",
    "format_amount",
    "today_iso",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
