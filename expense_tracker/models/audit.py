"""
Audit Models for Expense Tracker

Every command run against the store produces audit events.
This provides:
1. Traceability of every change to the store file
2. Debugging information when a store is reset or a save fails
3. A record of rejected input

DESIGN DECISION: Audit events are append-only log records. They are
written to the structured log, never to the store file.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Store file
    STORE_LOADED = "store_loaded"
    STORE_RESET = "store_reset"
    STORE_SAVED = "store_saved"
    STORE_SAVE_FAILED = "store_save_failed"

    # Dispatch
    COMMAND_REJECTED = "command_rejected"
    OPTION_REJECTED = "option_rejected"

    # Commands
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_NOT_FOUND = "expense_not_found"
    EXPENSES_LISTED = "expenses_listed"
    SUMMARY_COMPUTED = "summary_computed"
    MONTH_FILTER_UNSUPPORTED = "month_filter_unsupported"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'store', 'command')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Expense id this event relates to"
    )

    # Correlation - one id per process invocation
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one invocation"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.store_loaded(path, count, correlation_id)
        event = AuditEventBuilder.expense_added(expense_id, amount, correlation_id)
    """

    @staticmethod
    def store_loaded(
        path: str,
        expense_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Loaded {expense_count} expenses",
            details={
                "path": path,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def store_reset(
        path: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_RESET,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            correlation_id=correlation_id,
            description="Store file is corrupt or invalid, starting with an empty list",
            details={
                "path": path,
            },
            error_code="corrupt_store",
            error_message=reason,
        )

    @staticmethod
    def store_saved(
        path: str,
        expense_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Saved {expense_count} expenses",
            details={
                "path": path,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def store_save_failed(
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            correlation_id=correlation_id,
            description="Could not write the store file",
            details={
                "path": path,
            },
            error_code="storage_failure",
            error_message=error_message,
        )

    @staticmethod
    def command_rejected(
        command: Optional[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="command",
            correlation_id=correlation_id,
            description=f"Unrecognized command: {command!r}",
            details={
                "command": command,
            },
            error_code="unknown_command" if command else "usage",
        )

    @staticmethod
    def option_rejected(
        command: str,
        error_code: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPTION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="command",
            correlation_id=correlation_id,
            description=f"Rejected options for '{command}'",
            details={
                "command": command,
            },
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def expense_added(
        expense_id: int,
        amount: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} added",
            details={
                "amount": amount,
            },
        )

    @staticmethod
    def expense_deleted(
        expense_id: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} deleted",
        )

    @staticmethod
    def expense_not_found(
        expense_id: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"No expense with id {expense_id}",
            error_code="not_found",
        )

    @staticmethod
    def expenses_listed(
        expense_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LISTED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Listed {expense_count} expenses",
            details={
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def summary_computed(
        total: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_COMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            correlation_id=correlation_id,
            description="Summary computed",
            details={
                "total": total,
            },
        )

    @staticmethod
    def month_filter_unsupported(
        month: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTH_FILTER_UNSUPPORTED,
            severity=AuditSeverity.WARNING,
            entity_type="command",
            correlation_id=correlation_id,
            description="summary --month is accepted but not implemented",
            details={
                "month": month,
            },
        )
