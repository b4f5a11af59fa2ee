"""
Audit Logger

DESIGN DECISION: Every command and every store read/write is logged as a
structured event. This provides:
1. Traceability of changes to the store file
2. Debugging capability when a store is reset or a save fails
3. A record of rejected input

The audit logger:
- Writes JSON lines through structlog on top of stdlib logging
- Never writes to stdout, which belongs to command output
- Stays silent unless a log file or debug mode is configured, so the
  human-readable messages on stderr are not interleaved with JSON
- Supports correlation IDs to trace the events of one invocation
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.config import TrackerSettings
from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_tracker.models.expense import Expense


LOGGER_NAME = "expense_tracker"

# Silent until configure_logging() is called
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(settings: TrackerSettings) -> logging.Logger:
    """
    Attach handlers to the package logger according to settings.

    - log_file set: JSON lines appended to that file
    - debug_mode: JSON lines on stderr
    - neither: a NullHandler, nothing is emitted

    Safe to call more than once; previous handlers are replaced.

    Raises:
        OSError: If log_file cannot be opened. The previous handlers are
                 kept in that case.
    """
    handlers: list[logging.Handler] = []
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    if settings.debug_mode:
        handlers.append(logging.StreamHandler(sys.stderr))
    if not handlers:
        handlers.append(logging.NullHandler())

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if settings.debug_mode else settings.log_level)
    logger.propagate = False
    return logger


class AuditLogger:
    """
    Central audit logging service.

    Turns AuditEvent models into structured log records. One instance is
    shared by the storage layer and the dispatcher of an invocation.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.

        Args:
            correlation_id: ID stamped on every event logged through this
                           instance. A new one is created if omitted.
        """
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger(f"{LOGGER_NAME}.audit")

    def log(self, event: AuditEvent) -> None:
        """
        Log an audit event at the level matching its severity.
        """
        if event.correlation_id is None:
            event = event.model_copy(update={"correlation_id": self.correlation_id})
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_store_loaded(self, path: str, expense_count: int) -> None:
        """Log a successful load."""
        self.log(AuditEventBuilder.store_loaded(path, expense_count, self.correlation_id))

    def log_store_reset(self, path: str, reason: str) -> None:
        """Log that a corrupt store was replaced by an empty list."""
        self.log(AuditEventBuilder.store_reset(path, reason, self.correlation_id))

    def log_store_saved(self, path: str, expense_count: int) -> None:
        """Log a successful save."""
        self.log(AuditEventBuilder.store_saved(path, expense_count, self.correlation_id))

    def log_store_save_failed(self, path: str, error_message: str) -> None:
        """Log a failed save."""
        self.log(
            AuditEventBuilder.store_save_failed(path, error_message, self.correlation_id)
        )

    def log_command_rejected(self, command: Optional[str]) -> None:
        """Log an unrecognized or missing command."""
        self.log(AuditEventBuilder.command_rejected(command, self.correlation_id))

    def log_option_rejected(
        self,
        command: str,
        error_code: str,
        error_message: str,
    ) -> None:
        """Log a command that failed on its options."""
        self.log(
            AuditEventBuilder.option_rejected(
                command=command,
                error_code=error_code,
                error_message=error_message,
                correlation_id=self.correlation_id,
            )
        )

    def log_expense_added(self, expense: Expense) -> None:
        self.log(
            AuditEventBuilder.expense_added(expense.id, expense.amount, self.correlation_id)
        )

    def log_expense_deleted(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id, self.correlation_id))

    def log_expense_not_found(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id, self.correlation_id))

    def log_expenses_listed(self, expense_count: int) -> None:
        self.log(AuditEventBuilder.expenses_listed(expense_count, self.correlation_id))

    def log_summary_computed(self, total: float) -> None:
        self.log(AuditEventBuilder.summary_computed(total, self.correlation_id))

    def log_month_filter_unsupported(self, month: str) -> None:
        self.log(AuditEventBuilder.month_filter_unsupported(month, self.correlation_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One is created per process invocation and passed to every component
    that logs.
    """
    return uuid4()
