"""
Main Orchestrator for Expense Tracker

This module ties the components together and defines the one flow the
tool has:

    argv → load store → parse options → dispatch → render → save → exit

DESIGN DECISION: The orchestrator owns every side effect.
- The store is loaded once and passed explicitly to the handler
- Handlers return results; only the orchestrator prints
- The store is written back only when a command changed it; a
  read-only command never rewrites a file it could not fully load
- Errors never escape as tracebacks; they become stderr text and,
  when strict exit codes are enabled, a non-zero status
"""

import sys
from typing import Mapping, Optional, Sequence, TextIO

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.cli.arguments import parse_arguments, parse_command
from expense_tracker.commands import COMMAND_NAMES, CommandHandlers
from expense_tracker.config import TrackerSettings, get_settings
from expense_tracker.models.expense import CommandResult, ErrorKind, ExpenseList
from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    JsonFileExpenseStorage,
    StorageError,
)


EXIT_OK = 0
EXIT_ERROR = 1

COMMAND_CHOICES = "[" + "|".join(COMMAND_NAMES) + "]"


class ExpenseTrackerApp:
    """
    Runs one invocation of the tracker.

    Flow:
    1. No command → usage on stderr, nothing loaded or saved
    2. Load → the full store into memory
    3. Dispatch → unknown command is reported, nothing saved
    4. Render → stdout for output, stderr for notices and errors
    5. Save → the full store, only when the command changed it
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        handlers: Optional[CommandHandlers] = None,
        audit_logger: Optional[AuditLogger] = None,
        strict_exit_codes: bool = False,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._handlers = handlers or CommandHandlers(audit_logger=audit_logger)
        self._strict_exit_codes = strict_exit_codes

    def run(
        self,
        argv: Sequence[str],
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> int:
        """
        Execute argv and return the process exit code.
        """
        out = out or sys.stdout
        err = err or sys.stderr

        command = parse_command(argv)
        if command is None:
            program = argv[0] if argv else "expense-tracker"
            print(f"usage: {program} {COMMAND_CHOICES} [options]", file=err)
            if self._audit_logger:
                self._audit_logger.log_command_rejected(None)
            return self._exit_code(success=False)

        expenses = self._storage.load()
        options = parse_arguments(argv)

        result = self.dispatch(command, expenses, options)
        self.render(result, out, err)
        if not result.mutated:
            return self._exit_code(success=result.success)

        try:
            self._storage.save(expenses)
        except StorageError as e:
            print(f"Error: could not save expenses: {e}", file=err)
            return self._exit_code(success=False)

        return self._exit_code(success=result.success)

    def dispatch(
        self,
        command: str,
        expenses: ExpenseList,
        options: Mapping[str, str],
    ) -> CommandResult:
        """
        Route a command name to its handler.

        An unrecognized name yields a failed result with
        ErrorKind.UNKNOWN_COMMAND and the handler is not called.
        """
        handler = self._handlers.get(command)
        if handler is None:
            if self._audit_logger:
                self._audit_logger.log_command_rejected(command)
            return CommandResult.failure(
                command,
                ErrorKind.UNKNOWN_COMMAND,
                f"Provide correct command: {COMMAND_CHOICES}",
            )
        return handler(expenses, options)

    @staticmethod
    def render(result: CommandResult, out: TextIO, err: TextIO) -> None:
        """Write a result to the output and error streams."""
        for line in result.output:
            print(line, file=out)
        for line in result.notices:
            print(line, file=err)
        if result.error_message:
            print(result.error_message, file=err)

    def _exit_code(self, success: bool) -> int:
        if success or not self._strict_exit_codes:
            return EXIT_OK
        return EXIT_ERROR


def create_app_components(
    settings: Optional[TrackerSettings] = None,
) -> ExpenseTrackerApp:
    """
    Factory function to create an app wired from settings.

    Returns:
        An ExpenseTrackerApp using the JSON file named by settings.data_file
    """
    settings = settings or get_settings()
    configure_logging(settings)
    audit_logger = AuditLogger()

    storage = JsonFileExpenseStorage(
        settings.data_file,
        indent=settings.json_indent,
        audit_logger=audit_logger,
    )
    handlers = CommandHandlers(
        currency_unit=settings.currency_unit,
        audit_logger=audit_logger,
    )
    return ExpenseTrackerApp(
        storage=storage,
        handlers=handlers,
        audit_logger=audit_logger,
        strict_exit_codes=settings.strict_exit_codes,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        argv: Full argument vector including the program name
              (None = use sys.argv)

    Configuration problems are reported on stderr and exit with status 1
    whatever strict_exit_codes says, since no command has run yet.
    """
    try:
        app = create_app_components()
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "settings"
            for error in e.errors()
        )
        print(f"Error: invalid configuration: {fields}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: could not open log file: {e}", file=sys.stderr)
        return EXIT_ERROR
    return app.run(list(argv) if argv is not None else sys.argv)
