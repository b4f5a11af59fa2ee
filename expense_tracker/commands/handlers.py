"""
Command Handlers

DESIGN DECISION: Handlers never print and never save.
Each one receives the in-memory ExpenseList (the only state there is) and
the parsed options, mutates the list if the command calls for it, and
returns a CommandResult. Printing and saving are the dispatcher's job.

Every OptionError is caught here, at the handler that detected it, and
turned into a failed result. Nothing propagates past a handler.
"""

from datetime import date
from typing import Callable, Mapping, Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.cli.arguments import OPTION_WITHOUT_VALUE
from expense_tracker.models.expense import (
    CommandResult,
    ErrorKind,
    ExpenseList,
    format_amount,
)
from expense_tracker.validation import (
    MissingOptionError,
    OptionError,
    parse_amount,
    parse_expense_id,
    require_options,
)


COMMAND_NAMES = ("add", "list", "summary", "delete")

LIST_HEADER = "ID  Date        Description  Amount"
LIST_RULE = "-" * 35

Handler = Callable[[ExpenseList, Mapping[str, str]], CommandResult]


class CommandHandlers:
    """
    The four commands of the tracker.

    Options a handler does not know about are ignored.
    """

    def __init__(
        self,
        currency_unit: str = "kr",
        today: Callable[[], date] = date.today,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            currency_unit: Suffix printed after amounts
            today: Clock used to date new expenses
            audit_logger: Optional audit trail
        """
        self._unit = currency_unit
        self._today = today
        self._audit_logger = audit_logger

    def get(self, command: Optional[str]) -> Optional[Handler]:
        """Handler for a command name, or None if it is not a command."""
        routes: dict[str, Handler] = {
            "add": self.add,
            "list": self.list_expenses,
            "summary": self.summary,
            "delete": self.delete,
        }
        if command is None:
            return None
        return routes.get(command)

    # ------------------------------------------------------------------ #
    # add
    # ------------------------------------------------------------------ #
    def add(self, expenses: ExpenseList, options: Mapping[str, str]) -> CommandResult:
        """
        Add an expense dated today.

        Needs --description and --amount.
        """
        try:
            require_options(
                options,
                "description",
                "amount",
                message="Need --description and --amount",
            )
            amount = parse_amount(options["amount"])
        except OptionError as e:
            return self._rejected("add", e)

        expense = expenses.add(
            description=options["description"],
            amount=amount,
            on=self._today(),
        )
        if self._audit_logger:
            self._audit_logger.log_expense_added(expense)

        return CommandResult(
            command="add",
            mutated=True,
            output=[f"Expense added successfully (ID: {expense.id})"],
            expense_id=expense.id,
        )

    # ------------------------------------------------------------------ #
    # list
    # ------------------------------------------------------------------ #
    def list_expenses(
        self,
        expenses: ExpenseList,
        options: Mapping[str, str],
    ) -> CommandResult:
        """Print every expense in store order under a fixed header."""
        lines = [LIST_HEADER, LIST_RULE]
        for expense in expenses:
            lines.append(
                f"{expense.id}   {expense.date}  {expense.description}     "
                f"{format_amount(expense.amount, self._unit)}"
            )
        if self._audit_logger:
            self._audit_logger.log_expenses_listed(len(expenses))
        return CommandResult(command="list", output=lines)

    # ------------------------------------------------------------------ #
    # summary
    # ------------------------------------------------------------------ #
    def summary(self, expenses: ExpenseList, options: Mapping[str, str]) -> CommandResult:
        """
        Print the total of all amounts.

        --month is accepted but filtering by month is not implemented:
        the total stays 0 and a note goes to stderr.
        """
        notices = []
        total = 0.0
        if "month" in options:
            notices.append("Note: --month filtering is not implemented")
            if self._audit_logger:
                self._audit_logger.log_month_filter_unsupported(options["month"])
        else:
            total = expenses.total()

        if self._audit_logger:
            self._audit_logger.log_summary_computed(total)
        return CommandResult(
            command="summary",
            output=[f"Total expenses: {format_amount(total, self._unit)}"],
            notices=notices,
            total=total,
        )

    # ------------------------------------------------------------------ #
    # delete
    # ------------------------------------------------------------------ #
    def delete(self, expenses: ExpenseList, options: Mapping[str, str]) -> CommandResult:
        """
        Remove the expense with --id.

        Only the first match is removed; ids are unique.
        """
        try:
            require_options(options, "id", message="Need --id")
            if options["id"] == OPTION_WITHOUT_VALUE:
                raise MissingOptionError("Provide correct ID")
            expense_id = parse_expense_id(options["id"])
        except OptionError as e:
            return self._rejected("delete", e)

        if expenses.remove(expense_id) is None:
            if self._audit_logger:
                self._audit_logger.log_expense_not_found(expense_id)
            return CommandResult.failure(
                "delete",
                ErrorKind.NOT_FOUND,
                f"No expense found with ID {expense_id}",
                expense_id=expense_id,
            )

        if self._audit_logger:
            self._audit_logger.log_expense_deleted(expense_id)
        return CommandResult(
            command="delete",
            mutated=True,
            output=[f"Expense deleted successfully (ID: {expense_id})"],
            expense_id=expense_id,
        )

    def _rejected(self, command: str, error: OptionError) -> CommandResult:
        if self._audit_logger:
            self._audit_logger.log_option_rejected(
                command=command,
                error_code=error.kind.value,
                error_message=error.message,
            )
        return CommandResult.failure(command, error.kind, error.message)
