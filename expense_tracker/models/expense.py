"""
Core Data Models for Expense Tracker

These models define the schemas for everything that is stored or
returned by a command. They are designed to:
1. Validate the store file when it is loaded
2. Serialize back to the exact on-disk layout (id, date, description, amount)
3. Carry command outcomes from handlers to the dispatcher

DESIGN DECISION: The whole store is a pydantic RootModel over a list.
The JSON file is a bare array, so the model mirrors it one-to-one and
`model_validate` / `model_dump` are the codec.
"""

from datetime import date as calendar_date
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def today_iso() -> str:
    """Current local date as YYYY-MM-DD."""
    return calendar_date.today().isoformat()


def format_amount(amount: float, unit: str = "kr") -> str:
    """
    Render an amount for display.

    Up to six decimals with trailing zeros dropped, so stored precision
    is shown: 15.5 -> "15.5kr", 100.0 -> "100kr", 3.14159 -> "3.14159kr".
    Float noise beyond six decimals is hidden (0.1 + 0.2 -> "0.3kr").
    """
    text = f"{amount:.6f}".rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{text}{unit}"


# =============================================================================
# ENUMS
# =============================================================================

class ErrorKind(str, Enum):
    """
    Every kind of error a command can report.

    Errors are plain text on stderr; the kind exists for the audit log,
    the exit code and tests.
    """
    MISSING_OPTION = "missing_option"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"
    UNKNOWN_COMMAND = "unknown_command"
    USAGE = "usage"
    STORAGE_FAILURE = "storage_failure"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    One recorded expense.

    The date is set once at creation and never changed.
    Field order matches the key order written to the store file.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        gt=0,
        description="Unique identifier within the store"
    )
    date: str = Field(
        default_factory=today_iso,
        pattern=DATE_PATTERN,
        description="Creation date (YYYY-MM-DD, local time)"
    )
    description: str = Field(
        ...,
        description="Free-form description"
    )
    amount: float = Field(
        ...,
        description="Amount in the configured currency unit"
    )


class ExpenseList(RootModel[list[Expense]]):
    """
    The full, ordered expense store.

    Order is the order in which expenses were added. Deleting an expense
    removes it in place; remaining ids are never renumbered, so ids are
    unique but may have gaps.
    """
    root: list[Expense] = Field(default_factory=list)

    def __iter__(self) -> Iterator[Expense]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Expense:
        return self.root[index]

    @property
    def ids(self) -> list[int]:
        return [expense.id for expense in self.root]

    def next_id(self) -> int:
        """
        Id for the next expense.

        Uses the maximum existing id rather than the last element so the
        result stays unique even if the list is not in id order.
        """
        if not self.root:
            return 1
        return max(self.ids) + 1

    def add(
        self,
        description: str,
        amount: float,
        on: Optional[calendar_date] = None,
    ) -> Expense:
        """Create a new expense with the next id and append it."""
        expense = Expense(
            id=self.next_id(),
            date=(on or calendar_date.today()).isoformat(),
            description=description,
            amount=amount,
        )
        self.root.append(expense)
        return expense

    def remove(self, expense_id: int) -> Optional[Expense]:
        """
        Remove the first expense with this id.

        Returns the removed expense, or None when nothing matched
        (the list is left untouched in that case).
        """
        for index, expense in enumerate(self.root):
            if expense.id == expense_id:
                return self.root.pop(index)
        return None

    def total(self) -> float:
        """Sum of all amounts."""
        return sum((expense.amount for expense in self.root), 0.0)


# =============================================================================
# COMMAND OUTCOME
# =============================================================================

class CommandResult(BaseModel):
    """
    Outcome of running one command against the store.

    Handlers never print. The dispatcher renders `output` to stdout and
    `notices` plus `error_message` to stderr.
    """

    command: str = Field(
        ...,
        description="Command name as typed by the user"
    )
    success: bool = Field(
        default=True,
        description="False when an error was reported"
    )
    mutated: bool = Field(
        default=False,
        description="True when the store was changed"
    )
    output: list[str] = Field(
        default_factory=list,
        description="Lines for stdout"
    )
    notices: list[str] = Field(
        default_factory=list,
        description="Non-fatal lines for stderr"
    )
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    # What the command touched
    expense_id: Optional[int] = None
    total: Optional[float] = None

    @classmethod
    def failure(
        cls,
        command: str,
        kind: ErrorKind,
        message: str,
        expense_id: Optional[int] = None,
    ) -> "CommandResult":
        return cls(
            command=command,
            success=False,
            error_kind=kind,
            error_message=message,
            expense_id=expense_id,
        )
