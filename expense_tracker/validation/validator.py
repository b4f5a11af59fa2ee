"""
Option Validation

Command options arrive as raw strings. This module turns them into
typed values or raises an OptionError carrying the ErrorKind and the
message shown to the user.

IMPORTANT: Validation NEVER silently fixes input. "3,50" is not read as
3.5 and "12abc" is not read as 12; both are reported.
"""

import math
from typing import Mapping

from expense_tracker.models.expense import ErrorKind


class OptionError(Exception):
    """Base exception for rejected command options."""

    kind: ErrorKind = ErrorKind.MISSING_OPTION

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingOptionError(OptionError):
    """A required option was not given, or was given without a value."""
    kind = ErrorKind.MISSING_OPTION


class InvalidAmountError(OptionError):
    """--amount is not a finite number."""
    kind = ErrorKind.INVALID_AMOUNT


class InvalidIdError(OptionError):
    """--id is not an integer."""
    kind = ErrorKind.INVALID_ID


def require_options(
    options: Mapping[str, str],
    *names: str,
    message: str,
) -> None:
    """
    Raise MissingOptionError with `message` unless every name is present.
    """
    if any(name not in options for name in names):
        raise MissingOptionError(message)


def parse_amount(raw: str) -> float:
    """
    Parse an amount.

    Raises:
        InvalidAmountError: not a number, or NaN/infinity (these cannot be
                            written to the store as standard JSON)
    """
    try:
        amount = float(raw)
    except ValueError:
        raise InvalidAmountError(f"Invalid amount: '{raw}' is not a number")
    if not math.isfinite(amount):
        raise InvalidAmountError(f"Invalid amount: '{raw}' is not a number")
    return amount


def parse_expense_id(raw: str) -> int:
    """
    Parse an expense id.

    Raises:
        InvalidIdError: not an integer
    """
    try:
        return int(raw)
    except ValueError:
        raise InvalidIdError(f"Invalid ID: '{raw}' is not an integer")
