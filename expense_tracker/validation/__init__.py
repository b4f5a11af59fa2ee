"""Option validation package."""

from expense_tracker.validation.validator import (
    InvalidAmountError,
    InvalidIdError,
    MissingOptionError,
    OptionError,
    parse_amount,
    parse_expense_id,
    require_options,
)

__all__ = [
    "InvalidAmountError",
    "InvalidIdError",
    "MissingOptionError",
    "OptionError",
    "parse_amount",
    "parse_expense_id",
    "require_options",
]
