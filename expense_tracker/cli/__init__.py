"""Command-line parsing package."""

from expense_tracker.cli.arguments import (
    OPTION_WITHOUT_VALUE,
    parse_arguments,
    parse_command,
)

__all__ = ["OPTION_WITHOUT_VALUE", "parse_arguments", "parse_command"]
