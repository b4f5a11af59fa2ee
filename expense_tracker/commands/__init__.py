"""Command handlers package."""

from expense_tracker.commands.handlers import (
    COMMAND_NAMES,
    CommandHandlers,
    LIST_HEADER,
    LIST_RULE,
)

__all__ = ["COMMAND_NAMES", "CommandHandlers", "LIST_HEADER", "LIST_RULE"]
