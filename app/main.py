"""
Command-line entry script for Expense Tracker

Usage:
    python app/main.py add --description "Coffee" --amount 3.5
    python app/main.py list
    python app/main.py summary
    python app/main.py delete --id 1

The installed `expense-tracker` console script runs the same function.
Where the store lives and how output looks is configured through
EXPENSES_* environment variables (see expense_tracker/config/settings.py).
"""

import sys

from expense_tracker.orchestrator import main


if __name__ == "__main__":
    sys.exit(main())
