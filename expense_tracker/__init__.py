"""
Expense Tracker - Source Package

A small command-line expense tracker that keeps every expense in a
single JSON file.

DESIGN PRINCIPLES:
1. One load, one command, one save
2. Errors are reported where they are detected, never crash the process
3. No silent corrections of stored data
4. Every command is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
