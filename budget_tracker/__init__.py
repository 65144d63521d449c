"""
Budget Tracker - Source Package

A personal budget ledger for a single user in a single session:
record income and expenses, keep a running balance, watch a monthly
budget goal and print a summary report.

DESIGN PRINCIPLES:
1. The ledger validates its own input
2. Amounts are Decimals, never re-parsed from display text
3. Every change is auditable
4. Nothing is persisted between sessions
"""

from budget_tracker.ledger import (
    HistoryCapacityError,
    InvalidAmountError,
    Ledger,
    LedgerError,
)

__version__ = "1.0.0"
__author__ = "Budget Tracker Team"

__all__ = [
    "HistoryCapacityError",
    "InvalidAmountError",
    "Ledger",
    "LedgerError",
]
