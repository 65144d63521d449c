"""
Data Models Package

This package contains all Pydantic models used in the Budget Tracker.
Ledger records, notices, reports and audit events all conform to these schemas.
"""

from budget_tracker.models.transaction import (
    Expense,
    Income,
    MonthlyReport,
    Notice,
    NoticeLevel,
    Transaction,
    format_amount,
)
from budget_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Expense",
    "Income",
    "MonthlyReport",
    "Notice",
    "NoticeLevel",
    "Transaction",
    "format_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
