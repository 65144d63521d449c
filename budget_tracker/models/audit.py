"""
Audit Models for Budget Tracker

Every change to the ledger, and every rejected change, is recorded as an
audit event. This provides:
1. Traceability of how the balance got where it is
2. Debugging information when an entry is refused
3. A structured log line per operation

Audit events are append-only. They are kept in memory for the session
and written to the structured log; nothing is persisted.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Mutations
    INCOME_ADDED = "income_added"
    EXPENSE_ADDED = "expense_added"
    BUDGET_GOAL_SET = "budget_goal_set"

    # Budget monitoring
    BUDGET_EXCEEDED = "budget_exceeded"

    # Rejections
    INVALID_AMOUNT_REJECTED = "invalid_amount_rejected"
    HISTORY_CAPACITY_REACHED = "history_capacity_reached"

    # Reporting
    REPORT_GENERATED = "report_generated"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'budget_goal', 'report')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - all events of one ledger session share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.income_added(transaction_id, amount, balance, correlation_id)
        event = AuditEventBuilder.budget_exceeded(total, goal, correlation_id)

    Amounts and categories go into details as strings so Decimal precision
    survives JSON rendering. Descriptions stay fixed text so they fit the
    description length limit whatever the caller entered.
    """

    @staticmethod
    def income_added(
        transaction_id: UUID,
        amount: Decimal,
        balance: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Income recorded",
            details={
                "amount": str(amount),
                "balance": str(balance),
            },
        )

    @staticmethod
    def expense_added(
        transaction_id: UUID,
        amount: Decimal,
        category: str,
        balance: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Expense recorded",
            details={
                "amount": str(amount),
                "category": category,
                "balance": str(balance),
            },
        )

    @staticmethod
    def budget_goal_set(
        goal: Decimal,
        previous_goal: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_GOAL_SET,
            entity_type="budget_goal",
            correlation_id=correlation_id,
            description="Monthly budget goal updated",
            details={
                "goal": str(goal),
                "previous_goal": str(previous_goal),
            },
        )

    @staticmethod
    def budget_exceeded(
        total_expenses: Decimal,
        goal: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EXCEEDED,
            severity=AuditSeverity.WARNING,
            entity_type="budget_goal",
            correlation_id=correlation_id,
            description="Expenses exceed budget goal",
            details={
                "total_expenses": str(total_expenses),
                "goal": str(goal),
                "overspend": str(total_expenses - goal),
            },
        )

    @staticmethod
    def invalid_amount_rejected(
        operation: str,
        amount: Any,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_AMOUNT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Rejected {operation}: invalid amount",
            error_message=error_message,
            details={
                "operation": operation,
                "amount": str(amount),
            },
        )

    @staticmethod
    def history_capacity_reached(
        operation: str,
        capacity: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_CAPACITY_REACHED,
            severity=AuditSeverity.ERROR,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Rejected {operation}: transaction history is full",
            error_message=f"History capacity of {capacity} transactions reached",
            details={
                "operation": operation,
                "capacity": capacity,
            },
        )

    @staticmethod
    def report_generated(
        total_income: Decimal,
        total_expenses: Decimal,
        balance: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            entity_type="report",
            correlation_id=correlation_id,
            description="Monthly report generated",
            details={
                "total_income": str(total_income),
                "total_expenses": str(total_expenses),
                "balance": str(balance),
            },
        )
