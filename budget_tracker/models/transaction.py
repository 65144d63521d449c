"""
Core Data Models for Budget Tracker

These models define the records kept by the ledger and the values it
hands back to its callers:
1. Transaction records (income and expense) with native Decimal amounts
2. Notices (confirmations and warnings shown to the user)
3. The monthly report summary

A transaction is a tagged variant: the `kind` field tells Income and
Expense apart, so a list of records can be validated and filtered
without parsing their display text.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_amount(amount: Decimal, currency: str = "Rs") -> str:
    """Render an amount the way every ledger view prints it."""
    return f"{currency} {amount:.2f}"


# =============================================================================
# ENUMS
# =============================================================================

class NoticeLevel(str, Enum):
    """How a notice should be presented to the user."""
    INFO = "info"
    WARNING = "warning"


# =============================================================================
# TRANSACTION RECORDS
# =============================================================================

class TransactionBase(BaseModel):
    """
    Fields shared by every transaction record.

    Records are immutable once appended to the ledger.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    recorded_at: datetime = Field(
        default_factory=_utcnow,
        description="When the transaction was recorded (UTC)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Transaction amount, never negative"
    )


class Income(TransactionBase):
    """Money received. Increases the balance."""

    kind: Literal["income"] = "income"

    def describe(self, currency: str = "Rs") -> str:
        return f"Income: {format_amount(self.amount, currency)}"


class Expense(TransactionBase):
    """
    Money spent. Decreases the balance and counts towards the budget goal.

    The category is a free-form label chosen by the user.
    """

    kind: Literal["expense"] = "expense"
    category: str = Field(
        ...,
        description="Expense category (e.g. Food, Transport)"
    )

    def describe(self, currency: str = "Rs") -> str:
        return f"Expense ({self.category}): {format_amount(self.amount, currency)}"


Transaction = Annotated[Union[Income, Expense], Field(discriminator="kind")]


# =============================================================================
# NOTICES AND REPORTS
# =============================================================================

class Notice(BaseModel):
    """
    A message for the user that is not an error.

    Produced when a budget goal is set and when expenses exceed it.
    """
    model_config = ConfigDict(frozen=True)

    level: NoticeLevel = NoticeLevel.INFO
    message: str

    @property
    def is_warning(self) -> bool:
        return self.level == NoticeLevel.WARNING


class MonthlyReport(BaseModel):
    """
    Summary of the ledger at the moment it was generated.

    total_income is reconstructed as current_balance + total_expenses
    by the ledger; it is never accumulated on its own.
    """

    generated_at: datetime = Field(default_factory=_utcnow)
    total_income: Decimal
    total_expenses: Decimal = Field(..., ge=0)
    current_balance: Decimal
    budget_goal: Decimal = Field(default=Decimal("0"), ge=0)
    transaction_count: int = Field(default=0, ge=0)

    @property
    def budget_exceeded(self) -> bool:
        """True when expenses are strictly above the goal."""
        return self.total_expenses > self.budget_goal

    def to_lines(self, currency: str = "Rs") -> list[str]:
        """
        Render the report as plain text lines.

        The goal line only appears once a goal has been set.
        """
        lines = [
            "------ Monthly Report ------",
            f"Total Income: {format_amount(self.total_income, currency)}",
            f"Total Expenses: {format_amount(self.total_expenses, currency)}",
            f"Current Balance: {format_amount(self.current_balance, currency)}",
        ]
        if self.budget_goal > 0:
            lines.append(f"Budget Goal: {format_amount(self.budget_goal, currency)}")
            if self.budget_exceeded:
                lines.append("Status: over budget")
        lines.append("-----------------------------")
        return lines

    def render(self, currency: str = "Rs") -> str:
        return "\n".join(self.to_lines(currency))
