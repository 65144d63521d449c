"""
Budget Ledger

The ledger is the single owner of the user's financial state for one
session:
1. Running balance
2. Monthly budget goal
3. Append-only transaction history

Front ends (the text menu, the Streamlit page) call its operations with
already-parsed arguments. The ledger validates every amount itself:
callers are not trusted to pre-filter negative values.

Notices (goal confirmations, budget warnings) are returned to the caller
and also passed to the optional `on_notice` callback, so an interactive
front end can print them as they happen.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from budget_tracker.audit import AuditLogger
from budget_tracker.models.audit import AuditEventBuilder
from budget_tracker.config import LedgerSettings
from budget_tracker.models.transaction import (
    Expense,
    Income,
    MonthlyReport,
    Notice,
    NoticeLevel,
    Transaction,
    format_amount,
)


NO_TRANSACTIONS_NOTICE = "No transactions recorded yet."
BUDGET_EXCEEDED_WARNING = "Warning: You have exceeded your budget goal!"

AmountLike = Union[Decimal, int, float, str]


class LedgerError(Exception):
    """Base exception for ledger errors."""
    pass


class InvalidAmountError(LedgerError, ValueError):
    """An income, expense or goal amount was negative or not a number."""
    pass


class HistoryCapacityError(LedgerError):
    """The transaction history of a bounded ledger is full."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(
            f"Transaction history is full ({capacity} transactions). "
            "The entry was not recorded."
        )


def parse_amount(value: AmountLike, label: str = "Amount") -> Decimal:
    """
    Convert a caller-supplied amount to a non-negative Decimal.

    Floats go through str() so 0.1 stays 0.1 instead of its binary
    expansion. Booleans, NaN and infinities are rejected. Negative zero
    is returned as zero.

    Raises:
        InvalidAmountError: If the value is negative or not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"{label} must be a number.")

    if isinstance(value, float):
        value = str(value)

    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"{label} must be a number.") from None

    if not amount.is_finite():
        raise InvalidAmountError(f"{label} must be a number.")

    if amount < 0:
        raise InvalidAmountError(f"{label} cannot be negative.")

    # -0 and -0.0 compare equal to zero but keep their sign when printed.
    if amount == 0:
        amount = abs(amount)

    return amount


class Ledger:
    """
    In-memory personal budget ledger.

    Invariants:
    - every recorded amount is >= 0
    - balance == total income - total expenses
    - budget_goal >= 0
    - total expenses are recomputed from the history on every call

    Not thread-safe; one ledger belongs to one interactive session.
    """

    def __init__(
        self,
        history_capacity: Optional[int] = None,
        currency: str = "Rs",
        audit_logger: Optional[AuditLogger] = None,
        on_notice: Optional[Callable[[Notice], None]] = None,
    ):
        """
        Create an empty ledger.

        Args:
            history_capacity: Maximum number of transactions. None means unbounded.
            currency: Label printed before amounts in descriptions and reports.
            audit_logger: Audit trail for this session. A fresh one is created if omitted.
            on_notice: Called with every notice as it is emitted.
        """
        if history_capacity is not None and history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")

        self._balance = Decimal("0")
        self._budget_goal = Decimal("0")
        self._transactions: list[Transaction] = []

        self._capacity = history_capacity
        self.currency = currency
        self._audit = audit_logger or AuditLogger()
        self._on_notice = on_notice

    @classmethod
    def from_settings(
        cls,
        settings: LedgerSettings,
        on_notice: Optional[Callable[[Notice], None]] = None,
    ) -> "Ledger":
        """Build a ledger configured from LedgerSettings."""
        return cls(
            history_capacity=settings.history_capacity,
            currency=settings.currency_label,
            on_notice=on_notice,
        )

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def budget_goal(self) -> Decimal:
        return self._budget_goal

    @property
    def history_capacity(self) -> Optional[int]:
        return self._capacity

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of the history in insertion order."""
        return tuple(self._transactions)

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_income(self, amount: AmountLike) -> Income:
        """
        Record income and increase the balance.

        Raises:
            InvalidAmountError: If amount is negative or not a number
            HistoryCapacityError: If the history is full
        """
        value = self.validate_amount(amount, "add_income", "Income")
        self._ensure_capacity("add_income")

        record = Income(amount=value)
        event = AuditEventBuilder.income_added(
            transaction_id=record.id,
            amount=value,
            balance=self._balance + value,
            correlation_id=self._audit.correlation_id,
        )

        self._balance += value
        self._transactions.append(record)
        self._audit.log(event)
        return record

    def add_expense(self, amount: AmountLike, category: str) -> Expense:
        """
        Record an expense, decrease the balance and check the budget goal.

        A warning notice is emitted when total expenses are above the goal.

        Raises:
            InvalidAmountError: If amount is negative or not a number
            HistoryCapacityError: If the history is full
        """
        value = self.validate_amount(amount, "add_expense", "Expense")
        self._ensure_capacity("add_expense")

        record = Expense(amount=value, category=category)
        event = AuditEventBuilder.expense_added(
            transaction_id=record.id,
            amount=value,
            category=category,
            balance=self._balance - value,
            correlation_id=self._audit.correlation_id,
        )

        self._balance -= value
        self._transactions.append(record)
        self._audit.log(event)

        self.check_budget_warning()
        return record

    def set_budget_goal(self, goal: AmountLike) -> Notice:
        """
        Replace the monthly budget goal.

        Returns the confirmation notice (also sent to on_notice).

        Raises:
            InvalidAmountError: If goal is negative or not a number
        """
        value = self.validate_amount(goal, "set_budget_goal", "Budget goal")

        event = AuditEventBuilder.budget_goal_set(
            goal=value,
            previous_goal=self._budget_goal,
            correlation_id=self._audit.correlation_id,
        )

        self._budget_goal = value
        self._audit.log(event)

        return self._emit(Notice(
            level=NoticeLevel.INFO,
            message=f"Monthly Budget Goal set to: {format_amount(value, self.currency)}",
        ))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_balance(self) -> Decimal:
        return self._balance

    def get_total_expenses(self) -> Decimal:
        """Sum of all expense amounts, recomputed from the history."""
        return sum(
            (t.amount for t in self._transactions if isinstance(t, Expense)),
            Decimal("0"),
        )

    def check_budget_warning(self) -> Optional[Notice]:
        """
        Emit a warning if total expenses are strictly above the goal.

        Runs after every expense. There is no latched flag: every
        expense recorded while above the goal warns again.
        """
        total = self.get_total_expenses()
        if total <= self._budget_goal:
            return None

        self._audit.log_budget_exceeded(total_expenses=total, goal=self._budget_goal)
        return self._emit(Notice(
            level=NoticeLevel.WARNING,
            message=BUDGET_EXCEEDED_WARNING,
        ))

    def view_transaction_history(self) -> list[str]:
        """
        Descriptions of every transaction in insertion order.

        An empty ledger yields only the "no transactions" notice.
        """
        if not self._transactions:
            return [NO_TRANSACTIONS_NOTICE]
        return [t.describe(self.currency) for t in self._transactions]

    def generate_monthly_report(self) -> MonthlyReport:
        """
        Summarize the ledger.

        Total income is derived as balance + total expenses rather than
        tracked separately, so it can never drift from the balance.
        """
        total_expenses = self.get_total_expenses()
        total_income = self._balance + total_expenses

        report = MonthlyReport(
            total_income=total_income,
            total_expenses=total_expenses,
            current_balance=self._balance,
            budget_goal=self._budget_goal,
            transaction_count=len(self._transactions),
        )

        self._audit.log_report_generated(
            total_income=total_income,
            total_expenses=total_expenses,
            balance=self._balance,
        )
        return report

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def validate_amount(self, value: Any, operation: str, label: str) -> Decimal:
        """
        Parse an amount for `operation`, auditing it if it is rejected.

        Front ends call this to refuse an amount before prompting for the
        rest of an entry. It does not change the ledger.

        Raises:
            InvalidAmountError: If value is negative or not a number
        """
        try:
            return parse_amount(value, label)
        except InvalidAmountError as e:
            self._audit.log_invalid_amount(
                operation=operation,
                amount=value,
                error_message=str(e),
            )
            raise

    def _ensure_capacity(self, operation: str) -> None:
        if self._capacity is not None and len(self._transactions) >= self._capacity:
            self._audit.log_capacity_reached(operation=operation, capacity=self._capacity)
            raise HistoryCapacityError(self._capacity)

    def _emit(self, notice: Notice) -> Notice:
        if self._on_notice is not None:
            self._on_notice(notice)
        return notice
