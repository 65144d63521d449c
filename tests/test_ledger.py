"""Tests for the budget ledger."""

import pytest
from decimal import Decimal

from budget_tracker.audit import AuditLogger
from budget_tracker.config import LedgerSettings
from budget_tracker.ledger import (
    BUDGET_EXCEEDED_WARNING,
    NO_TRANSACTIONS_NOTICE,
    HistoryCapacityError,
    InvalidAmountError,
    Ledger,
    LedgerError,
    parse_amount,
)
from budget_tracker.models import AuditEventType, Expense, Income, NoticeLevel


@pytest.fixture
def notices():
    return []


@pytest.fixture
def ledger(notices):
    return Ledger(on_notice=notices.append)


class TestParseAmount:
    """Tests for amount conversion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, Decimal("0")),
            (1000, Decimal("1000")),
            (0.1, Decimal("0.1")),
            ("12.50", Decimal("12.50")),
            (Decimal("3.3"), Decimal("3.3")),
        ],
    )
    def test_accepts_numbers(self, value, expected):
        """Test accepted amount types."""
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", [-1, -0.01, "-5", Decimal("-100")])
    def test_rejects_negative(self, value):
        """Test that negative amounts raise InvalidAmountError."""
        with pytest.raises(InvalidAmountError, match="cannot be negative"):
            parse_amount(value)

    @pytest.mark.parametrize("value", ["abc", "", None, True, "NaN", float("inf")])
    def test_rejects_non_numbers(self, value):
        """Test that non-numeric input raises InvalidAmountError."""
        with pytest.raises(InvalidAmountError, match="must be a number"):
            parse_amount(value)

    @pytest.mark.parametrize("value", [-0.0, "-0", Decimal("-0.00")])
    def test_negative_zero_is_plain_zero(self, value):
        """Test that negative zero loses its sign."""
        amount = parse_amount(value)
        assert amount == 0
        assert not amount.is_signed()
        assert Income(amount=amount).describe() == "Income: Rs 0.00"

    def test_label_in_message(self):
        """Test that the label names the rejected field."""
        with pytest.raises(InvalidAmountError, match="^Income cannot be negative.$"):
            parse_amount(-1, "Income")

    def test_invalid_amount_is_value_error(self):
        """Test the exception hierarchy."""
        assert issubclass(InvalidAmountError, ValueError)
        assert issubclass(InvalidAmountError, LedgerError)
        assert issubclass(HistoryCapacityError, LedgerError)


class TestNewLedger:
    """Tests for the initial ledger state."""

    def test_starts_empty(self, ledger):
        """Test zeroed fields and empty history."""
        assert ledger.get_balance() == Decimal("0")
        assert ledger.budget_goal == Decimal("0")
        assert ledger.get_total_expenses() == Decimal("0")
        assert ledger.transactions == ()

    def test_empty_history_is_only_the_notice(self, ledger):
        """Test that an empty ledger yields exactly the no-transactions notice."""
        assert ledger.view_transaction_history() == [NO_TRANSACTIONS_NOTICE]

    def test_rejects_bad_capacity(self):
        """Test that a capacity below one is refused."""
        with pytest.raises(ValueError):
            Ledger(history_capacity=0)

    def test_from_settings(self):
        """Test building a ledger from settings."""
        settings = LedgerSettings(currency_label="USD", history_capacity=5)
        ledger = Ledger.from_settings(settings)
        assert ledger.currency == "USD"
        assert ledger.history_capacity == 5


class TestIncome:
    """Tests for add_income."""

    @pytest.mark.parametrize("amount", [0, 1, Decimal("999.99"), 0.25])
    def test_increases_balance_by_amount(self, ledger, amount):
        """Test that income raises the balance by exactly the amount."""
        before = ledger.get_balance()
        ledger.add_income(amount)
        assert ledger.get_balance() - before == parse_amount(amount)

    def test_appends_income_record(self, ledger):
        """Test that an Income record is appended."""
        record = ledger.add_income(1000)
        assert isinstance(record, Income)
        assert ledger.transactions == (record,)
        assert ledger.view_transaction_history() == ["Income: Rs 1000.00"]

    def test_negative_leaves_state_unchanged(self, ledger):
        """Test that a rejected income changes nothing."""
        ledger.add_income(50)
        with pytest.raises(InvalidAmountError, match="Income cannot be negative."):
            ledger.add_income(-10)
        assert ledger.get_balance() == Decimal("50")
        assert len(ledger.transactions) == 1

    def test_income_does_not_check_budget(self, ledger, notices):
        """Test that income never emits notices."""
        ledger.add_income(100)
        assert notices == []


class TestExpense:
    """Tests for add_expense."""

    def test_decreases_balance_and_appends(self, ledger):
        """Test that an expense lowers the balance and is listed in history."""
        ledger.add_income(300)
        ledger.set_budget_goal(1000)
        record = ledger.add_expense(120, "Transport")

        assert isinstance(record, Expense)
        assert record.category == "Transport"
        assert ledger.get_balance() == Decimal("180")
        assert ledger.view_transaction_history()[-1] == "Expense (Transport): Rs 120.00"

    def test_negative_leaves_state_unchanged(self, ledger):
        """Test that a rejected expense changes nothing."""
        with pytest.raises(InvalidAmountError, match="Expense cannot be negative."):
            ledger.add_expense(-5, "Food")
        assert ledger.get_balance() == Decimal("0")
        assert ledger.transactions == ()

    def test_total_expenses_ignores_income(self, ledger):
        """Test that totals sum expenses only, whatever the interleaving."""
        ledger.add_expense(10, "A")
        ledger.add_income(500)
        ledger.add_expense(Decimal("20.5"), "B")
        ledger.add_income(1)
        ledger.add_expense("0.5", "C")
        assert ledger.get_total_expenses() == Decimal("31.0")

    def test_zero_expense_is_recorded(self, ledger):
        """Test that zero is a valid amount."""
        ledger.set_budget_goal(10)
        ledger.add_expense(0, "Nothing")
        assert len(ledger.transactions) == 1
        assert ledger.get_balance() == Decimal("0")

    def test_balance_can_go_negative(self, ledger):
        """Test that spending more than earned is allowed."""
        ledger.add_expense(40, "Food")
        assert ledger.get_balance() == Decimal("-40")


class TestBudgetGoal:
    """Tests for set_budget_goal and the budget warning."""

    def test_set_goal_returns_and_emits_confirmation(self, ledger, notices):
        """Test the confirmation notice."""
        notice = ledger.set_budget_goal(500)
        assert notice.level == NoticeLevel.INFO
        assert notice.message == "Monthly Budget Goal set to: Rs 500.00"
        assert notices == [notice]
        assert ledger.budget_goal == Decimal("500")

    def test_negative_goal_is_rejected(self, ledger):
        """Test that a negative goal keeps the old goal."""
        ledger.set_budget_goal(200)
        with pytest.raises(InvalidAmountError, match="Budget goal cannot be negative."):
            ledger.set_budget_goal(-1)
        assert ledger.budget_goal == Decimal("200")

    def test_warning_when_total_exceeds_goal(self, ledger, notices):
        """Test that the expense pushing totals over the goal warns."""
        ledger.set_budget_goal(500)
        notices.clear()

        ledger.add_expense(300, "Food")
        assert notices == []

        ledger.add_expense(300, "Rent")
        assert [n.message for n in notices] == [BUDGET_EXCEEDED_WARNING]
        assert notices[0].level == NoticeLevel.WARNING

    def test_warning_repeats_while_above_goal(self, ledger, notices):
        """Test that every expense above the goal warns again."""
        ledger.set_budget_goal(100)
        notices.clear()

        ledger.add_expense(150, "A")
        ledger.add_expense(1, "B")
        ledger.add_expense(0, "C")
        assert len(notices) == 3
        assert all(n.is_warning for n in notices)

    def test_no_warning_at_exact_goal(self, ledger, notices):
        """Test that the comparison is strict."""
        ledger.set_budget_goal(100)
        notices.clear()
        ledger.add_expense(100, "Rent")
        assert notices == []

    def test_default_goal_warns_on_any_expense(self, ledger, notices):
        """Test that a zero goal is exceeded by any positive spend."""
        ledger.add_expense(1, "Snack")
        assert len(notices) == 1

    def test_check_budget_warning_directly(self, ledger):
        """Test the warning check return value."""
        assert ledger.check_budget_warning() is None
        ledger.add_expense(10, "Food")
        notice = ledger.check_budget_warning()
        assert notice is not None
        assert notice.message == BUDGET_EXCEEDED_WARNING

    def test_raising_goal_stops_warnings(self, ledger, notices):
        """Test that the warning is not latched."""
        ledger.add_expense(100, "Food")
        ledger.set_budget_goal(1000)
        notices.clear()
        ledger.add_expense(100, "Food")
        assert notices == []


class TestQueries:
    """Tests for the read-only operations."""

    def test_reads_are_idempotent(self, ledger):
        """Test that repeated reads without mutation agree."""
        ledger.add_income(10)
        ledger.add_expense(3, "X")
        assert ledger.get_balance() == ledger.get_balance()
        assert ledger.view_transaction_history() == ledger.view_transaction_history()

    def test_history_in_insertion_order(self, ledger):
        """Test history ordering and text."""
        ledger.add_income(1000)
        ledger.add_expense(200, "Food")
        ledger.add_expense(900, "Rent")
        assert ledger.view_transaction_history() == [
            "Income: Rs 1000.00",
            "Expense (Food): Rs 200.00",
            "Expense (Rent): Rs 900.00",
        ]

    def test_custom_currency(self):
        """Test that the currency label is used in every view."""
        ledger = Ledger(currency="$")
        ledger.add_income(5)
        assert ledger.view_transaction_history() == ["Income: $ 5.00"]
        assert "Total Income: $ 5.00" in ledger.generate_monthly_report().to_lines("$")

    def test_transactions_snapshot_is_read_only(self, ledger):
        """Test that the snapshot cannot change the ledger."""
        ledger.add_income(1)
        snapshot = ledger.transactions
        assert isinstance(snapshot, tuple)
        ledger.add_income(2)
        assert len(snapshot) == 1


class TestMonthlyReport:
    """Tests for generate_monthly_report."""

    def test_reference_scenario(self, ledger, notices):
        """Test income 1000, expenses 200 + 900, goal 500."""
        ledger.add_income(1000)
        ledger.add_expense(200, "Food")
        ledger.add_expense(900, "Rent")
        ledger.set_budget_goal(500)

        assert ledger.get_balance() == Decimal("-100")
        assert ledger.get_total_expenses() == Decimal("1100")

        report = ledger.generate_monthly_report()
        assert report.total_income == Decimal("1000")
        assert report.total_expenses == Decimal("1100")
        assert report.current_balance == Decimal("-100")
        assert report.budget_goal == Decimal("500")
        assert report.transaction_count == 3
        assert report.budget_exceeded is True

    def test_income_is_derived_from_balance(self, ledger):
        """Test that total income equals balance plus expenses."""
        ledger.add_income(Decimal("0.1"))
        ledger.add_income(Decimal("0.2"))
        ledger.add_expense(Decimal("0.3"), "X")
        report = ledger.generate_monthly_report()
        assert report.total_income == report.current_balance + report.total_expenses
        assert report.total_income == Decimal("0.3")

    def test_empty_report(self, ledger):
        """Test report of an empty ledger."""
        report = ledger.generate_monthly_report()
        assert report.total_income == Decimal("0")
        assert report.total_expenses == Decimal("0")
        assert report.transaction_count == 0


class TestHistoryCapacity:
    """Tests for bounded ledgers."""

    def test_unbounded_by_default(self, ledger):
        """Test that no capacity means no limit."""
        for _ in range(250):
            ledger.add_income(1)
        assert len(ledger.transactions) == 250

    def test_overflow_raises_and_leaves_state(self):
        """Test that the entry past capacity is refused, not dropped silently."""
        ledger = Ledger(history_capacity=2)
        ledger.add_income(100)
        ledger.add_expense(30, "Food")

        with pytest.raises(HistoryCapacityError) as exc_info:
            ledger.add_expense(20, "Food")
        assert exc_info.value.capacity == 2

        with pytest.raises(HistoryCapacityError):
            ledger.add_income(5)

        assert ledger.get_balance() == Decimal("70")
        assert ledger.get_total_expenses() == Decimal("30")
        assert len(ledger.transactions) == 2

    def test_goal_still_settable_when_full(self):
        """Test that the goal is not part of the history."""
        ledger = Ledger(history_capacity=1)
        ledger.add_income(1)
        ledger.set_budget_goal(10)
        assert ledger.budget_goal == Decimal("10")

    def test_invalid_amount_checked_before_capacity(self):
        """Test that a negative amount on a full ledger is an amount error."""
        ledger = Ledger(history_capacity=1)
        ledger.add_income(1)
        with pytest.raises(InvalidAmountError):
            ledger.add_income(-1)


class TestLedgerAudit:
    """Tests for the audit trail the ledger produces."""

    def test_events_for_session(self):
        """Test event types and shared correlation ID."""
        audit = AuditLogger()
        ledger = Ledger(audit_logger=audit)

        ledger.add_income(1000)
        ledger.add_expense(200, "Food")
        ledger.set_budget_goal(100)
        ledger.add_expense(1, "Tea")
        ledger.generate_monthly_report()

        types = [e.event_type for e in audit.events]
        assert types == [
            AuditEventType.INCOME_ADDED,
            AuditEventType.EXPENSE_ADDED,
            AuditEventType.BUDGET_EXCEEDED,
            AuditEventType.BUDGET_GOAL_SET,
            AuditEventType.EXPENSE_ADDED,
            AuditEventType.BUDGET_EXCEEDED,
            AuditEventType.REPORT_GENERATED,
        ]
        assert {e.correlation_id for e in audit.events} == {audit.correlation_id}

    def test_transaction_events_reference_records(self, ledger):
        """Test that entity IDs point at the recorded transactions."""
        record = ledger.add_income(5)
        event = ledger.audit_logger.events[-1]
        assert event.entity_id == record.id
        assert event.details["balance"] == "5"

    def test_rejections_are_audited(self):
        """Test audit events for refused input."""
        ledger = Ledger(history_capacity=1)
        with pytest.raises(InvalidAmountError):
            ledger.add_expense(-3, "Food")
        ledger.add_income(1)
        with pytest.raises(HistoryCapacityError):
            ledger.add_income(1)

        events = ledger.audit_logger.events
        assert events[0].event_type == AuditEventType.INVALID_AMOUNT_REJECTED
        assert events[0].details == {"operation": "add_expense", "amount": "-3"}
        assert events[-1].event_type == AuditEventType.HISTORY_CAPACITY_REACHED

    def test_validate_amount_audits_rejection(self, ledger):
        """Test that a front end can refuse an amount and still leave a trail."""
        with pytest.raises(InvalidAmountError, match="^Expense cannot be negative.$"):
            ledger.validate_amount(-5, "add_expense", "Expense")

        events = ledger.audit_logger.events
        assert len(events) == 1
        assert events[0].event_type == AuditEventType.INVALID_AMOUNT_REJECTED
        assert events[0].details["operation"] == "add_expense"
        assert ledger.transactions == ()

    def test_validate_amount_returns_decimal(self, ledger):
        """Test that accepted amounts are parsed and not audited."""
        assert ledger.validate_amount("2.50", "add_income", "Income") == Decimal("2.50")
        assert ledger.audit_logger.events == ()

    def test_very_long_amounts_are_recorded(self, ledger, notices):
        """Test that amount size never breaks the audit trail."""
        huge = Decimal("1." + "1" * 600)

        ledger.set_budget_goal(huge)
        record = ledger.add_expense(huge, "Food" * 200)

        assert ledger.budget_goal == huge
        assert ledger.get_balance() == -ledger.get_total_expenses()
        assert ledger.transactions == (record,)
        assert [e.event_type for e in ledger.audit_logger.events] == [
            AuditEventType.BUDGET_GOAL_SET,
            AuditEventType.EXPENSE_ADDED,
        ]
        assert ledger.audit_logger.events[-1].details["amount"] == str(huge)
        assert notices[-1].level == NoticeLevel.INFO

    def test_descriptions_leave_out_amounts(self, ledger):
        """Test that amounts and categories live in details only."""
        ledger.add_income(12345)
        ledger.add_expense(678, "Groceries")
        descriptions = [e.description for e in ledger.audit_logger.events]
        assert descriptions[:2] == ["Income recorded", "Expense recorded"]
        assert not any("12345" in d or "Groceries" in d for d in descriptions)
