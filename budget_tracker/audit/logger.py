"""
Audit Logger

Every ledger mutation, rejected entry, budget warning and report is logged.
This provides:
1. Traceability of the running balance
2. Debugging capability when input is refused
3. A session history the front ends can show

The audit logger:
- Is synchronous, like the ledger it observes
- Keeps the session's events in memory (nothing is persisted)
- Stamps every event with the session's correlation ID
"""

import logging
import sys
from decimal import Decimal
from typing import IO, Any, Optional
from uuid import UUID, uuid4

import structlog

from budget_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(
    level: Optional[str] = None,
    json_logs: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Call once from an entry point (CLI, Streamlit page). Library code only
    calls structlog.get_logger().

    With no level the log records go to a NullHandler, so an interactive
    session only shows what the front end prints.

    Raises:
        ValueError: If level is not a stdlib level name
    """
    if level is None:
        logging.basicConfig(
            handlers=[logging.NullHandler()],
            level=logging.WARNING,
            force=True,
        )
    else:
        numeric = getattr(logging, str(level).upper(), None)
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        logging.basicConfig(
            format="%(message)s",
            stream=stream or sys.stderr,
            level=numeric,
            force=True,
        )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service for one ledger session.

    Logs events both to:
    1. Structured log (for debugging)
    2. In-memory event list (for the front ends and tests)
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.

        Args:
            correlation_id: ID shared by every event of this session.
                           A new one is created if omitted.
        """
        self.correlation_id = correlation_id or create_correlation_id()
        self._events: list[AuditEvent] = []
        self._logger = structlog.get_logger("budget_tracker.audit")

    @property
    def events(self) -> tuple[AuditEvent, ...]:
        return tuple(self._events)

    def log(self, event: AuditEvent) -> None:
        """Record an audit event and write it to the structured log."""
        self._events.append(event)

        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_budget_exceeded(self, total_expenses: Decimal, goal: Decimal) -> None:
        self.log(AuditEventBuilder.budget_exceeded(
            total_expenses=total_expenses,
            goal=goal,
            correlation_id=self.correlation_id,
        ))

    def log_invalid_amount(
        self,
        operation: str,
        amount: Any,
        error_message: str,
    ) -> None:
        """Log a rejected amount."""
        self.log(AuditEventBuilder.invalid_amount_rejected(
            operation=operation,
            amount=amount,
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))

    def log_capacity_reached(self, operation: str, capacity: int) -> None:
        self.log(AuditEventBuilder.history_capacity_reached(
            operation=operation,
            capacity=capacity,
            correlation_id=self.correlation_id,
        ))

    def log_report_generated(
        self,
        total_income: Decimal,
        total_expenses: Decimal,
        balance: Decimal,
    ) -> None:
        self.log(AuditEventBuilder.report_generated(
            total_income=total_income,
            total_expenses=total_expenses,
            balance=balance,
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One is created per ledger session and passed to every event.
    """
    return uuid4()
