"""Interactive text menu for the budget ledger.

This module exposes the ``budget-tracker`` console command. It owns the
read-prompt-dispatch loop only; every number it reads is handed to a
:class:`~budget_tracker.ledger.Ledger`, which does its own validation.
Configuration comes from ``LEDGER_*`` environment variables (see
``budget_tracker.config``) and can be overridden per run with options.
"""

from __future__ import annotations

from typing import Annotated, Callable, Optional

import structlog
import typer

from .audit import configure_logging
from .config import LogLevel, get_settings
from .ledger import Ledger, LedgerError
from .models import Notice, format_amount


MENU = (
    "1. Add Income",
    "2. Add Expense",
    "3. View Balance",
    "4. Set Budget Goal",
    "5. View Transaction History",
    "6. Generate Monthly Report",
    "7. Exit",
)

EXIT_CHOICE = 7

app = typer.Typer(
    add_completion=False,
    help="Track income, expenses and a monthly budget goal for one session.",
)

logger = structlog.get_logger("budget_tracker.cli")


def _print_notice(notice: Notice) -> None:
    typer.echo(notice.message)


# ---- Menu actions --------------------------------------------------------------


def _add_income(ledger: Ledger) -> None:
    amount = typer.prompt("Enter income amount", type=float)
    ledger.add_income(amount)
    typer.echo("Income added successfully.")


def _add_expense(ledger: Ledger) -> None:
    amount = typer.prompt("Enter expense amount", type=float)
    # Reject before asking for a category.
    ledger.validate_amount(amount, "add_expense", "Expense")
    category = typer.prompt("Enter expense category (e.g., Food, Transport, etc.)")
    ledger.add_expense(amount, category)
    typer.echo("Expense added successfully.")


def _view_balance(ledger: Ledger) -> None:
    typer.echo(f"Current Balance: {format_amount(ledger.get_balance(), ledger.currency)}")


def _set_budget_goal(ledger: Ledger) -> None:
    goal = typer.prompt("Set monthly budget goal", type=float)
    # The ledger prints the confirmation through on_notice.
    ledger.set_budget_goal(goal)


def _view_history(ledger: Ledger) -> None:
    if ledger.transactions:
        typer.echo("Transaction History:")
    for line in ledger.view_transaction_history():
        typer.echo(line)


def _monthly_report(ledger: Ledger) -> None:
    report = ledger.generate_monthly_report()
    typer.echo(report.render(ledger.currency))


ACTIONS: dict[int, Callable[[Ledger], None]] = {
    1: _add_income,
    2: _add_expense,
    3: _view_balance,
    4: _set_budget_goal,
    5: _view_history,
    6: _monthly_report,
}


def run_menu(ledger: Ledger) -> None:
    """Drive ``ledger`` from the menu until the user chooses Exit.

    Ledger errors are printed and the loop continues; nothing the user
    types ends the session except the Exit choice.
    """

    while True:
        typer.echo("")
        for line in MENU:
            typer.echo(line)
        choice = typer.prompt("Enter your choice", type=int)

        if choice == EXIT_CHOICE:
            typer.echo("Exiting... Thank you!")
            return

        action = ACTIONS.get(choice)
        if action is None:
            typer.echo("Invalid choice. Please try again.")
            continue

        try:
            action(ledger)
        except LedgerError as exc:
            logger.debug("menu_action_rejected", choice=choice, error=str(exc))
            typer.echo(str(exc))


@app.command()
def main(
    capacity: Annotated[
        Optional[int],
        typer.Option(
            "--capacity",
            min=1,
            help="Maximum number of transactions (overrides LEDGER_HISTORY_CAPACITY).",
        ),
    ] = None,
    currency: Annotated[
        Optional[str],
        typer.Option("--currency", help="Currency label printed before amounts."),
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            case_sensitive=False,
            help="Write structured logs to stderr at this level (silent by default).",
        ),
    ] = None,
) -> None:
    """Start an interactive budget session."""

    settings = get_settings()
    level = log_level or settings.log_level
    configure_logging(
        level=level.value if level is not None else None,
        json_logs=settings.json_logs,
    )

    ledger = Ledger(
        history_capacity=capacity if capacity is not None else settings.history_capacity,
        currency=currency or settings.currency_label,
        on_notice=_print_notice,
    )
    logger.info(
        "session_started",
        correlation_id=str(ledger.audit_logger.correlation_id),
        history_capacity=ledger.history_capacity,
    )

    run_menu(ledger)


if __name__ == "__main__":  # pragma: no cover
    app()
