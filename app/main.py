"""
Streamlit Frontend for Budget Tracker

A browser alternative to the `budget-tracker` text menu.

DESIGN PRINCIPLES:
1. One browser session = one ledger (kept in st.session_state)
2. The page only collects input; the ledger validates it
3. Every notice and error is shown, nothing is hidden
4. Nothing survives a page reload into a new session

Run with: streamlit run app/main.py
"""

import streamlit as st

from budget_tracker.audit import configure_logging
from budget_tracker.config import get_settings
from budget_tracker.ledger import HistoryCapacityError, InvalidAmountError, Ledger
from budget_tracker.models import Notice, format_amount


# Page configuration
st.set_page_config(
    page_title="Budget Tracker",
    page_icon="💰",
    layout="centered",
    initial_sidebar_state="expanded",
)


def show_notice(notice: Notice) -> None:
    """Display a ledger notice."""
    if notice.is_warning:
        st.warning(f"⚠️ {notice.message}")
    else:
        st.success(f"✅ {notice.message}")


def get_ledger() -> Ledger:
    """Get the ledger for this browser session, creating it on first use."""
    if "ledger" not in st.session_state:
        settings = get_settings()
        level = settings.log_level.value if settings.log_level is not None else None
        configure_logging(level=level, json_logs=settings.json_logs)
        st.session_state.ledger = Ledger.from_settings(settings, on_notice=show_notice)
    return st.session_state.ledger


def main():
    """Main application entry point."""
    ledger = get_ledger()

    # Sidebar navigation
    st.sidebar.title("💰 Budget Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["➕ Add Income", "➖ Add Expense", "🎯 Budget Goal", "📜 History", "📊 Monthly Report"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.metric(
        "Current Balance",
        format_amount(ledger.get_balance(), ledger.currency),
    )
    if ledger.budget_goal > 0:
        st.sidebar.metric(
            "Spent / Goal",
            f"{ledger.get_total_expenses():.2f} / {ledger.budget_goal:.2f}",
        )

    # Route to appropriate page
    if page == "➕ Add Income":
        render_income_page(ledger)
    elif page == "➖ Add Expense":
        render_expense_page(ledger)
    elif page == "🎯 Budget Goal":
        render_goal_page(ledger)
    elif page == "📜 History":
        render_history_page(ledger)
    elif page == "📊 Monthly Report":
        render_report_page(ledger)


def render_income_page(ledger: Ledger):
    """Render the add-income form."""
    st.title("➕ Add Income")

    with st.form("income_form", clear_on_submit=True):
        amount = st.number_input("Income amount", step=100.0, format="%.2f")
        submitted = st.form_submit_button("Add Income", type="primary")

    if submitted:
        try:
            ledger.add_income(amount)
            st.success("Income added successfully.")
        except (InvalidAmountError, HistoryCapacityError) as e:
            st.error(str(e))


def render_expense_page(ledger: Ledger):
    """Render the add-expense form."""
    st.title("➖ Add Expense")

    with st.form("expense_form", clear_on_submit=True):
        amount = st.number_input("Expense amount", step=100.0, format="%.2f")
        category = st.text_input(
            "Category",
            placeholder="e.g., Food, Transport, etc.",
        )
        submitted = st.form_submit_button("Add Expense", type="primary")

    if submitted:
        if not category:
            st.error("Please enter a category.")
            return
        try:
            # Budget warnings are shown through show_notice.
            ledger.add_expense(amount, category)
            st.success("Expense added successfully.")
        except (InvalidAmountError, HistoryCapacityError) as e:
            st.error(str(e))


def render_goal_page(ledger: Ledger):
    """Render the budget goal form."""
    st.title("🎯 Monthly Budget Goal")
    st.markdown(
        f"Current goal: **{format_amount(ledger.budget_goal, ledger.currency)}**"
    )

    with st.form("goal_form"):
        goal = st.number_input(
            "Set monthly budget goal",
            value=float(ledger.budget_goal),
            step=500.0,
            format="%.2f",
        )
        submitted = st.form_submit_button("Save Goal", type="primary")

    if submitted:
        try:
            ledger.set_budget_goal(goal)
        except InvalidAmountError as e:
            st.error(str(e))


def render_history_page(ledger: Ledger):
    """Render the transaction history."""
    st.title("📜 Transaction History")

    lines = ledger.view_transaction_history()
    if not ledger.transactions:
        st.info(lines[0])
    else:
        st.code("\n".join(lines), language=None)

    events = ledger.audit_logger.events
    if events:
        with st.expander(f"🔍 Audit Trail ({len(events)} events)"):
            for event in events:
                st.markdown(
                    f"`{event.timestamp:%H:%M:%S}` **{event.event_type.value}**"
                    f" - {event.description}"
                )


def render_report_page(ledger: Ledger):
    """Render the monthly report."""
    st.title("📊 Monthly Report")

    if st.button("Generate Report", type="primary"):
        report = ledger.generate_monthly_report()

        col1, col2, col3 = st.columns(3)
        col1.metric("Total Income", format_amount(report.total_income, ledger.currency))
        col2.metric("Total Expenses", format_amount(report.total_expenses, ledger.currency))
        col3.metric("Current Balance", format_amount(report.current_balance, ledger.currency))

        if report.budget_goal > 0 and report.budget_exceeded:
            st.warning("⚠️ Expenses are above your monthly budget goal.")

        st.code(report.render(ledger.currency), language=None)


if __name__ == "__main__":
    main()
