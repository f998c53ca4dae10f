"""
Streamlit Frontend for SmartLedger

Four views, picked from the sidebar:
1. Dashboard - summary cards, net worth trend, category pies, last 7 days
2. Transactions - searchable list with delete (confirmation required)
3. Budgets - per-category monthly caps with progress bars
4. AI Insights - narrative analysis from the AI advisor

All numbers come from the coordinator; this file only renders them.
"""

import asyncio
from datetime import date

import plotly.graph_objects as go
import streamlit as st

from smartledger.agents import AnalysisStatus
from smartledger.config import get_settings, validate_all_settings
from smartledger.formatting import (
    format_last_updated,
    format_percentage,
    format_short_date,
    format_signed_amount,
    format_whole,
)
from smartledger.models import (
    TransactionType,
    ViewState,
    categories_for,
    category_label,
)
from smartledger.orchestrator import LedgerCoordinator, create_app_components
from smartledger.queries import TransactionQuery, TypeFilter, highlight_segments
from smartledger.validation import TransactionForm, TransactionFormValidator


# Page configuration
st.set_page_config(
    page_title="SmartLedger",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

VIEW_LABELS = {
    ViewState.DASHBOARD: "📊 Dashboard",
    ViewState.TRANSACTIONS: "📋 Transactions",
    ViewState.BUDGETS: "🎯 Budgets",
    ViewState.AI_INSIGHTS: "✨ AI Insights",
}


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_coordinator() -> LedgerCoordinator:
    """Get or create this browser session's coordinator."""
    if "coordinator" not in st.session_state:
        st.session_state.coordinator = create_app_components()
    return st.session_state.coordinator


def currency() -> str:
    return get_settings().app.currency_symbol


def main():
    """Main application entry point."""
    coordinator = get_coordinator()

    st.sidebar.title("💰 SmartLedger")
    st.sidebar.markdown("---")

    views = list(VIEW_LABELS)
    selected = st.sidebar.radio(
        "Navigate to:",
        views,
        index=views.index(coordinator.state.view),
        format_func=lambda v: VIEW_LABELS[v],
    )
    if selected != coordinator.state.view:
        coordinator.select_view(selected)

    st.sidebar.markdown("---")
    render_transaction_form(coordinator)

    if selected == ViewState.DASHBOARD:
        render_dashboard(coordinator)
    elif selected == ViewState.TRANSACTIONS:
        render_transactions(coordinator)
    elif selected == ViewState.BUDGETS:
        render_budgets(coordinator)
    elif selected == ViewState.AI_INSIGHTS:
        render_insights(coordinator)


def render_transaction_form(coordinator: LedgerCoordinator):
    """Sidebar form for recording a transaction."""
    st.sidebar.subheader("➕ Add Transaction")

    tx_type = st.sidebar.radio(
        "Type",
        [TransactionType.EXPENSE, TransactionType.INCOME],
        format_func=lambda t: t.label,
        horizontal=True,
        key="form_type",
    )

    with st.sidebar.form("add_transaction", clear_on_submit=True):
        amount = st.text_input("Amount *", placeholder="0.00")
        options = list(categories_for(tx_type))
        category = st.selectbox(
            "Category *",
            options=[None] + options,
            format_func=lambda c: "Choose a category" if c is None else c.label,
        )
        tx_date = st.date_input("Date *", value=date.today())
        note = st.text_input("Note (optional)", placeholder="What was it for?")
        submitted = st.form_submit_button("Save", type="primary")

    if submitted:
        result = coordinator.add_transaction(TransactionForm(
            type=tx_type,
            amount=amount,
            category=category.id if category else None,
            date=tx_date,
            note=note,
        ))
        message = TransactionFormValidator.get_user_friendly_summary(result)
        if result.is_valid:
            st.sidebar.success(message)
        else:
            st.sidebar.error(message)


def render_dashboard(coordinator: LedgerCoordinator):
    """Render the dashboard view."""
    st.title("📊 Dashboard")
    symbol = currency()

    summary = coordinator.summary()
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", format_whole(summary.total_income, symbol))
    col2.metric("Total Expense", format_whole(summary.total_expense, symbol))
    col3.metric("Balance", format_whole(summary.balance, symbol))

    st.subheader("Net Worth Trend")
    trend = coordinator.net_worth_trend()
    if trend:
        fig = go.Figure(go.Scatter(
            x=[format_short_date(p.day) for p in trend],
            y=[float(p.cumulative) for p in trend],
            mode="lines",
            fill="tozeroy",
            line=dict(color="#6366f1", width=2),
            name="Net worth",
        ))
        fig.update_layout(margin=dict(t=10, b=10, l=10, r=10), height=300)
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No trend data yet.")

    col_income, col_expense = st.columns(2)
    with col_income:
        st.subheader("Income Breakdown")
        render_pie(coordinator.income_breakdown(), "No income yet.")
    with col_expense:
        st.subheader("Expense Breakdown")
        render_pie(coordinator.expense_breakdown(), "No expenses yet.")

    st.subheader("Last 7 Days")
    buckets = coordinator.daily_rollup()
    days = [format_short_date(b.day) for b in buckets]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=days, y=[float(b.income) for b in buckets], name="Income", marker_color="#10b981"))
    fig.add_trace(go.Bar(x=days, y=[float(b.expense) for b in buckets], name="Expense", marker_color="#ef4444"))
    fig.update_layout(barmode="group", margin=dict(t=10, b=10, l=10, r=10), height=300)
    st.plotly_chart(fig, use_container_width=True)


def render_pie(slices, empty_message: str):
    if not slices:
        st.info(empty_message)
        return
    fig = go.Figure(go.Pie(
        labels=[s.label for s in slices],
        values=[float(s.value) for s in slices],
        marker=dict(colors=[s.color for s in slices]),
        hole=0.6,
        sort=False,
    ))
    fig.update_layout(margin=dict(t=10, b=10, l=10, r=10), height=300)
    st.plotly_chart(fig, use_container_width=True)


def render_transactions(coordinator: LedgerCoordinator):
    """Render the transaction list view."""
    st.title("📋 Transactions")
    symbol = currency()
    st.caption(f"{len(coordinator.transactions)} records")

    if len(coordinator.transactions) == 0:
        st.info("No transactions yet. Add your first income or expense from the sidebar.")
        return

    col1, col2 = st.columns([3, 2])
    with col1:
        search = st.text_input("Search notes or categories", placeholder="Search...")
    with col2:
        type_filter = st.radio(
            "Show",
            list(TypeFilter),
            format_func=lambda f: f.value.title(),
            horizontal=True,
        )

    transactions = coordinator.list_transactions(
        TransactionQuery(search=search, type_filter=type_filter)
    )
    if not transactions:
        st.info("No matching transactions.")
        return

    pending = coordinator.state.pending_delete_id
    for t in transactions:
        col_info, col_amount, col_action = st.columns([5, 2, 1])
        with col_info:
            label = highlighted(category_label(t.category), search)
            note = highlighted(t.note, search)
            st.markdown(f"{label}  \n{t.date.isoformat()} {note}")
        with col_amount:
            color = "green" if t.type == TransactionType.INCOME else "red"
            st.markdown(f":{color}[{format_signed_amount(t, symbol)}]")
        with col_action:
            if st.button("🗑️", key=f"delete_{t.id}", help="Delete"):
                coordinator.request_delete(t.id)
                st.rerun()

        if pending == t.id:
            st.warning("Delete this transaction?")
            col_yes, col_no = st.columns(2)
            if col_yes.button("Yes, delete", key=f"confirm_{t.id}", type="primary"):
                coordinator.confirm_delete()
                st.rerun()
            if col_no.button("Cancel", key=f"cancel_{t.id}"):
                coordinator.cancel_delete()
                st.rerun()


def highlighted(text: str, term: str) -> str:
    """Markdown with search matches highlighted."""
    return "".join(
        f":orange-background[{segment}]" if is_match else segment
        for segment, is_match in highlight_segments(text, term.strip())
    )


def render_budgets(coordinator: LedgerCoordinator):
    """Render the budget view."""
    st.title("🎯 Monthly Budgets")
    st.markdown(
        "Set a spending cap per category and track this month's progress."
    )
    symbol = currency()

    if "editing_budget" not in st.session_state:
        st.session_state.editing_budget = None

    for line in coordinator.budget_overview():
        st.markdown("---")
        col_label, col_action = st.columns([5, 1])
        with col_label:
            limit_text = (
                f" / {format_whole(line.limit, symbol)}" if line.limit is not None
                else " · no budget set"
            )
            st.markdown(f"**{line.label}** · {format_whole(line.spent, symbol)}{limit_text}")

        editing = st.session_state.editing_budget == line.category_id
        with col_action:
            if not editing and st.button("✏️", key=f"edit_{line.category_id}"):
                st.session_state.editing_budget = line.category_id
                st.rerun()

        if editing:
            raw_limit = st.text_input(
                "Monthly budget (0 removes it)",
                value=str(line.limit) if line.limit is not None else "",
                key=f"limit_{line.category_id}",
            )
            col_save, col_cancel = st.columns(2)
            if col_save.button("Save", key=f"save_{line.category_id}", type="primary"):
                result = coordinator.update_budget(line.category_id, raw_limit)
                if result.is_valid:
                    st.session_state.editing_budget = None
                    st.rerun()
                st.error(TransactionFormValidator.get_user_friendly_summary(result))
            if col_cancel.button("Cancel", key=f"cancel_{line.category_id}"):
                st.session_state.editing_budget = None
                st.rerun()

        status = line.status
        if status is None:
            continue

        st.progress(float(status.progress) / 100)
        col_pct, col_rest = st.columns(2)
        col_pct.caption(format_percentage(status.percentage))
        if status.over_budget:
            col_rest.caption(f"Over by {format_whole(status.overage, symbol)}")
            st.error("Over budget! Keep an eye on spending.")
        else:
            col_rest.caption(f"{format_whole(status.remaining, symbol)} left")
            if status.near_limit:
                st.warning("Approaching the budget limit.")


def render_insights(coordinator: LedgerCoordinator):
    """Render the AI insights view."""
    st.title("✨ AI Insights")
    st.markdown("Get a short analysis of your spending with practical suggestions.")

    if not validate_all_settings().get("gemini"):
        st.warning("⚠️ GEMINI_API_KEY is not set. Add it to your .env file to enable analysis.")

    state = coordinator.analysis
    label = "🔄 Analyze again" if state.status != AnalysisStatus.IDLE else "✨ Analyze my finances"

    if st.button(label, type="primary", disabled=not state.can_trigger):
        with st.spinner("Analyzing your transactions..."):
            state = run_async(coordinator.request_analysis())

    if state.status == AnalysisStatus.SUCCESS:
        st.markdown(state.text)
        st.caption(f"Last updated {format_last_updated(state.last_updated)}")
    elif state.status == AnalysisStatus.FAILURE:
        st.error(state.error)


if __name__ == "__main__":
    main()
