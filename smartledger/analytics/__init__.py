"""Aggregation engine: pure derivations over the transaction log."""

from smartledger.analytics.aggregation import (
    DAILY_WINDOW_DAYS,
    NEAR_LIMIT_PERCENT,
    balance,
    budget_overview,
    budget_status,
    categorized_total,
    category_breakdown,
    daily_rollup,
    monthly_spend,
    net_worth_trend,
    summarize,
    total_by_type,
)

__all__ = [
    "DAILY_WINDOW_DAYS",
    "NEAR_LIMIT_PERCENT",
    "balance",
    "budget_overview",
    "budget_status",
    "categorized_total",
    "category_breakdown",
    "daily_rollup",
    "monthly_spend",
    "net_worth_trend",
    "summarize",
    "total_by_type",
]
