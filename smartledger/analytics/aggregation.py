"""
Aggregation Engine

DESIGN DECISION: Every function here is pure. Inputs are a transaction
snapshot (and budgets where needed); "today" is always passed in, never
read from the clock. Same inputs, same outputs.

Sums are exact Decimal arithmetic with no intermediate rounding.
Rounding is a display concern (see smartledger.formatting).

Unknown category ids never reach a category bucket. They still count
toward plain per-type totals, so use categorized_total() when comparing
a breakdown against a total.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from smartledger.models.category import categories_for, is_known_category
from smartledger.models.ledger import Budget, Transaction, TransactionType
from smartledger.models.reports import (
    BudgetLine,
    BudgetStatus,
    CategorySlice,
    DailyBucket,
    LedgerSummary,
    TrendPoint,
)


NEAR_LIMIT_PERCENT = Decimal("80")
DAILY_WINDOW_DAYS = 7

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


# =============================================================================
# TOTALS
# =============================================================================

def total_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    """Sum of amounts of all transactions of one type."""
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        _ZERO,
    )


def balance(transactions: Iterable[Transaction]) -> Decimal:
    """Total income minus total expense."""
    transactions = list(transactions)
    return (
        total_by_type(transactions, TransactionType.INCOME)
        - total_by_type(transactions, TransactionType.EXPENSE)
    )


def categorized_total(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    """Total of one type over transactions whose category is registered for that type."""
    return sum(
        (
            t.amount for t in transactions
            if t.type == transaction_type and is_known_category(t.category, transaction_type)
        ),
        _ZERO,
    )


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Headline totals for the dashboard."""
    transactions = list(transactions)
    income = total_by_type(transactions, TransactionType.INCOME)
    expense = total_by_type(transactions, TransactionType.EXPENSE)
    return LedgerSummary(
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        transaction_count=len(transactions),
    )


# =============================================================================
# CATEGORY BREAKDOWN
# =============================================================================

def category_breakdown(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[CategorySlice]:
    """
    Per-category totals for one transaction type.

    Registry order, not sorted by value. Categories whose sum is exactly
    zero (including ones never used) are left out.
    """
    sums: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for t in transactions:
        if t.type == transaction_type:
            sums[t.category] += t.amount

    slices = []
    for category in categories_for(transaction_type):
        value = sums.get(category.id, _ZERO)
        if value == _ZERO:
            continue
        slices.append(CategorySlice(
            category_id=category.id,
            label=category.label,
            color=category.color,
            value=value,
        ))
    return slices


# =============================================================================
# BUDGETS
# =============================================================================

def monthly_spend(
    transactions: Iterable[Transaction],
    category_id: str,
    today: date,
) -> Decimal:
    """
    Expense total for one category within today's calendar month.

    Matching is on the date's own month and year fields.
    """
    return sum(
        (
            t.amount for t in transactions
            if t.type == TransactionType.EXPENSE
            and t.category == category_id
            and t.date.month == today.month
            and t.date.year == today.year
        ),
        _ZERO,
    )


def budget_status(
    budget: Budget,
    spent: Decimal,
    near_limit_percent: Decimal = NEAR_LIMIT_PERCENT,
) -> BudgetStatus:
    """
    Threshold state of a budget given this month's spend.

    spent == limit is not over budget (strict >) but is near the limit.
    """
    limit = budget.limit
    percentage = spent / limit * _HUNDRED
    over_budget = spent > limit
    near_limit = not over_budget and percentage >= Decimal(str(near_limit_percent))

    return BudgetStatus(
        category_id=budget.category_id,
        limit=limit,
        spent=spent,
        percentage=percentage,
        progress=min(percentage, _HUNDRED),
        over_budget=over_budget,
        near_limit=near_limit,
        remaining=max(limit - spent, _ZERO),
        overage=spent - limit,
    )


def budget_overview(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    today: date,
    near_limit_percent: Decimal = NEAR_LIMIT_PERCENT,
) -> list[BudgetLine]:
    """
    One line per expense category, in registry order.

    Categories without a budget still show this month's spend, with no status.
    """
    transactions = list(transactions)
    by_category = {b.category_id: b for b in budgets}

    lines = []
    for category in categories_for(TransactionType.EXPENSE):
        spent = monthly_spend(transactions, category.id, today)
        budget = by_category.get(category.id)
        lines.append(BudgetLine(
            category_id=category.id,
            label=category.label,
            color=category.color,
            spent=spent,
            limit=budget.limit if budget else None,
            status=budget_status(budget, spent, near_limit_percent) if budget else None,
        ))
    return lines


# =============================================================================
# TIME SERIES
# =============================================================================

def daily_rollup(
    transactions: Iterable[Transaction],
    today: date,
    days: int = DAILY_WINDOW_DAYS,
) -> list[DailyBucket]:
    """
    Income and expense per day for the window ending today (inclusive).

    Always exactly `days` buckets, oldest first; empty days are zero.
    """
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")

    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    income: dict[date, Decimal] = {day: _ZERO for day in window}
    expense: dict[date, Decimal] = {day: _ZERO for day in window}

    for t in transactions:
        if t.date not in income:
            continue
        if t.type == TransactionType.INCOME:
            income[t.date] += t.amount
        else:
            expense[t.date] += t.amount

    return [
        DailyBucket(day=day, income=income[day], expense=expense[day])
        for day in window
    ]


def net_worth_trend(transactions: Iterable[Transaction]) -> list[TrendPoint]:
    """
    Running net worth over the dates that have transactions.

    Same-date transactions collapse into one point. Dates without
    transactions are skipped, not zero-filled.
    """
    deltas: dict[date, Decimal] = defaultdict(lambda: _ZERO)
    for t in transactions:
        deltas[t.date] += t.signed_amount

    points = []
    running = _ZERO
    for day in sorted(deltas):
        running += deltas[day]
        points.append(TrendPoint(day=day, net_delta=deltas[day], cumulative=running))
    return points

