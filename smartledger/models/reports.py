"""
Derived Report Models

Output shapes of the aggregation engine. These are plain values:
computed on demand from a store snapshot, never persisted.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LedgerSummary(BaseModel):
    """Headline totals shown on the dashboard cards."""
    model_config = ConfigDict(frozen=True)

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    transaction_count: int = Field(ge=0)


class CategorySlice(BaseModel):
    """One category's share of a breakdown."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    label: str
    color: str
    value: Decimal


class BudgetStatus(BaseModel):
    """
    Threshold state of one budgeted category for the current month.

    progress is capped at 100 for the progress bar; percentage is not.
    overage is signed (spent - limit) and only meaningful when over_budget.
    """
    model_config = ConfigDict(frozen=True)

    category_id: str
    limit: Decimal = Field(gt=0)
    spent: Decimal
    percentage: Decimal
    progress: Decimal
    over_budget: bool
    near_limit: bool
    remaining: Decimal
    overage: Decimal


class BudgetLine(BaseModel):
    """One row of the budget view: every expense category, budgeted or not."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    label: str
    color: str
    spent: Decimal
    limit: Optional[Decimal] = None
    status: Optional[BudgetStatus] = None

    @property
    def has_budget(self) -> bool:
        return self.status is not None


class DailyBucket(BaseModel):
    """Income and expense totals for one calendar day."""
    model_config = ConfigDict(frozen=True)

    day: date
    income: Decimal
    expense: Decimal


class TrendPoint(BaseModel):
    """Running net worth after all transactions on one date."""
    model_config = ConfigDict(frozen=True)

    day: date
    net_delta: Decimal
    cumulative: Decimal
