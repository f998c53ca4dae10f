"""
Core Data Models for SmartLedger

These models define the schemas for everything the stores hold and
everything that is written to storage. They are designed to:
1. Enforce the amount invariant (never negative, sign comes from type)
2. Be serializable to the same JSON shape as existing snapshots
3. Be immutable - a transaction is deleted and recreated, never edited

DESIGN DECISION: Amounts are Decimal, not float. Sums are exact, so
income - expense == balance holds to the last digit and rounding only
ever happens at display time.
"""

import datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return "Income" if self is TransactionType.INCOME else "Expense"


class ViewState(str, Enum):
    """The closed set of top-level views."""
    DASHBOARD = "dashboard"
    TRANSACTIONS = "transactions"
    BUDGETS = "budgets"
    AI_INSIGHTS = "ai-insights"


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction as entered by the user, before the store assigns an id.

    Raw form input is checked by TransactionFormValidator first;
    this model only guards the structural invariants.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Amount, always non-negative"
    )
    type: TransactionType
    category: str = Field(
        ...,
        min_length=1,
        description="Category id; unknown ids are tolerated"
    )
    date: datetime.date
    note: str = Field(
        default="",
        description="Free-text note, possibly empty"
    )


class Transaction(TransactionDraft):
    """A recorded income or expense event."""

    id: str = Field(
        ...,
        min_length=1,
        description="Unique opaque id"
    )

    @property
    def signed_amount(self) -> Decimal:
        """+amount for income, -amount for expense."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount

    @classmethod
    def from_draft(cls, draft: TransactionDraft) -> "Transaction":
        """Assign a fresh random id to a draft."""
        return cls(id=new_transaction_id(), **draft.model_dump())


def new_transaction_id() -> str:
    """A random 128-bit (UUID4) id."""
    return str(uuid4())


# =============================================================================
# BUDGETS
# =============================================================================

class Budget(BaseModel):
    """
    A monthly spending cap for one category.

    A limit of zero is never stored: BudgetStore treats it as deletion.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category_id: str = Field(
        ...,
        min_length=1,
        alias="categoryId",
        description="Category this cap applies to"
    )
    limit: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Monthly limit"
    )
