"""
Data Models Package

This package contains all Pydantic models used in SmartLedger.
Everything held in a store or written to storage conforms to these schemas.
"""

from smartledger.models.ledger import (
    Budget,
    Transaction,
    TransactionDraft,
    TransactionType,
    ViewState,
    new_transaction_id,
)
from smartledger.models.category import (
    ALL_CATEGORIES,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    UNKNOWN_CATEGORY_LABEL,
    Category,
    categories_for,
    category_label,
    get_category,
    is_known_category,
)
from smartledger.models.reports import (
    BudgetLine,
    BudgetStatus,
    CategorySlice,
    DailyBucket,
    LedgerSummary,
    TrendPoint,
)
from smartledger.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Ledger models
    "Budget",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "ViewState",
    "new_transaction_id",
    # Category registry
    "ALL_CATEGORIES",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "UNKNOWN_CATEGORY_LABEL",
    "Category",
    "categories_for",
    "category_label",
    "get_category",
    "is_known_category",
    # Report models
    "BudgetLine",
    "BudgetStatus",
    "CategorySlice",
    "DailyBucket",
    "LedgerSummary",
    "TrendPoint",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
