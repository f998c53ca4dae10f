"""
Category Registry

DESIGN DECISION: Categories are a fixed, ordered list rather than user data.
Registry order is the display order of every breakdown, so charts stay
stable as amounts change.

Transactions reference categories by id only. Ids that are not in the
registry are tolerated everywhere: they render as "Unknown category" and
never land in a category bucket.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from smartledger.models.ledger import TransactionType


UNKNOWN_CATEGORY_LABEL = "Unknown category"


class Category(BaseModel):
    """A classification tag for transactions, scoped to income or expense."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    type: TransactionType
    color: str = Field(
        ...,
        pattern=r"^#[0-9a-fA-F]{6}$",
        description="Hex color used only by charts"
    )


EXPENSE_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", label="Food & Dining", type=TransactionType.EXPENSE, color="#ef4444"),
    Category(id="transport", label="Transport", type=TransactionType.EXPENSE, color="#f97316"),
    Category(id="shopping", label="Shopping", type=TransactionType.EXPENSE, color="#eab308"),
    Category(id="housing", label="Housing & Utilities", type=TransactionType.EXPENSE, color="#84cc16"),
    Category(id="entertainment", label="Entertainment", type=TransactionType.EXPENSE, color="#06b6d4"),
    Category(id="health", label="Health & Medical", type=TransactionType.EXPENSE, color="#8b5cf6"),
    Category(id="other_expense", label="Other Expense", type=TransactionType.EXPENSE, color="#64748b"),
)

INCOME_CATEGORIES: tuple[Category, ...] = (
    Category(id="salary", label="Salary", type=TransactionType.INCOME, color="#10b981"),
    Category(id="investment", label="Investments", type=TransactionType.INCOME, color="#3b82f6"),
    Category(id="gift", label="Gifts", type=TransactionType.INCOME, color="#a855f7"),
    Category(id="other_income", label="Other Income", type=TransactionType.INCOME, color="#6366f1"),
)

ALL_CATEGORIES: tuple[Category, ...] = EXPENSE_CATEGORIES + INCOME_CATEGORIES

_BY_ID: dict[str, Category] = {category.id: category for category in ALL_CATEGORIES}


def get_category(category_id: str) -> Optional[Category]:
    """Look up a category by id; None for unknown ids."""
    return _BY_ID.get(category_id)


def categories_for(transaction_type: TransactionType) -> tuple[Category, ...]:
    """Registry categories for one transaction type, in registry order."""
    if transaction_type == TransactionType.EXPENSE:
        return EXPENSE_CATEGORIES
    return INCOME_CATEGORIES


def category_label(category_id: str) -> str:
    """Display label for a category id."""
    category = get_category(category_id)
    return category.label if category else UNKNOWN_CATEGORY_LABEL


def is_known_category(category_id: str, transaction_type: TransactionType) -> bool:
    """True if the id is registered under the given type."""
    category = get_category(category_id)
    return category is not None and category.type == transaction_type
