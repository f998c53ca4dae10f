"""
Budget Store

Mapping from category id to a monthly limit. At most one budget per
category; a limit of zero or below deletes the entry instead of storing it.
"""

from decimal import Decimal
from typing import Iterable, Optional, Union

from smartledger.models.ledger import Budget


class BudgetStore:
    """Upsert / remove-on-zero access to per-category budgets."""

    def __init__(self, budgets: Optional[Iterable[Budget]] = None):
        # dict keeps insertion order; a later duplicate replaces an earlier one
        self._budgets: dict[str, Budget] = {}
        for budget in budgets or []:
            self._budgets[budget.category_id] = budget

    def set_limit(self, category_id: str, limit: Union[Decimal, int, float, str]) -> None:
        """
        Set the monthly limit for a category.

        limit <= 0 removes any existing budget for the category;
        otherwise the budget is replaced or inserted.
        """
        limit = Decimal(str(limit))
        if limit <= 0:
            self._budgets.pop(category_id, None)
            return
        self._budgets[category_id] = Budget(category_id=category_id, limit=limit)

    def get(self, category_id: str) -> Optional[Budget]:
        return self._budgets.get(category_id)

    def limit_for(self, category_id: str) -> Optional[Decimal]:
        budget = self._budgets.get(category_id)
        return budget.limit if budget else None

    def all(self) -> list[Budget]:
        """All budgets; category id is the unique key."""
        return list(self._budgets.values())

    def __len__(self) -> int:
        return len(self._budgets)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._budgets
