"""Form validation package."""

from smartledger.validation.validator import (
    TransactionForm,
    TransactionFormValidator,
    parse_amount,
    parse_date,
)

__all__ = [
    "TransactionForm",
    "TransactionFormValidator",
    "parse_amount",
    "parse_date",
]
