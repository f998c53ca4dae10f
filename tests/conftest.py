"""Shared fixtures for SmartLedger tests."""

from datetime import date
from decimal import Decimal

import pytest

from smartledger.models import Transaction, TransactionType


@pytest.fixture
def today() -> date:
    return date(2026, 10, 19)


@pytest.fixture
def make_tx():
    """Factory for transactions with sequential ids."""
    counter = {"n": 0}

    def _make(
        amount,
        type=TransactionType.EXPENSE,
        category="food",
        day=date(2026, 10, 19),
        note="",
    ) -> Transaction:
        counter["n"] += 1
        return Transaction(
            id=f"tx-{counter['n']}",
            amount=Decimal(str(amount)),
            type=type,
            category=category,
            date=day,
            note=note,
        )

    return _make
