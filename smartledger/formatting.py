"""
Display Formatting

The only place amounts are rounded. Currency is shown with two decimals
in lists and tooltips, and with none on summary cards and budget figures.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from smartledger.models.ledger import Transaction, TransactionType


Number = Union[Decimal, int, float]

DEFAULT_CURRENCY_SYMBOL = "¥"


def format_currency(
    value: Number,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
    places: int = 2,
) -> str:
    """
    Format an amount, e.g. ¥1,234.50 or -¥30.

    Rounds half up at the requested number of places.
    """
    amount = Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{places}f}"


def format_whole(value: Number, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Summary-card style: no decimals."""
    return format_currency(value, symbol=symbol, places=0)


def format_signed_amount(transaction: Transaction, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """+¥12.00 for income, -¥12.00 for expense."""
    prefix = "+" if transaction.type == TransactionType.INCOME else "-"
    return f"{prefix}{format_currency(transaction.amount, symbol=symbol)}"


def format_percentage(value: Number) -> str:
    """Whole percent, e.g. 85%."""
    rounded = Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def format_short_date(day: date) -> str:
    """MM-DD, used on chart axes."""
    return day.strftime("%m-%d")


def format_last_updated(moment: Optional[datetime]) -> str:
    """HH:MM:SS, or an empty string when never updated."""
    if moment is None:
        return ""
    return moment.strftime("%H:%M:%S")
