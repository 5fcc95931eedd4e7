"""Loan length and late fee rules."""

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Iterable, Union

if TYPE_CHECKING:
    from library_checkout.item import CheckoutRecord

DVD_LOAN_DAYS = 3
DEFAULT_LOAN_DAYS = 7

_CENTS = Decimal("0.01")


def loan_period_for(media_type: str) -> int:
    """DVDs go out for 3 days; every other media type (books, unknown, empty) for 7."""
    if (media_type or "").strip().lower() == "dvd":
        return DVD_LOAN_DAYS
    return DEFAULT_LOAN_DAYS


def late_fee(daily_late_fee: Union[Decimal, int, str], days_late: int) -> Decimal:
    """Fee for one loan. Zero or negative late days cost nothing."""
    return Decimal(daily_late_fee) * max(days_late, 0)


def total_late_fees(records: Iterable["CheckoutRecord"]) -> Decimal:
    total = Decimal("0")
    for record in records:
        total += late_fee(record.item.daily_late_fee, record.days_late)
    return total


def format_fee(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP))
