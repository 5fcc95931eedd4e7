from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from library_checkout.exceptions import ParseError
from library_checkout.fees import format_fee

CATALOG_FIELDS = 4
CHECKOUT_FIELDS = 3


@dataclass(frozen=True)
class LibraryItem:
    """A single catalog entry. Owned by the catalog and never changed after creation."""

    id: int
    title: str
    media_type: str
    daily_late_fee: Decimal

    def __str__(self) -> str:
        return f"{self.id} - {self.title} ({self.media_type}) ${format_fee(self.daily_late_fee)}/day"

    def to_line(self) -> str:
        # Titles are written verbatim; a comma in the title will not survive a reload.
        return f"{self.id},{self.title},{self.media_type},{format(self.daily_late_fee, 'f')}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "media_type": self.media_type,
            "daily_late_fee": format(self.daily_late_fee, "f"),
        }

    @staticmethod
    def from_line(line: str) -> "LibraryItem":
        """Parse an ``id,title,mediaType,dailyLateFee`` line.

        Raises ParseError when the field count is wrong or a numeric field
        does not parse. Callers decide whether that is fatal.
        """
        parts = line.split(",")
        if len(parts) != CATALOG_FIELDS:
            raise ParseError(line, f"expected {CATALOG_FIELDS} fields, got {len(parts)}")
        raw_id, title, media_type, raw_fee = parts
        try:
            item_id = int(raw_id)
        except ValueError as e:
            raise ParseError(line, "invalid item id") from e
        try:
            fee = Decimal(raw_fee.strip())
        except InvalidOperation as e:
            raise ParseError(line, "invalid late fee") from e
        if not fee.is_finite():
            raise ParseError(line, "invalid late fee")
        return LibraryItem(id=item_id, title=title, media_type=media_type, daily_late_fee=fee)


class CheckoutRecord:
    """An active loan of a catalog item."""

    def __init__(self, item: LibraryItem, loan_period_days: int, days_late: int = 0) -> None:
        self.item = item
        self.loan_period_days = loan_period_days
        self.days_late = days_late

    @property
    def item_id(self) -> int:
        return self.item.id

    def __str__(self) -> str:
        return (f"{self.item_id} - {self.item.title} ({self.item.media_type}) "
                f"loan {self.loan_period_days} days, {self.days_late} days late")

    def __repr__(self) -> str:
        return (f"CheckoutRecord(item_id={self.item_id}, loan_period_days={self.loan_period_days}, "
                f"days_late={self.days_late})")

    def to_line(self) -> str:
        return f"{self.item_id},{self.loan_period_days},{self.days_late}"

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "title": self.item.title,
            "media_type": self.item.media_type,
            "loan_period_days": self.loan_period_days,
            "days_late": self.days_late,
        }

    @staticmethod
    def parse_line(line: str) -> tuple[int, int, int]:
        """Split an ``itemId,loanPeriodDays,daysLate`` line into integers.

        The item itself is resolved by the ledger against the catalog.
        """
        parts = line.split(",")
        if len(parts) != CHECKOUT_FIELDS:
            raise ParseError(line, f"expected {CHECKOUT_FIELDS} fields, got {len(parts)}")
        try:
            item_id, loan_period_days, days_late = (int(p) for p in parts)
        except ValueError as e:
            raise ParseError(line, "non-integer field") from e
        return item_id, loan_period_days, days_late
