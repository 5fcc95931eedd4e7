import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from library_checkout.catalog import CatalogStore
from library_checkout.exceptions import (
    AlreadyCheckedOutError,
    ItemNotFoundError,
    NotCheckedOutError,
    ParseError,
)
from library_checkout.fees import loan_period_for
from library_checkout.item import CheckoutRecord, LibraryItem

logger = logging.getLogger(__name__)


class CheckoutLedger:
    """Active checkouts, keyed by catalog item id and saved to their own file."""

    def __init__(self, catalog: CatalogStore, path: Union[str, Path]) -> None:
        self.catalog = catalog
        self.path = Path(path)
        self.records: List[CheckoutRecord] = []
        self.file_found = False

    # ------------------------- Core operations ------------------------- #
    def checkout(self, item: LibraryItem) -> CheckoutRecord:
        """Open a loan for ``item``. Raises AlreadyCheckedOutError if it is already out."""
        if self.find_by_id(item.id) is not None:
            raise AlreadyCheckedOutError(item.id)
        record = CheckoutRecord(item, loan_period_for(item.media_type))
        self.records.append(record)
        logger.info("Checked out item %d for %d days", item.id, record.loan_period_days)
        return record

    def checkout_by_id(self, item_id: int) -> CheckoutRecord:
        item = self.catalog.find_by_id(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return self.checkout(item)

    def find_by_id(self, item_id: int) -> Optional[CheckoutRecord]:
        for record in self.records:
            if record.item_id == item_id:
                return record
        return None

    def return_item(self, item_id: int) -> CheckoutRecord:
        """Close the loan for ``item_id`` and hand back the removed record."""
        record = self.find_by_id(item_id)
        if record is None:
            raise NotCheckedOutError(item_id)
        self.records.remove(record)
        logger.info("Returned item %d", item_id)
        return record

    def apply_late_days(self, days: int) -> None:
        """Set the same late-day count on every active checkout."""
        for record in self.records:
            record.days_late = days

    def list_all(self) -> List[CheckoutRecord]:
        return list(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CheckoutRecord]:
        return iter(self.records)

    # ------------------------- Persistence ------------------------- #
    def save(self, path: Union[str, Path, None] = None) -> None:
        """Overwrite the ledger file with the current checkouts."""
        if path is not None:
            self.path = Path(path)
        content = "".join(record.to_line() + "\n" for record in self.records)
        self.path.write_text(content, encoding="utf-8")
        logger.info("Saved %d checkouts to %s", len(self.records), self.path)

    def load(self, path: Union[str, Path, None] = None) -> List[CheckoutRecord]:
        """Rebuild the ledger from its file, resolving each line against the catalog.

        If the file does not exist the ledger is left as it is. Otherwise the
        ledger is cleared first; malformed lines and lines whose item is no
        longer in the catalog are dropped.
        """
        if path is not None:
            self.path = Path(path)

        if not self.path.exists():
            self.file_found = False
            logger.info("Checkout file %s not found", self.path)
            return []

        self.file_found = True
        self.records = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                item_id, loan_period_days, days_late = CheckoutRecord.parse_line(line)
            except ParseError as e:
                logger.warning("Skipping malformed checkout line: %s", e)
                continue

            item = self.catalog.find_by_id(item_id)
            if item is None:
                logger.info("Dropping checkout of item %d: not in catalog", item_id)
                continue
            if self.find_by_id(item_id) is not None:
                logger.warning("Dropping duplicate checkout of item %d", item_id)
                continue
            self.records.append(CheckoutRecord(item, loan_period_days, days_late))

        logger.info("Loaded %d checkouts from %s", len(self.records), self.path)
        return list(self.records)
