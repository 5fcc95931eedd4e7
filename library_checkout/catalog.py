import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from library_checkout.exceptions import ParseError
from library_checkout.item import CATALOG_FIELDS, LibraryItem

logger = logging.getLogger(__name__)


class CatalogStore:
    """Holds the library items and mirrors additions to the catalog file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.items: List[LibraryItem] = []
        # False until a load finds the backing file.
        self.file_found = False

    # ------------------------- Persistence ------------------------- #
    def load(self, path: Union[str, Path, None] = None) -> List[LibraryItem]:
        """Replace the in-memory catalog with the contents of the catalog file.

        Lines that are not exactly four comma-separated fields are skipped
        silently; four-field lines with an unparseable id or fee are skipped
        with a warning. A missing file leaves an empty catalog.
        """
        if path is not None:
            self.path = Path(path)
        self.items = []

        if not self.path.exists():
            self.file_found = False
            logger.info("Catalog file %s not found, starting with an empty catalog", self.path)
            return []

        self.file_found = True
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if len(line.split(",")) != CATALOG_FIELDS:
                logger.debug("Skipping catalog line %r", line)
                continue
            try:
                self.items.append(LibraryItem.from_line(line))
            except ParseError as e:
                logger.warning("Skipping malformed catalog line: %s", e)

        logger.info("Loaded %d items from %s", len(self.items), self.path)
        return list(self.items)

    def add(self, item: LibraryItem) -> None:
        """Add an item and append it to the catalog file right away. Duplicate ids are not rejected."""
        if "," in item.title:
            logger.warning("Title %r contains a comma and will not reload from %s", item.title, self.path)
        self.items.append(item)
        with self.path.open("a", encoding="utf-8", newline="\n") as f:
            f.write(item.to_line() + "\n")
        logger.info("Added item %d to %s", item.id, self.path)

    # ------------------------- Lookups ------------------------- #
    def find_by_id(self, item_id: int) -> Optional[LibraryItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def list_all(self) -> List[LibraryItem]:
        return list(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LibraryItem]:
        return iter(self.items)
