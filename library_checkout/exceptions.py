class CheckoutError(Exception):
    """Base exception for checkout tracker errors."""


class ParseError(CheckoutError, ValueError):
    """A persisted line could not be parsed."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class ItemNotFoundError(CheckoutError, LookupError):
    """Requested item id does not exist in the catalog."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} does not exist.")
        self.item_id = item_id


class AlreadyCheckedOutError(CheckoutError):
    """The item already has an active checkout."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} is already checked out.")
        self.item_id = item_id


class NotCheckedOutError(CheckoutError, LookupError):
    """The item has no active checkout to return."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} is not checked out.")
        self.item_id = item_id
