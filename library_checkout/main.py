import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

import typer
from rich.console import Console

from library_checkout.catalog import CatalogStore
from library_checkout.config import settings
from library_checkout.exceptions import AlreadyCheckedOutError, ItemNotFoundError, NotCheckedOutError
from library_checkout.fees import total_late_fees
from library_checkout.item import LibraryItem
from library_checkout.ledger import CheckoutLedger
from library_checkout.session import CheckoutSession
from library_checkout.ui_helpers import (
    print_catalog_result,
    print_checkouts_result,
    print_receipt_result,
    set_output_mode,
)

logger = logging.getLogger(__name__)

console = Console()


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def open_stores() -> Tuple[CatalogStore, CheckoutLedger]:
    """Build the catalog and ledger from the configured files and load the catalog."""
    logger.debug("Using catalog %s and checkout list %s", settings.catalog_file, settings.checkout_file)
    catalog = CatalogStore(settings.catalog_file)
    catalog.load()
    ledger = CheckoutLedger(catalog, settings.checkout_file)
    return catalog, ledger


def run_menu() -> None:
    """Interactive menu for the checkout tracker."""
    catalog = CatalogStore(settings.catalog_file)
    ledger = CheckoutLedger(catalog, settings.checkout_file)
    CheckoutSession(catalog, ledger, console=console, app_name=settings.app_name).run()


# --- Typer CLI application ---
app = typer.Typer(help="Library checkout CLI")

@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    catalog_file: Optional[str] = typer.Option(None, "--catalog", help="Catalog file to use"),
    checkout_file: Optional[str] = typer.Option(None, "--checkouts", help="Checkout list file to use"),
):
    """Global options. Without a command the interactive menu starts."""
    configure_logging()
    if output:
        set_output_mode(output)
    if catalog_file:
        settings.catalog_file = catalog_file
    if checkout_file:
        settings.checkout_file = checkout_file
    if ctx.invoked_subcommand is None:
        run_menu()

@app.command("list")
def cli_list():
    """List every catalog item."""
    catalog, _ = open_stores()
    print_catalog_result(catalog.list_all())

@app.command("add")
def cli_add(item_id: int, title: str, media_type: str, fee: str):
    """Add an item to the catalog file."""
    try:
        daily_late_fee = Decimal(fee)
    except InvalidOperation:
        daily_late_fee = None
    if daily_late_fee is None or not daily_late_fee.is_finite():
        print(f"Error: invalid late fee {fee!r}")
        raise typer.Exit(code=1)
    catalog, _ = open_stores()
    catalog.add(LibraryItem(id=item_id, title=title, media_type=media_type, daily_late_fee=daily_late_fee))
    print(f"Item added and saved: {item_id} - {title}")

@app.command("checkouts")
def cli_checkouts():
    """Show the saved checkout list."""
    _, ledger = open_stores()
    ledger.load()
    print_checkouts_result(ledger.list_all())

@app.command("checkout")
def cli_checkout(item_id: int):
    """Check out an item and save the checkout list."""
    _, ledger = open_stores()
    ledger.load()
    try:
        record = ledger.checkout_by_id(item_id)
    except ItemNotFoundError:
        print(f"Item {item_id} does not exist.")
        raise typer.Exit(code=1)
    except AlreadyCheckedOutError:
        print(f"Item {item_id} is already checked out.")
        raise typer.Exit(code=1)
    ledger.save()
    print(f"Checked out: {record.item.title} ({record.loan_period_days} days)")

@app.command("return")
def cli_return(item_id: int):
    """Return an item and save the checkout list."""
    _, ledger = open_stores()
    ledger.load()
    try:
        record = ledger.return_item(item_id)
    except NotCheckedOutError:
        print(f"Item {item_id} is not checked out.")
        raise typer.Exit(code=1)
    ledger.save()
    print(f"Returned: {record.item.title}")

@app.command("receipt")
def cli_receipt(days: int = typer.Option(0, "--days", "-d", help="Days late, applied to every checked-out item")):
    """Print late fees for the saved checkout list. The file is not modified."""
    _, ledger = open_stores()
    ledger.load()
    ledger.apply_late_days(days)
    records = ledger.list_all()
    print_receipt_result(records, total_late_fees(records))

@app.command("menu")
def cli_menu():
    """Start the interactive menu."""
    run_menu()


if __name__ == "__main__":
    app()
