import json
from decimal import Decimal
from typing import List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from library_checkout.config import settings
from library_checkout.fees import format_fee, late_fee
from library_checkout.item import CheckoutRecord, LibraryItem

# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        settings.output_mode = mode
    # Unknown values are ignored; the current mode stays.

def get_output_mode() -> str:
    mode = (settings.output_mode or "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"

def catalog_table(items: List[LibraryItem]) -> Table:
    table = Table(title="📚 Catalog", show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True, justify="right")
    table.add_column("Title", style="white")
    table.add_column("Type", style="white")
    table.add_column("Daily Late Fee", style="green", justify="right")
    for item in items:
        table.add_row(str(item.id), escape(item.title), escape(item.media_type), f"${format_fee(item.daily_late_fee)}")
    return table

def receipt_table(records: List[CheckoutRecord]) -> Table:
    table = Table(title="🧾 My Receipt", show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True, justify="right")
    table.add_column("Title", style="white")
    table.add_column("Loan (days)", justify="right")
    table.add_column("Days Late", justify="right")
    table.add_column("Fee", style="green", justify="right")
    for r in records:
        fee = late_fee(r.item.daily_late_fee, r.days_late)
        table.add_row(str(r.item_id), escape(r.item.title), str(r.loan_period_days), str(r.days_late), f"${format_fee(fee)}")
    return table

def print_catalog_result(items: List[LibraryItem]) -> None:
    """Print the catalog in the current output mode.
    - plain: 'ID - Title (Type) $fee/day' lines, or 'No items in catalog.'
    - json: JSON array of items
    - rich: Rich table
    """
    mode = get_output_mode()

    if not items:
        print("No items in catalog.")
        return

    if mode == "json":
        print(json.dumps([item.to_dict() for item in items], ensure_ascii=False))
    elif mode == "rich":
        _console.print(catalog_table(items))
    else:
        for item in items:
            print(item)

def print_checkouts_result(records: List[CheckoutRecord]) -> None:
    mode = get_output_mode()

    if not records:
        print("You have no checked-out items.")
        return

    if mode == "json":
        print(json.dumps([r.to_dict() for r in records], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📦 My Checkouts", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Loan (days)", justify="right")
        table.add_column("Days Late", justify="right")
        for r in records:
            table.add_row(str(r.item_id), escape(r.item.title), str(r.loan_period_days), str(r.days_late))
        _console.print(table)
    else:
        for r in records:
            print(r)

def print_receipt_result(records: List[CheckoutRecord], total: Decimal) -> None:
    """Print per-item late fees and the total.
    - plain: one line per item followed by 'Total Estimated Fees: $x.xx'
    - json: object with items and total
    - rich: receipt table plus a total panel
    """
    mode = get_output_mode()

    if not records:
        print("You have no checked-out items.")
        return

    if mode == "json":
        payload = {
            "items": [
                dict(r.to_dict(), fee=format_fee(late_fee(r.item.daily_late_fee, r.days_late)))
                for r in records
            ],
            "total": format_fee(total),
        }
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        _console.print(receipt_table(records))
        _console.print(Panel.fit(f"[bold]Total Estimated Fees:[/] ${format_fee(total)}", border_style="green"))
    else:
        for r in records:
            fee = late_fee(r.item.daily_late_fee, r.days_late)
            print(f"{r.item_id} - {r.item.title}: {r.days_late} days late, fee ${format_fee(fee)}")
        print(f"Total Estimated Fees: ${format_fee(total)}")
