import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, InvalidResponse, Prompt, PromptBase
from rich.table import Table

from library_checkout.catalog import CatalogStore
from library_checkout.exceptions import AlreadyCheckedOutError, ItemNotFoundError, NotCheckedOutError
from library_checkout.fees import format_fee, total_late_fees
from library_checkout.item import LibraryItem
from library_checkout.ledger import CheckoutLedger
from library_checkout.ui_helpers import catalog_table, receipt_table

logger = logging.getLogger(__name__)


class DecimalPrompt(PromptBase[Decimal]):
    """Prompt that re-asks until a finite decimal amount is entered."""

    response_type = Decimal
    validate_error_message = "[prompt.invalid]Please enter a valid amount, e.g. 0.50"

    def process_response(self, value: str) -> Decimal:
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidResponse(self.validate_error_message)
        if not amount.is_finite():
            raise InvalidResponse(self.validate_error_message)
        return amount


class CheckoutSession:
    """Interactive menu over one catalog and one checkout ledger."""

    MENU_ITEMS = [
        ("1", "Add a library item", "➕"),
        ("2", "View available items", "📚"),
        ("3", "Check out an item", "📤"),
        ("4", "Return an item", "📥"),
        ("5", "View my checkout receipt", "🧾"),
        ("6", "Save my checkout list", "💾"),
        ("7", "Load my previous checkout list", "📂"),
        ("8", "Exit", "🚪"),
    ]
    EXIT_CHOICE = "8"

    def __init__(self, catalog: CatalogStore, ledger: CheckoutLedger, console: Optional[Console] = None,
                 stream: Optional[TextIO] = None, app_name: str = "Library Checkout System") -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.console = console or Console()
        # Optional input source for the prompts; stdin when None.
        self.stream = stream
        self.app_name = app_name
        self._actions = {
            "1": self.add_item,
            "2": self.view_catalog,
            "3": self.checkout_item,
            "4": self.return_item,
            "5": self.print_receipt,
            "6": self.save_checkouts,
            "7": self.load_checkouts,
        }

    # ------------------------- Prompts ------------------------- #
    def _ask_text(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console, stream=self.stream)

    def _ask_int(self, prompt: str) -> int:
        return IntPrompt.ask(prompt, console=self.console, stream=self.stream)

    def _ask_amount(self, prompt: str) -> Decimal:
        return DecimalPrompt.ask(prompt, console=self.console, stream=self.stream)

    # ------------------------- Menu loop ------------------------- #
    def start(self) -> None:
        """Load the catalog and prepare the console."""
        self.console.set_window_title(self.app_name)
        self.catalog.load()
        if not self.catalog.file_found:
            self.console.print("[yellow]Catalog file not found. Creating empty catalog.[/]")

    def render_menu(self) -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in self.MENU_ITEMS:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

        self.console.print(Panel(
            table,
            title=self.app_name,
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        ))

    def pause(self) -> None:
        """Hold the action's output on screen until Enter is pressed."""
        Prompt.ask("\n[dim]Press Enter to continue...[/]", default="", show_default=False,
                   console=self.console, stream=self.stream)

    def handle(self, choice: str) -> bool:
        """Run one menu action. Returns False when the user chose to exit."""
        if choice == self.EXIT_CHOICE:
            return False
        action = self._actions.get(choice)
        if action is None:
            self.console.print("[yellow]Invalid choice. Please try again.[/]")
        else:
            action()
        return True

    def run(self) -> None:
        self.start()
        running = True
        while running:
            self.console.clear()
            self.render_menu()
            try:
                choice = self._ask_text("Choose an option").strip()
                running = self.handle(choice)
                if running:
                    self.pause()
            except (EOFError, KeyboardInterrupt):
                logger.debug("Input closed, leaving the menu")
                running = False
            self.console.print()
        self.console.print("[green]Goodbye![/]")

    # ------------------------- Actions ------------------------- #
    def add_item(self) -> None:
        self.console.rule("Add New Library Item")
        item_id = self._ask_int("Enter ID")
        title = self._ask_text("Enter Title")
        media_type = self._ask_text("Enter Type (Book/DVD)")
        fee = self._ask_amount("Enter Daily Late Fee")

        item = LibraryItem(id=item_id, title=title, media_type=media_type, daily_late_fee=fee)
        self.catalog.add(item)
        self.console.print(f"[green]✅ Item added and saved:[/] [bold]{escape(item.title)}[/]")

    def view_catalog(self) -> None:
        items = self.catalog.list_all()
        if not items:
            self.console.print("[yellow]The catalog is empty.[/]")
            return
        self.console.print(catalog_table(items))
        self.console.print(f"[dim]📊 {len(items)} items in catalog[/]")

    def checkout_item(self) -> None:
        self.console.rule("Check Out an Item")
        item_id = self._ask_int("Enter the ID of the item")
        try:
            record = self.ledger.checkout_by_id(item_id)
        except ItemNotFoundError:
            self.console.print("[bold red]Item does not exist![/]")
            return
        except AlreadyCheckedOutError:
            self.console.print("[yellow]Item is already checked out![/]")
            return
        self.console.print(
            f"[green]✅ Item checked out successfully![/] "
            f"[bold]{escape(record.item.title)}[/] is due back in {record.loan_period_days} days."
        )

    def return_item(self) -> None:
        self.console.rule("Return Item")
        item_id = self._ask_int("Enter the ID of the item to return")
        try:
            self.ledger.return_item(item_id)
        except NotCheckedOutError:
            self.console.print("[yellow]That item is not checked out.[/]")
            return
        self.console.print("[green]✅ Item returned successfully.[/]")

    def print_receipt(self) -> None:
        self.console.rule("My Receipt")
        if not len(self.ledger):
            self.console.print("[yellow]You have no checked-out items.[/]")
            return

        days_late = self._ask_int("Enter number of days late (apply to all items)")
        self.ledger.apply_late_days(days_late)
        records = self.ledger.list_all()
        self.console.print(receipt_table(records))
        self.console.print(f"[bold]Total Estimated Fees:[/] ${format_fee(total_late_fees(records))}")

    def save_checkouts(self) -> None:
        self.ledger.save()
        self.console.print(f"[green]💾 Checkout list saved.[/] [dim]({len(self.ledger)} items)[/]")

    def load_checkouts(self) -> None:
        self.ledger.load()
        if not self.ledger.file_found:
            self.console.print("[yellow]No checkout file found.[/]")
            return
        self.console.print(f"[green]📂 Checkout list loaded![/] [dim]({len(self.ledger)} items)[/]")
