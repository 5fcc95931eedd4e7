import io
from decimal import Decimal

import pytest
from rich.console import Console

from library_checkout.catalog import CatalogStore
from library_checkout.config import settings
from library_checkout.item import LibraryItem
from library_checkout.ledger import CheckoutLedger
from library_checkout.session import CheckoutSession

SAMPLE_CATALOG = "1,Dune,Book,0.50\n2,Matrix,DVD,1.00\n"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    # Point every test at its own files so nothing touches the working directory
    monkeypatch.setattr(settings, "catalog_file", str(tmp_path / "catalog.txt"))
    monkeypatch.setattr(settings, "checkout_file", str(tmp_path / "myCheckouts.txt"))
    monkeypatch.setattr(settings, "output_mode", "plain")
    yield settings


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.txt"
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path


@pytest.fixture
def checkout_file(tmp_path):
    return tmp_path / "myCheckouts.txt"


@pytest.fixture
def catalog(catalog_file):
    store = CatalogStore(catalog_file)
    store.load()
    return store


@pytest.fixture
def ledger(catalog, checkout_file):
    return CheckoutLedger(catalog, checkout_file)


@pytest.fixture
def dune():
    return LibraryItem(1, "Dune", "Book", Decimal("0.50"))


class ScriptedInput:
    """Feeds prompt answers line by line and raises EOFError when they run out, like stdin."""

    def __init__(self, script: str) -> None:
        self._stream = io.StringIO(script)

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError
        return line


@pytest.fixture
def make_session():
    """Build a CheckoutSession driven by a script; returns the session and its captured output."""
    def _make(catalog, ledger, script="", force_terminal=False):
        out = io.StringIO()
        console = Console(file=out, width=120, force_terminal=force_terminal)
        session = CheckoutSession(catalog, ledger, console=console, stream=ScriptedInput(script))
        return session, out
    return _make
