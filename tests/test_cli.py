import json

from typer.testing import CliRunner
from unittest.mock import patch

from library_checkout.main import app

runner = CliRunner()


def test_list_no_items():
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No items in catalog." in result.stdout


def test_list_items(catalog_file):
    result = runner.invoke(app, ["--catalog", str(catalog_file), "list"])
    assert result.exit_code == 0
    assert "1 - Dune (Book) $0.50/day" in result.stdout
    assert "2 - Matrix (DVD) $1.00/day" in result.stdout


def test_list_json(catalog_file):
    result = runner.invoke(app, ["-o", "json", "--catalog", str(catalog_file), "list"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload[0] == {"id": 1, "title": "Dune", "media_type": "Book", "daily_late_fee": "0.50"}


def test_add_item(isolated_settings, tmp_path):
    result = runner.invoke(app, ["add", "3", "Heat", "DVD", "1.25"])
    assert result.exit_code == 0
    assert "Item added and saved: 3 - Heat" in result.stdout
    assert (tmp_path / "catalog.txt").read_text(encoding="utf-8") == "3,Heat,DVD,1.25\n"


def test_add_item_bad_fee():
    result = runner.invoke(app, ["add", "3", "Heat", "DVD", "cheap"])
    assert result.exit_code == 1
    assert "invalid late fee" in result.stdout


def test_checkout_saves_ledger(catalog_file, checkout_file):
    result = runner.invoke(app, ["--catalog", str(catalog_file), "checkout", "2"])
    assert result.exit_code == 0
    assert "Checked out: Matrix (3 days)" in result.stdout
    assert checkout_file.read_text(encoding="utf-8") == "2,3,0\n"


def test_checkout_twice_fails(catalog_file, checkout_file):
    runner.invoke(app, ["--catalog", str(catalog_file), "checkout", "1"])
    result = runner.invoke(app, ["--catalog", str(catalog_file), "checkout", "1"])
    assert result.exit_code == 1
    assert "Item 1 is already checked out." in result.stdout
    assert checkout_file.read_text(encoding="utf-8") == "1,7,0\n"


def test_checkout_unknown_item(catalog_file):
    result = runner.invoke(app, ["--catalog", str(catalog_file), "checkout", "99"])
    assert result.exit_code == 1
    assert "Item 99 does not exist." in result.stdout


def test_return(catalog_file, checkout_file):
    checkout_file.write_text("1,7,0\n2,3,0\n", encoding="utf-8")
    result = runner.invoke(app, ["--catalog", str(catalog_file), "return", "2"])
    assert result.exit_code == 0
    assert "Returned: Matrix" in result.stdout
    assert checkout_file.read_text(encoding="utf-8") == "1,7,0\n"


def test_return_not_checked_out(catalog_file):
    result = runner.invoke(app, ["--catalog", str(catalog_file), "return", "1"])
    assert result.exit_code == 1
    assert "Item 1 is not checked out." in result.stdout


def test_checkouts(catalog_file, checkout_file):
    checkout_file.write_text("2,3,1\n", encoding="utf-8")
    result = runner.invoke(app, ["--catalog", str(catalog_file), "checkouts"])
    assert result.exit_code == 0
    assert "2 - Matrix (DVD) loan 3 days, 1 days late" in result.stdout


def test_receipt_does_not_modify_file(catalog_file, checkout_file):
    checkout_file.write_text("1,7,0\n2,3,0\n", encoding="utf-8")
    result = runner.invoke(app, ["--catalog", str(catalog_file), "receipt", "--days", "5"])
    assert result.exit_code == 0
    assert "1 - Dune: 5 days late, fee $2.50" in result.stdout
    assert "Total Estimated Fees: $7.50" in result.stdout
    assert checkout_file.read_text(encoding="utf-8") == "1,7,0\n2,3,0\n"


def test_receipt_json(catalog_file, checkout_file):
    checkout_file.write_text("2,3,0\n", encoding="utf-8")
    result = runner.invoke(app, ["-o", "json", "--catalog", str(catalog_file), "receipt", "-d", "2"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total"] == "2.00"
    assert payload["items"][0]["fee"] == "2.00"


def test_receipt_empty():
    result = runner.invoke(app, ["receipt"])
    assert result.exit_code == 0
    assert "You have no checked-out items." in result.stdout


@patch("library_checkout.main.run_menu")
def test_no_command_starts_menu(mock_run_menu):
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    mock_run_menu.assert_called_once()
