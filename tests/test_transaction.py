"""Tests for transactions: service behavior and CLI commands."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerbook.cli.main import cli
from ledgerbook.domain.errors import InvalidStateError, NotFoundError, ValidationError


class TestCreateTransaction:
    def test_create_transaction(self, make_transaction, debit_account, groceries, march_2024):
        txn = make_transaction("-12.345", description="Milk", address="Main St 1", invoice_data="INV-9")

        assert txn.id is not None
        assert txn.value == Decimal("-12.34")
        assert txn.description == "Milk"
        assert txn.address == "Main St 1"
        assert txn.invoice_data == "INV-9"
        assert txn.account_id == debit_account.id
        assert txn.category_id == groceries.id
        assert txn.month_reference_id == march_2024.id
        assert txn.date_time == datetime(2024, 3, 5, 12, 0)

    def test_value_is_stored_with_two_places(self, make_transaction):
        txn = make_transaction("-50")

        assert txn.value == Decimal("-50.00")
        assert str(txn.value) == "-50.00"

    def test_bare_date_becomes_midnight(self, make_transaction):
        txn = make_transaction(date_time=date(2024, 3, 9))

        assert txn.date_time == datetime(2024, 3, 9, 0, 0)

    def test_inactive_period_is_rejected(self, make_transaction, month_reference_service, transaction_service):
        closed = month_reference_service.create_month_reference(2, 2024, active=False)

        with pytest.raises(InvalidStateError, match="inactive month reference 2024-02"):
            make_transaction(month_reference_id=closed.id)
        assert transaction_service.list_transactions() == []

    def test_missing_period_is_rejected(self, make_transaction):
        with pytest.raises(NotFoundError, match="Month reference 404 not found"):
            make_transaction(month_reference_id=404)

    def test_missing_account_is_rejected(self, make_transaction):
        with pytest.raises(NotFoundError, match="Account 99 not found"):
            make_transaction(account_id=99)

    def test_missing_category_is_rejected(self, make_transaction):
        with pytest.raises(NotFoundError, match="Category 99 not found"):
            make_transaction(category_id=99)

    def test_blank_third_party_is_rejected(self, make_transaction):
        with pytest.raises(ValidationError):
            make_transaction(third_party="  ")

    def test_unparsable_value_is_rejected(self, make_transaction):
        with pytest.raises(ValidationError):
            make_transaction(value="lots")

    def test_create_with_related_links_both_ways(self, make_transaction, transaction_service):
        first = make_transaction()
        second = make_transaction(related_transaction_ids=[first.id])

        assert transaction_service.get_related_transactions(first.id) == [second]
        assert transaction_service.get_related_transactions(second.id) == [first]

    def test_create_with_missing_related_stores_nothing(self, make_transaction, transaction_service):
        first = make_transaction()

        with pytest.raises(NotFoundError, match="Transaction 999 not found"):
            make_transaction(related_transaction_ids=[first.id, 999])

        assert transaction_service.list_transactions() == [first]
        assert transaction_service.get_related_transactions(first.id) == []


class TestUpdateTransaction:
    def test_update_fields(self, make_transaction, transaction_service, salary):
        txn = make_transaction()

        updated = transaction_service.update_transaction(
            txn.id, value="-20", description="Bread", category_id=salary.id
        )

        assert updated.value == Decimal("-20.00")
        assert updated.description == "Bread"
        assert updated.category_id == salary.id
        assert updated.third_party == txn.third_party

    def test_update_into_inactive_period_is_allowed(self, make_transaction, transaction_service, month_reference_service):
        txn = make_transaction()
        closed = month_reference_service.create_month_reference(2, 2024, active=False)

        updated = transaction_service.update_transaction(txn.id, month_reference_id=closed.id)

        assert updated.month_reference_id == closed.id

    def test_update_missing(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.update_transaction(5, description="x")

    def test_move_to_account(self, make_transaction, transaction_service, credit_account):
        txn = make_transaction()

        moved = transaction_service.move_to_account(txn.id, credit_account.id)

        assert moved.account_id == credit_account.id

    def test_move_to_missing_account(self, make_transaction, transaction_service):
        txn = make_transaction()

        with pytest.raises(NotFoundError):
            transaction_service.move_to_account(txn.id, 1234)

    def test_change_category(self, make_transaction, transaction_service, salary):
        txn = make_transaction()

        assert transaction_service.change_category(txn.id, salary.id).category_id == salary.id


class TestDeleteTransaction:
    def test_delete_removes_links(self, make_transaction, transaction_service):
        a = make_transaction()
        b = make_transaction(related_transaction_ids=[a.id])

        transaction_service.delete_transaction(a.id)

        assert transaction_service.get_transaction(a.id) is None
        assert transaction_service.get_related_transactions(b.id) == []
        assert transaction_service.links.list_links(b.id) == []

    def test_delete_missing(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.delete_transaction(1)


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_cli_add_transaction(cli_runner, temp_db, debit_account, groceries, march_2024):
    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "add",
        "--account", "Checking",
        "--category", "Groceries",
        "--date", "2024-03-05 14:30",
        "--value", "-50.00",
        "--third-party", "Corner Shop",
    )

    assert result.exit_code == 0, result.output
    assert "Created transaction 1" in result.output
    assert "Date: 2024-03-05 14:30" in result.output
    assert "Value: -50.00" in result.output


def test_cli_add_uses_period_from_month_and_year(cli_runner, temp_db, debit_account, groceries, march_2024, month_reference_service):
    april = month_reference_service.create_month_reference(4, 2024)

    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "add",
        "--account", str(debit_account.id),
        "--category", str(groceries.id),
        "--date", "2024-03-31",
        "--value", "5",
        "--third-party", "Bakery",
        "--month", "4",
        "--year", "2024",
    )

    assert result.exit_code == 0, result.output
    show = _invoke(cli_runner, temp_db, "transaction", "show", "1")
    assert f"Period: {april.label}" in show.output


def test_cli_add_without_period(cli_runner, temp_db, debit_account, groceries):
    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "add",
        "--account", "Checking",
        "--category", "Groceries",
        "--date", "2024-07-01",
        "--value", "5",
        "--third-party", "Bakery",
    )

    assert result.exit_code == 1
    assert "No month reference for 2024-07" in result.output


def test_cli_add_inactive_period(cli_runner, temp_db, debit_account, groceries, month_reference_service):
    month_reference_service.create_month_reference(3, 2024, active=False)

    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "add",
        "--account", "Checking",
        "--category", "Groceries",
        "--date", "2024-03-01",
        "--value", "5",
        "--third-party", "Bakery",
    )

    assert result.exit_code == 1
    assert "inactive month reference 2024-03" in result.output


def test_cli_add_invalid_value(cli_runner, temp_db, debit_account, groceries, march_2024):
    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "add",
        "--account", "Checking",
        "--category", "Groceries",
        "--date", "2024-03-01",
        "--value", "abc",
        "--third-party", "Bakery",
    )

    assert result.exit_code == 1
    assert "Could not parse amount" in result.output


def test_cli_show_and_list(cli_runner, temp_db, make_transaction):
    make_transaction("-7.25", description="Apples", third_party="Farm Stand")

    show = _invoke(cli_runner, temp_db, "transaction", "show", "1")
    assert show.exit_code == 0
    assert "Third party: Farm Stand" in show.output
    assert "Description: Apples" in show.output
    assert "Account: Checking (ID: 1)" in show.output

    listed = _invoke(cli_runner, temp_db, "transaction", "list", "--account", "Checking")
    assert listed.exit_code == 0
    assert "Found 1 transaction(s)" in listed.output
    assert "Farm Stand" in listed.output


def test_cli_show_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "transaction", "show", "12")

    assert result.exit_code == 1
    assert "Transaction 12 not found" in result.output


def test_cli_update_and_move(cli_runner, temp_db, make_transaction, credit_account):
    make_transaction()

    updated = _invoke(cli_runner, temp_db, "transaction", "update", "1", "--value", "-75.00")
    assert updated.exit_code == 0
    assert "Updated transaction 1" in updated.output

    moved = _invoke(cli_runner, temp_db, "transaction", "move", "1", "Visa")
    assert moved.exit_code == 0
    assert f"Moved transaction 1 to account {credit_account.id}" in moved.output

    show = _invoke(cli_runner, temp_db, "transaction", "show", "1")
    assert "Value: -75.00" in show.output
    assert "Account: Visa" in show.output


def test_cli_delete(cli_runner, temp_db, make_transaction):
    make_transaction()

    result = _invoke(cli_runner, temp_db, "transaction", "delete", "1", "--yes")

    assert result.exit_code == 0
    assert "Deleted transaction 1" in result.output
    listed = _invoke(cli_runner, temp_db, "transaction", "list")
    assert "No transactions found" in listed.output


def test_cli_delete_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "transaction", "delete", "3", "--yes")

    assert result.exit_code == 1
    assert "Transaction 3 not found" in result.output
