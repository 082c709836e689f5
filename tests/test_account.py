"""Tests for accounts: service behavior and CLI commands."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledgerbook.cli.main import cli
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DependencyError, NotFoundError, ValidationError


class TestAccountService:
    def test_create_account(self, account_service):
        account = account_service.create_account(name="  Checking ", account_type="debit")

        assert account.id is not None
        assert account.name == "Checking"
        assert account.account_type == AccountType.DEBIT
        assert isinstance(account.created_at, datetime)

    def test_create_account_rejects_blank_name(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account(name="   ", account_type="Debit")

    def test_create_account_rejects_unknown_type(self, account_service):
        with pytest.raises(ValidationError, match="Unknown account type"):
            account_service.create_account(name="Savings", account_type="Savings")

    def test_list_accounts_by_type(self, account_service, debit_account, credit_account):
        assert [a.name for a in account_service.list_accounts()] == ["Checking", "Visa"]
        assert account_service.list_debit_accounts() == [debit_account]
        assert account_service.list_credit_accounts() == [credit_account]
        assert account_service.list_accounts_by_type("credit") == [credit_account]

    def test_update_account(self, account_service, debit_account):
        updated = account_service.update_account(debit_account.id, name="Main", account_type="Credit")

        assert updated.name == "Main"
        assert updated.account_type == AccountType.CREDIT

    def test_update_missing_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.update_account(999, name="Nope")

    def test_delete_empty_account(self, account_service, debit_account):
        assert account_service.can_delete_account(debit_account.id) == (True, None)

        account_service.delete_account(debit_account.id)

        assert account_service.get_account(debit_account.id) is None

    def test_delete_account_with_transactions_is_blocked(self, account_service, make_transaction, debit_account):
        make_transaction()

        can_delete, reason = account_service.can_delete_account(debit_account.id)
        assert can_delete is False
        assert "1 transaction" in reason

        with pytest.raises(DependencyError, match="reassign or delete"):
            account_service.delete_account(debit_account.id)
        assert account_service.get_account(debit_account.id) is not None

    def test_delete_missing_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.delete_account(42)


def test_account_create(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Checking", "--type", "Debit"]
    )

    assert result.exit_code == 0
    assert "Created account 'Checking' (Debit, ID: 1)" in result.output


def test_account_create_requires_type(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "create", "Checking"])

    assert result.exit_code != 0


def test_account_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_balances(cli_runner, temp_db, make_transaction):
    make_transaction("100.00")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list", "--balances"])

    assert result.exit_code == 0
    assert "Checking" in result.output
    assert "Balance: -100.00" in result.output


def test_account_update_by_name(cli_runner, temp_db, debit_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "update", "Checking", "--name", "Main Checking"]
    )

    assert result.exit_code == 0
    assert "Updated account 'Main Checking' (Debit)" in result.output


def test_account_update_unknown(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "update", "Nope", "--name", "X"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_account_delete_blocked_by_transactions(cli_runner, temp_db, make_transaction):
    make_transaction()

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Checking", "--yes"]
    )

    assert result.exit_code == 1
    assert "Cannot delete account" in result.output


def test_account_delete(cli_runner, temp_db, debit_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Checking", "--yes"]
    )

    assert result.exit_code == 0
    assert "Deleted account 'Checking'" in result.output


def test_account_delete_cancelled(cli_runner, temp_db, debit_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Checking"], input="n\n"
    )

    assert result.exit_code == 0
    assert "Deletion cancelled" in result.output


def test_account_balance_and_summary(cli_runner, temp_db, credit_account, make_transaction):
    make_transaction("40.00", account_id=credit_account.id)
    make_transaction("2.50", account_id=credit_account.id)

    balance = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "balance", "Visa"])
    assert balance.exit_code == 0
    assert "Visa: 42.50" in balance.output

    summary = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "summary", "Visa", "--month", "3", "--year", "2024"],
    )
    assert summary.exit_code == 0
    assert "Transactions:  2" in summary.output
    assert "2024-03 total: 42.50" in summary.output


def test_account_summary_needs_month_and_year(cli_runner, temp_db, debit_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "summary", "Checking", "--month", "3"]
    )

    assert result.exit_code == 1
    assert "--month and --year" in result.output
