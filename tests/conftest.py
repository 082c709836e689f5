"""Shared pytest fixtures for ledgerbook tests."""

import os
import tempfile
from datetime import datetime

import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.month_reference import MonthReferenceService
from ledgerbook.domain.summary import SummaryService
from ledgerbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that open their own connection
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def month_reference_service(temp_db):
    """Create a MonthReferenceService with a temporary database."""
    return MonthReferenceService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def debit_account(account_service):
    """A Debit account named 'Checking'."""
    return account_service.create_account(name="Checking", account_type="Debit")


@pytest.fixture
def credit_account(account_service):
    """A Credit account named 'Visa'."""
    return account_service.create_account(name="Visa", account_type="Credit")


@pytest.fixture
def groceries(category_service):
    return category_service.create_category(name="Groceries")


@pytest.fixture
def salary(category_service):
    return category_service.create_category(name="Salary")


@pytest.fixture
def march_2024(month_reference_service):
    """Active period for March 2024."""
    return month_reference_service.create_month_reference(month=3, year=2024)


@pytest.fixture
def make_transaction(transaction_service, debit_account, groceries, march_2024):
    """Factory creating transactions with sensible defaults."""

    def _make(value="-10.00", **overrides):
        fields = dict(
            date_time=datetime(2024, 3, 5, 12, 0),
            third_party="Corner Shop",
            value=value,
            description="",
            account_id=debit_account.id,
            category_id=groceries.id,
            month_reference_id=march_2024.id,
        )
        fields.update(overrides)
        return transaction_service.create_transaction(**fields)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
