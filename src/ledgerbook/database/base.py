"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Category,
    MonthReference,
    Transaction,
    TransactionLink,
)


class Database(ABC):
    """Abstract database interface for ledgerbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Run the enclosed operations as one unit of work.

        Nested blocks join the outermost one. Everything is committed when the
        outermost block exits normally and rolled back if it raises.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, account_type: AccountType) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        """List accounts ordered by name, optionally filtered by type."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[AccountType] = None,
    ) -> None:
        """Update account fields that are not None."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Get count of transactions associated with an account."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List categories ordered by name."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, name: str) -> None:
        """Rename a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def get_category_transaction_count(self, category_id: int) -> int:
        """Get count of transactions associated with a category."""
        pass

    # Month reference operations
    @abstractmethod
    def create_month_reference(self, month: int, year: int, active: bool = True) -> int:
        """Create a month reference. Returns month reference ID."""
        pass

    @abstractmethod
    def get_month_reference(self, month_reference_id: int) -> Optional[MonthReference]:
        """Get month reference by ID."""
        pass

    @abstractmethod
    def get_month_reference_by_period(self, month: int, year: int) -> Optional[MonthReference]:
        """Get the month reference for a (month, year) pair."""
        pass

    @abstractmethod
    def list_month_references(self, active_only: bool = False) -> list[MonthReference]:
        """List month references ordered by year, then month."""
        pass

    @abstractmethod
    def update_month_reference(
        self,
        month_reference_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update month reference fields that are not None."""
        pass

    @abstractmethod
    def delete_month_reference(self, month_reference_id: int) -> None:
        """Delete a month reference."""
        pass

    @abstractmethod
    def get_month_reference_transaction_count(self, month_reference_id: int) -> int:
        """Get count of transactions associated with a month reference."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date_time: datetime,
        third_party: str,
        value: Decimal,
        description: str,
        account_id: int,
        category_id: int,
        month_reference_id: int,
        address: Optional[str] = None,
        invoice_data: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        month_reference_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions ordered by date, optionally filtered."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        date_time: Optional[datetime] = None,
        third_party: Optional[str] = None,
        value: Optional[Decimal] = None,
        address: Optional[str] = None,
        description: Optional[str] = None,
        invoice_data: Optional[str] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        month_reference_id: Optional[int] = None,
    ) -> None:
        """Update transaction fields that are not None."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction row."""
        pass

    @abstractmethod
    def search_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        month_reference_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        min_value: Optional[Decimal] = None,
        max_value: Optional[Decimal] = None,
        query: Optional[str] = None,
        third_party: Optional[str] = None,
    ) -> list[Transaction]:
        """Return transactions matching every given filter, ordered by date.

        ``query`` matches description, third party or address, case-insensitively.
        All bounds are inclusive. Callers decide what an empty filter set means.
        """
        pass

    # Aggregations
    @abstractmethod
    def sum_transaction_values(
        self,
        account_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Decimal:
        """Raw sum of values for an account, optionally within [start, end]."""
        pass

    @abstractmethod
    def sum_values_by_account(self, month_reference_id: int) -> dict[int, Decimal]:
        """Raw sum of values per account for one month reference."""
        pass

    # Transaction relation operations
    @abstractmethod
    def link_exists(self, parent_transaction_id: int, related_transaction_id: int) -> bool:
        """Check whether the directed edge (parent, related) is stored."""
        pass

    @abstractmethod
    def create_link(self, parent_transaction_id: int, related_transaction_id: int) -> int:
        """Store the directed edge (parent, related). Returns relation ID."""
        pass

    @abstractmethod
    def delete_link(self, parent_transaction_id: int, related_transaction_id: int) -> int:
        """Delete the directed edge (parent, related). Returns rows removed."""
        pass

    @abstractmethod
    def delete_links_for_transaction(self, transaction_id: int) -> int:
        """Delete every edge where the transaction is either endpoint."""
        pass

    @abstractmethod
    def list_links(self, transaction_id: int) -> list[TransactionLink]:
        """List edges whose parent is the transaction."""
        pass

    @abstractmethod
    def get_related_transactions(self, transaction_id: int) -> list[Transaction]:
        """Transactions one edge away from the given one, ordered by date."""
        pass
