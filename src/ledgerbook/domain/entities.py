"""Domain model entities for ledgerbook.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; the ORM models stay
inside the database package.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account; decides the sign of the displayed balance."""

    DEBIT = "Debit"
    CREDIT = "Credit"


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    account_type: AccountType
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Category:
    """Transaction category domain entity."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MonthReference:
    """Accounting period (month + year) that transactions belong to."""

    id: int
    month: int
    year: int
    active: bool
    created_at: datetime
    updated_at: datetime

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    date_time: datetime
    third_party: str
    value: Decimal
    address: Optional[str]
    description: str
    invoice_data: Optional[str]
    account_id: int
    category_id: int
    month_reference_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TransactionLink:
    """One directed row of the symmetric transaction relation."""

    id: int
    parent_transaction_id: int
    related_transaction_id: int
    created_at: datetime


@dataclass(frozen=True)
class TransactionSearchFilters:
    """Optional, conjunctive filters for transaction search.

    ``start`` and ``end`` accept either a date or a datetime; a bare date as
    ``end`` covers the whole day.
    """

    account_id: Optional[int] = None
    category_id: Optional[int] = None
    month_reference_id: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    start: Optional[date | datetime] = None
    end: Optional[date | datetime] = None
    min_value: Optional[Decimal] = None
    max_value: Optional[Decimal] = None
    query: Optional[str] = None
    third_party: Optional[str] = None

    def is_empty(self) -> bool:
        """Return True when no filter at all was supplied."""
        has_period = self.month_reference_id is not None or (
            self.month is not None and self.year is not None
        )
        return not (
            has_period
            or self.account_id is not None
            or self.category_id is not None
            or self.start is not None
            or self.end is not None
            or self.min_value is not None
            or self.max_value is not None
            or self.query
            or self.third_party
        )


@dataclass(frozen=True)
class AccountSummary:
    """Balance, transaction count and monthly total for one account."""

    account: Account
    total_transactions: int
    current_balance: Decimal
    monthly_total: Decimal


@dataclass(frozen=True)
class CategoryExpense:
    """Total of one category inside one account for a period."""

    category_id: int
    category_name: str
    total: Decimal
    transactions: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class AccountExpense:
    """Per-account section of a monthly expense report."""

    account: Account
    total: Decimal
    categories: tuple[CategoryExpense, ...] = ()


@dataclass(frozen=True)
class MonthlyExpenseReport:
    """Transactions of one period grouped by account, then by category."""

    month: int
    year: int
    month_reference_id: Optional[int]
    accounts: tuple[AccountExpense, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return sum((section.total for section in self.accounts), Decimal("0"))
