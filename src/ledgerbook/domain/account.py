"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Account as AccountEntity, AccountSummary, AccountType
from ledgerbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    account_not_found,
    delete_blocked,
)
from ledgerbook.utils.date_parser import month_bounds

logger = logging.getLogger(__name__)


def parse_account_type(value: AccountType | str) -> AccountType:
    """Resolve an account type from an enum member or a case-insensitive name."""
    if isinstance(value, AccountType):
        return value
    for member in AccountType:
        if str(value).strip().lower() == member.value.lower():
            return member
    raise ValidationError(
        f"Unknown account type '{value}'. Expected one of: "
        + ", ".join(member.value for member in AccountType)
    )


def _clean_name(name: str) -> str:
    if name is None or not name.strip():
        raise ValidationError("Account name must not be empty")
    return name.strip()


class AccountService:
    """Service for managing accounts and computing their balances."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, account_type: AccountType | str) -> AccountEntity:
        """Create a new account.

        Args:
            name: Account name
            account_type: Debit or Credit

        Returns:
            The created account

        Raises:
            ValidationError: If the name is blank or the type is unknown
        """
        account_id = self.db.create_account(
            name=_clean_name(name), account_type=parse_account_type(account_type)
        )
        logger.info("account_created id=%s type=%s", account_id, account_type)
        return self.require_account(account_id)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts ordered by name."""
        return self.db.list_accounts()

    def list_accounts_by_type(self, account_type: AccountType | str) -> list[AccountEntity]:
        """List accounts of one type ordered by name."""
        return self.db.list_accounts(account_type=parse_account_type(account_type))

    def list_debit_accounts(self) -> list[AccountEntity]:
        return self.list_accounts_by_type(AccountType.DEBIT)

    def list_credit_accounts(self) -> list[AccountEntity]:
        return self.list_accounts_by_type(AccountType.CREDIT)

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[AccountType | str] = None,
    ) -> AccountEntity:
        """Update an account's name and/or type.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the new name is blank or the type is unknown
        """
        self.require_account(account_id)
        self.db.update_account(
            account_id=account_id,
            name=_clean_name(name) if name is not None else None,
            account_type=parse_account_type(account_type) if account_type is not None else None,
        )
        logger.info("account_updated id=%s", account_id)
        return self.require_account(account_id)

    def can_delete_account(self, account_id: int) -> tuple[bool, Optional[str]]:
        """Report whether an account can be deleted and, if not, why."""
        if self.db.get_account(account_id) is None:
            return False, account_not_found(account_id)
        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            return False, delete_blocked("account", account_id, transaction_count)
        return True, None

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If transactions still reference the account
        """
        self.require_account(account_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            logger.warning(
                "account_delete_blocked id=%s transactions=%s", account_id, transaction_count
            )
            raise DependencyError(delete_blocked("account", account_id, transaction_count))

        self.db.delete_account(account_id)
        logger.info("account_deleted id=%s", account_id)

    # Aggregations
    def calculate_balance(self, account_id: int) -> Decimal:
        """Return the displayed balance of an account.

        The raw sum of the account's transaction values is negated for Debit
        accounts (spending reduces them) and returned as-is for Credit accounts.
        """
        account = self.require_account(account_id)
        total = self.db.sum_transaction_values(account_id)
        if account.account_type == AccountType.DEBIT:
            return -total
        return total

    def get_total_for_month(self, account_id: int, month: int, year: int) -> Decimal:
        """Raw sum of an account's values dated inside the given calendar month.

        Unlike calculate_balance, no sign adjustment is applied.
        """
        self.require_account(account_id)
        start, end = month_bounds(month, year)
        return self.db.sum_transaction_values(account_id, start=start, end=end)

    def get_account_summary(
        self, account_id: int, month: Optional[int] = None, year: Optional[int] = None
    ) -> AccountSummary:
        """Combine balance, transaction count and (optionally) a monthly total."""
        account = self.require_account(account_id)
        monthly_total = Decimal("0.00")
        if month is not None and year is not None:
            monthly_total = self.get_total_for_month(account_id, month, year)

        return AccountSummary(
            account=account,
            total_transactions=self.db.get_account_transaction_count(account_id),
            current_balance=self.calculate_balance(account_id),
            monthly_total=monthly_total,
        )

    def get_all_accounts_summary(
        self, month: Optional[int] = None, year: Optional[int] = None
    ) -> list[AccountSummary]:
        """Summaries for every account, ordered by account name."""
        return [
            self.get_account_summary(account.id, month=month, year=year)
            for account in self.list_accounts()
        ]

    def list_accounts_with_balance(self) -> list[tuple[AccountEntity, Decimal]]:
        """Every account paired with its displayed balance."""
        return [(account, self.calculate_balance(account.id)) for account in self.list_accounts()]
