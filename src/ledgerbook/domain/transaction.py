"""Transaction domain service."""

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Transaction as TransactionEntity, TransactionSearchFilters
from ledgerbook.domain.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    month_reference_inactive,
    month_reference_not_found,
    transaction_not_found,
)
from ledgerbook.domain.transaction_links import TransactionLinkService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import end_of_day, start_of_day

logger = logging.getLogger(__name__)


def _required_text(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def _as_datetime(value: date | datetime) -> datetime:
    if not isinstance(value, (date, datetime)):
        raise ValidationError(f"Expected a date or datetime, got {value!r}")
    return start_of_day(value)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.links = TransactionLinkService(db)

    def _require_account(self, account_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _require_category(self, category_id: int) -> None:
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    def create_transaction(
        self,
        date_time: date | datetime,
        third_party: str,
        value: Decimal | str | int,
        description: str,
        account_id: int,
        category_id: int,
        month_reference_id: int,
        address: Optional[str] = None,
        invoice_data: Optional[str] = None,
        related_transaction_ids: Iterable[int] = (),
    ) -> TransactionEntity:
        """Create a transaction, optionally linked to existing ones.

        The row and all of its links are written as one unit of work: if any
        related ID cannot be linked, nothing is stored.

        Args:
            date_time: When the transaction happened
            third_party: Counterparty name
            value: Signed amount
            description: Free-text description
            account_id: Owning account
            category_id: Category
            month_reference_id: Period the transaction is filed under (must be active)
            address: Optional address
            invoice_data: Optional invoice payload
            related_transaction_ids: Transactions to link the new one to

        Returns:
            The created transaction

        Raises:
            NotFoundError: If the period, account, category or a related transaction is missing
            InvalidStateError: If the period is inactive
            ValidationError: If the value or a required text field is malformed
        """
        month_ref = self.db.get_month_reference(month_reference_id)
        if month_ref is None:
            raise NotFoundError(month_reference_not_found(month_reference_id))
        if not month_ref.active:
            logger.warning("transaction_rejected_inactive_period month_reference_id=%s", month_reference_id)
            raise InvalidStateError(month_reference_inactive(month_ref.month, month_ref.year))

        self._require_account(account_id)
        self._require_category(category_id)
        amount = parse_amount(value)
        when = _as_datetime(date_time)
        third_party = _required_text(third_party, "Third party")
        related_ids = list(related_transaction_ids or ())

        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                date_time=when,
                third_party=third_party,
                value=amount,
                description=description or "",
                account_id=account_id,
                category_id=category_id,
                month_reference_id=month_reference_id,
                address=address,
                invoice_data=invoice_data,
            )
            for related_id in related_ids:
                self.links.link_transactions(transaction_id, related_id)

        logger.info(
            "transaction_created id=%s account_id=%s value=%s related=%s",
            transaction_id,
            account_id,
            amount,
            len(related_ids),
        )
        return self.require_transaction(transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        month_reference_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions ordered by date, with optional exact-match filters.

        Unlike search, calling this without filters returns every transaction.
        """
        return self.db.list_transactions(
            account_id=account_id,
            category_id=category_id,
            month_reference_id=month_reference_id,
        )

    def update_transaction(
        self,
        transaction_id: int,
        date_time: Optional[date | datetime] = None,
        third_party: Optional[str] = None,
        value: Optional[Decimal | str | int] = None,
        address: Optional[str] = None,
        description: Optional[str] = None,
        invoice_data: Optional[str] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        month_reference_id: Optional[int] = None,
    ) -> TransactionEntity:
        """Update the given fields of a transaction.

        The period's active flag is only checked at creation, so moving a
        transaction to an inactive period is allowed here.

        Raises:
            NotFoundError: If the transaction or a referenced entity does not exist
            ValidationError: If a value is malformed
        """
        self.require_transaction(transaction_id)

        if account_id is not None:
            self._require_account(account_id)
        if category_id is not None:
            self._require_category(category_id)
        if month_reference_id is not None and self.db.get_month_reference(month_reference_id) is None:
            raise NotFoundError(month_reference_not_found(month_reference_id))

        self.db.update_transaction(
            transaction_id=transaction_id,
            date_time=_as_datetime(date_time) if date_time is not None else None,
            third_party=_required_text(third_party, "Third party") if third_party is not None else None,
            value=parse_amount(value) if value is not None else None,
            address=address,
            description=description,
            invoice_data=invoice_data,
            account_id=account_id,
            category_id=category_id,
            month_reference_id=month_reference_id,
        )
        logger.info("transaction_updated id=%s", transaction_id)
        return self.require_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction together with every link touching it.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)

        with self.db.atomic():
            removed = self.links.remove_all_links(transaction_id)
            self.db.delete_transaction(transaction_id)

        logger.info("transaction_deleted id=%s links_removed=%s", transaction_id, removed)

    def move_to_account(self, transaction_id: int, target_account_id: int) -> TransactionEntity:
        """Reassign a transaction to another account.

        Raises:
            NotFoundError: If the transaction or the target account doesn't exist
        """
        self.require_transaction(transaction_id)
        self._require_account(target_account_id)
        self.db.update_transaction(transaction_id=transaction_id, account_id=target_account_id)
        logger.info("transaction_moved id=%s account_id=%s", transaction_id, target_account_id)
        return self.require_transaction(transaction_id)

    def change_category(self, transaction_id: int, category_id: int) -> TransactionEntity:
        """Refile a transaction under another category.

        Raises:
            NotFoundError: If the transaction or the category doesn't exist
        """
        self.require_transaction(transaction_id)
        self._require_category(category_id)
        self.db.update_transaction(transaction_id=transaction_id, category_id=category_id)
        return self.require_transaction(transaction_id)

    # Related transactions
    def link_transaction(self, transaction_id: int, related_transaction_id: int) -> None:
        """Link two transactions (see TransactionLinkService.link_transactions)."""
        self.links.link_transactions(transaction_id, related_transaction_id)

    def unlink_transaction(self, transaction_id: int, related_transaction_id: int) -> None:
        """Unlink two transactions; no-op when they are not linked."""
        self.links.unlink_transactions(transaction_id, related_transaction_id)

    def get_related_transactions(self, transaction_id: int) -> list[TransactionEntity]:
        """Transactions directly linked to the given one."""
        return self.links.get_related_transactions(transaction_id)

    # Search
    def search(self, filters: TransactionSearchFilters) -> list[TransactionEntity]:
        """Find transactions matching every supplied filter.

        Supplying no filter at all returns an empty list rather than the whole
        ledger. ``month_reference_id`` takes precedence over ``month``/``year``.
        A month/year pair with no matching period adds no condition; the other
        filters still apply, and with none of them the result is empty.

        Raises:
            ValidationError: If a value bound cannot be parsed
        """
        if filters.is_empty():
            return []

        month_reference_id = filters.month_reference_id
        if month_reference_id is None and filters.month is not None and filters.year is not None:
            period = self.db.get_month_reference_by_period(filters.month, filters.year)
            if period is not None:
                month_reference_id = period.id
            elif replace(filters, month=None, year=None).is_empty():
                return []

        return self.db.search_transactions(
            account_id=filters.account_id,
            category_id=filters.category_id,
            month_reference_id=month_reference_id,
            start=start_of_day(filters.start) if filters.start is not None else None,
            end=end_of_day(filters.end) if filters.end is not None else None,
            min_value=parse_amount(filters.min_value) if filters.min_value is not None else None,
            max_value=parse_amount(filters.max_value) if filters.max_value is not None else None,
            query=filters.query or None,
            third_party=filters.third_party or None,
        )

    def matches_search(self, transaction_id: int, filters: TransactionSearchFilters) -> bool:
        """Whether a transaction would be returned by search(filters)."""
        return any(txn.id == transaction_id for txn in self.search(filters))

    # Aggregation
    def generate_monthly_summary(self, year: int, month: int) -> dict[int, Decimal]:
        """Raw sum of values per account for the period (month, year).

        Values are summed as stored; no Debit/Credit sign adjustment is applied.
        Returns an empty mapping if the period does not exist.
        """
        period = self.db.get_month_reference_by_period(month, year)
        if period is None:
            return {}
        return self.db.sum_values_by_account(period.id)
