"""Month reference domain service."""

import logging
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import MonthReference, Transaction
from ledgerbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    duplicate_month_reference,
    month_reference_not_found,
)
from ledgerbook.utils.date_parser import validate_month

logger = logging.getLogger(__name__)


def _validate_year(year: int) -> int:
    if not isinstance(year, int) or isinstance(year, bool) or not 1 <= year <= 9999:
        raise ValidationError(f"Year must be between 1 and 9999, got {year!r}")
    return year


class MonthReferenceService:
    """Service for managing monthly reference periods."""

    def __init__(self, db: Database):
        """Initialize month reference service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_month_reference(self, month: int, year: int, active: Optional[bool] = None) -> MonthReference:
        """Create a period; ``active`` defaults to True when omitted.

        Raises:
            ValidationError: If month or year is out of range
            ConflictError: If the (month, year) pair already exists
        """
        validate_month(month)
        _validate_year(year)
        if self.db.get_month_reference_by_period(month, year) is not None:
            raise ConflictError(duplicate_month_reference(month, year))

        month_reference_id = self.db.create_month_reference(
            month=month, year=year, active=True if active is None else active
        )
        logger.info("month_reference_created id=%s period=%04d-%02d", month_reference_id, year, month)
        return self.require_month_reference(month_reference_id)

    def get_month_reference(self, month_reference_id: int) -> Optional[MonthReference]:
        return self.db.get_month_reference(month_reference_id)

    def require_month_reference(self, month_reference_id: int) -> MonthReference:
        """Get month reference by ID or raise NotFoundError."""
        month_ref = self.db.get_month_reference(month_reference_id)
        if month_ref is None:
            raise NotFoundError(month_reference_not_found(month_reference_id))
        return month_ref

    def list_month_references(self) -> list[MonthReference]:
        """All periods ordered by (year, month)."""
        return self.db.list_month_references()

    def list_active_month_references(self) -> list[MonthReference]:
        return self.db.list_month_references(active_only=True)

    def find_by_period(self, month: int, year: int) -> Optional[MonthReference]:
        """Return the unique period for (month, year), or None."""
        return self.db.get_month_reference_by_period(month, year)

    def find_or_create(self, month: int, year: int) -> MonthReference:
        """Return the period for (month, year), creating an active one if missing."""
        existing = self.find_by_period(month, year)
        if existing is not None:
            return existing
        return self.create_month_reference(month, year)

    def update_month_reference(
        self,
        month_reference_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
        active: Optional[bool] = None,
    ) -> MonthReference:
        """Update a period's month, year and/or active flag.

        Raises:
            NotFoundError: If the period does not exist
            ValidationError: If month or year is out of range
            ConflictError: If the new (month, year) pair belongs to another period
        """
        current = self.require_month_reference(month_reference_id)
        if month is not None:
            validate_month(month)
        if year is not None:
            _validate_year(year)

        new_month = current.month if month is None else month
        new_year = current.year if year is None else year
        clash = self.db.get_month_reference_by_period(new_month, new_year)
        if clash is not None and clash.id != month_reference_id:
            raise ConflictError(duplicate_month_reference(new_month, new_year))

        self.db.update_month_reference(month_reference_id, month=month, year=year, active=active)
        logger.info("month_reference_updated id=%s", month_reference_id)
        return self.require_month_reference(month_reference_id)

    def toggle_active(self, month_reference_id: int) -> MonthReference:
        """Flip the active flag. Existing transactions are left untouched."""
        current = self.require_month_reference(month_reference_id)
        self.db.update_month_reference(month_reference_id, active=not current.active)
        logger.info(
            "month_reference_toggled id=%s active=%s", month_reference_id, not current.active
        )
        return self.require_month_reference(month_reference_id)

    def list_month_transactions(self, month_reference_id: int) -> list[Transaction]:
        """Transactions filed under a period, ordered by date."""
        self.require_month_reference(month_reference_id)
        return self.db.list_transactions(month_reference_id=month_reference_id)

    def delete_month_reference(self, month_reference_id: int) -> None:
        """Delete a period.

        Raises:
            NotFoundError: If the period does not exist
            DependencyError: If transactions still reference the period
        """
        self.require_month_reference(month_reference_id)
        transaction_count = self.db.get_month_reference_transaction_count(month_reference_id)
        if transaction_count > 0:
            raise DependencyError(
                delete_blocked("month reference", month_reference_id, transaction_count)
            )
        self.db.delete_month_reference(month_reference_id)
        logger.info("month_reference_deleted id=%s", month_reference_id)
