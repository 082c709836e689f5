"""Category domain service."""

import logging
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Category, Transaction
from ledgerbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    category_not_found,
    delete_blocked,
)

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    if name is None or not name.strip():
        raise ValidationError("Category name must not be empty")
    return name.strip()


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str) -> Category:
        """Create a category.

        Raises:
            ValidationError: If the name is blank
        """
        category_id = self.db.create_category(name=_clean_name(name))
        logger.info("category_created id=%s", category_id)
        return self.require_category(category_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID, or None if not found."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> Category:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """First category with exactly this name, if any."""
        for category in self.db.list_categories():
            if category.name == name:
                return category
        return None

    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        return self.db.list_categories()

    def update_category(self, category_id: int, name: str) -> Category:
        """Rename a category.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the new name is blank
        """
        self.require_category(category_id)
        self.db.update_category(category_id, _clean_name(name))
        logger.info("category_updated id=%s", category_id)
        return self.require_category(category_id)

    def list_category_transactions(self, category_id: int) -> list[Transaction]:
        """Transactions filed under a category, ordered by date."""
        self.require_category(category_id)
        return self.db.list_transactions(category_id=category_id)

    def can_delete_category(self, category_id: int) -> tuple[bool, Optional[str]]:
        """Report whether a category can be deleted and, if not, why."""
        if self.db.get_category(category_id) is None:
            return False, category_not_found(category_id)
        transaction_count = self.db.get_category_transaction_count(category_id)
        if transaction_count > 0:
            return False, delete_blocked("category", category_id, transaction_count)
        return True, None

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Categories are guarded the same way accounts are: transactions must be
        moved to another category first.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If transactions still reference the category
        """
        self.require_category(category_id)

        transaction_count = self.db.get_category_transaction_count(category_id)
        if transaction_count > 0:
            logger.warning(
                "category_delete_blocked id=%s transactions=%s", category_id, transaction_count
            )
            raise DependencyError(delete_blocked("category", category_id, transaction_count))

        self.db.delete_category(category_id)
        logger.info("category_deleted id=%s", category_id)
