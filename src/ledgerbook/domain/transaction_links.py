"""Related-transactions graph.

Links are stored as directed rows in ``transaction_relations`` but behave as an
undirected relation: every (a, b) row has a matching (b, a) row. Both rows are
written and removed inside a single unit of work.
"""

import logging

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Transaction, TransactionLink
from ledgerbook.domain.errors import NotFoundError, ValidationError, transaction_not_found

logger = logging.getLogger(__name__)


class TransactionLinkService:
    """Service maintaining the symmetric transaction relation."""

    def __init__(self, db: Database):
        """Initialize link service.

        Args:
            db: Database instance
        """
        self.db = db

    def link_transactions(self, transaction_id: int, related_transaction_id: int) -> None:
        """Link two transactions in both directions.

        Calling it again is harmless, and it restores a missing reverse row.

        Raises:
            NotFoundError: If either transaction does not exist
            ValidationError: If both IDs are the same
        """
        if transaction_id == related_transaction_id:
            raise ValidationError(f"Transaction {transaction_id} cannot be linked to itself")

        for txn_id in (transaction_id, related_transaction_id):
            if self.db.get_transaction(txn_id) is None:
                raise NotFoundError(transaction_not_found(txn_id))

        with self.db.atomic():
            created = 0
            for parent_id, related_id in (
                (transaction_id, related_transaction_id),
                (related_transaction_id, transaction_id),
            ):
                if not self.db.link_exists(parent_id, related_id):
                    self.db.create_link(parent_id, related_id)
                    created += 1

        if created:
            logger.info(
                "transactions_linked a=%s b=%s rows_created=%s",
                transaction_id,
                related_transaction_id,
                created,
            )

    def unlink_transactions(self, transaction_id: int, related_transaction_id: int) -> None:
        """Remove the link between two transactions; a missing link is a no-op."""
        with self.db.atomic():
            removed = self.db.delete_link(transaction_id, related_transaction_id)
            removed += self.db.delete_link(related_transaction_id, transaction_id)

        if removed:
            logger.info(
                "transactions_unlinked a=%s b=%s rows_removed=%s",
                transaction_id,
                related_transaction_id,
                removed,
            )

    def remove_all_links(self, transaction_id: int) -> int:
        """Drop every edge touching a transaction, in both directions."""
        with self.db.atomic():
            removed = self.db.delete_links_for_transaction(transaction_id)
        if removed:
            logger.debug("transaction_links_removed id=%s rows=%s", transaction_id, removed)
        return removed

    def get_related_transactions(self, transaction_id: int) -> list[Transaction]:
        """Transactions directly linked to the given one (one hop, not transitive)."""
        return self.db.get_related_transactions(transaction_id)

    def list_links(self, transaction_id: int) -> list[TransactionLink]:
        """Stored rows whose parent is the given transaction."""
        return self.db.list_links(transaction_id)

    def are_linked(self, transaction_id: int, related_transaction_id: int) -> bool:
        """True when the pair is linked (either stored direction counts)."""
        return self.db.link_exists(transaction_id, related_transaction_id) or self.db.link_exists(
            related_transaction_id, transaction_id
        )
