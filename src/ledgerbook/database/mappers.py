"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    MonthReference as ORMMonthReference,
    Transaction as ORMTransaction,
    TransactionRelation as ORMTransactionRelation,
)

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Normalize a stored or aggregated numeric value to a 2-place Decimal."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        created_at=orm_category.created_at,
        updated_at=orm_category.updated_at,
    )


def month_reference_to_domain(orm_month: ORMMonthReference) -> domain.MonthReference:
    """Convert SQLAlchemy MonthReference model to domain MonthReference entity."""
    return domain.MonthReference(
        id=orm_month.id,
        month=orm_month.month,
        year=orm_month.year,
        active=bool(orm_month.active),
        created_at=orm_month.created_at,
        updated_at=orm_month.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date_time=orm_transaction.date_time,
        third_party=orm_transaction.third_party,
        value=to_money(orm_transaction.value),
        address=orm_transaction.address,
        description=orm_transaction.description,
        invoice_data=orm_transaction.invoice_data,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        month_reference_id=orm_transaction.month_reference_id,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def transaction_link_to_domain(orm_relation: ORMTransactionRelation) -> domain.TransactionLink:
    """Convert SQLAlchemy TransactionRelation model to domain TransactionLink entity."""
    return domain.TransactionLink(
        id=orm_relation.id,
        parent_transaction_id=orm_relation.parent_transaction_id,
        related_transaction_id=orm_relation.related_transaction_id,
        created_at=orm_relation.created_at,
    )
