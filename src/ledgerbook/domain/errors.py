"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(ConflictError):
    """Operation blocked due to dependent domain data."""


class InvalidStateError(DomainError):
    """Entity exists but is in a state that forbids the operation."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category."""
    return f"Category {category_id} not found"


def month_reference_not_found(month_reference_id: int) -> str:
    """Return message for missing month reference."""
    return f"Month reference {month_reference_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def month_reference_inactive(month: int, year: int) -> str:
    """Return message when a period is closed for new transactions."""
    return f"Cannot create transactions for inactive month reference {year:04d}-{month:02d}"


def duplicate_month_reference(month: int, year: int) -> str:
    """Return message for a period that already exists."""
    return f"Month reference {year:04d}-{month:02d} already exists"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def delete_blocked(entity: str, entity_id: int, transaction_count: int) -> str:
    """Return message when an entity still has dependent transactions."""
    return (
        f"Cannot delete {entity} {entity_id}: it has {_plural(transaction_count, 'transaction')}. "
        "Please reassign or delete them first."
    )
