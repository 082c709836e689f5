"""Utility for resolving account names to IDs."""

from ledgerbook.domain.account import AccountService
from ledgerbook.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        return account_service.require_account(account).id

    # Numeric strings are tried as IDs first, then as names
    by_name = [acc for acc in account_service.list_accounts() if acc.name == account]
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None and account_service.get_account(account_id) is not None:
        return account_id
    if by_name:
        return by_name[0].id
    if account_id is not None:
        raise NotFoundError(f"Account ID {account_id} not found")
    raise NotFoundError(f"Account '{account}' not found")
