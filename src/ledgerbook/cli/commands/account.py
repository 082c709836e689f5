"""Account management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import format_money, handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError

ACCOUNT_TYPES = [member.value for member in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    required=True,
    help="Account type",
)
@click.pass_context
def create_account(ctx, name: str, account_type: str):
    """Create a new account.

    Examples:
        ledgerbook account create "Checking" --type Debit
        ledgerbook account create "Visa" --type Credit
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.create_account(name=name, account_type=account_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created account '{account.name}' ({account.account_type.value}, ID: {account.id})")


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Only show accounts of this type",
)
@click.option("--balances", is_flag=True, help="Show the current balance of each account")
@click.pass_context
def list_accounts(ctx, account_type: str | None, balances: bool):
    """List all accounts."""
    service = AccountService(ctx.obj["db"])

    if account_type:
        accounts = service.list_accounts_by_type(account_type)
    else:
        accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        line = f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:6s}"
        if balances:
            line += f" | Balance: {format_money(service.calculate_balance(acc.id))}"
        click.echo(line)


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.pass_context
def update_account(ctx, account: str, name: str | None, account_type: str | None) -> None:
    """Update an account's name and/or type.

    ACCOUNT can be an account name or ID.

    Examples:
        ledgerbook account update "Checking" --name "Main Checking"
        ledgerbook account update 1 --type Credit
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    if name is None and account_type is None:
        click.echo("Nothing to update. Use --name and/or --type.")
        return

    try:
        updated = service.update_account(account_id, name=name, account_type=account_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated account '{updated.name}' ({updated.account_type.value})")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transactions reference it. Use
    'transaction move' to reassign them first.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    can_delete, reason = service.can_delete_account(account_id)
    if not can_delete:
        click.echo(f"Error: {reason}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def account_balance(ctx, account: str) -> None:
    """Show the balance of an account.

    Debit accounts show the negated sum of their transactions; Credit
    accounts show the sum as-is.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        balance = service.calculate_balance(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    account_obj = service.get_account(account_id)
    click.echo(f"{account_obj.name}: {format_money(balance)}")


@account_group.command("summary")
@click.argument("account", metavar="ACCOUNT")
@click.option("--month", type=click.IntRange(1, 12), help="Month for the monthly total")
@click.option("--year", type=int, help="Year for the monthly total")
@click.pass_context
def account_summary(ctx, account: str, month: int | None, year: int | None) -> None:
    """Show balance, transaction count and monthly total for an account."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    if (month is None) != (year is None):
        click.echo("Error: --month and --year must be given together.", err=True)
        ctx.exit(1)

    try:
        summary = service.get_account_summary(account_id, month=month, year=year)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nAccount: {summary.account.name} ({summary.account.account_type.value})")
    click.echo("-" * 40)
    click.echo(f"Transactions:  {summary.total_transactions}")
    click.echo(f"Balance:       {format_money(summary.current_balance)}")
    if month is not None:
        click.echo(f"{year:04d}-{month:02d} total: {format_money(summary.monthly_total)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
