"""Transaction management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.commands.category import resolve_category_or_exit
from ledgerbook.cli.date_filters import resolve_cli_date_range
from ledgerbook.cli.error_handling import format_money, handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import Transaction, TransactionSearchFilters
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.month_reference import MonthReferenceService
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import PERIODS, parse_datetime


def _resolve_month_reference_or_exit(
    ctx, db, month_reference_id: int | None, month: int | None, year: int | None
) -> int | None:
    """Pick the period from --month-reference or from --month/--year."""
    if month_reference_id is not None:
        return month_reference_id
    if month is None and year is None:
        return None
    if month is None or year is None:
        click.echo("Error: --month and --year must be given together.", err=True)
        ctx.exit(1)
    month_ref = MonthReferenceService(db).find_by_period(month, year)
    if month_ref is None:
        click.echo(f"Error: No month reference for {year:04d}-{month:02d}", err=True)
        ctx.exit(1)
    return month_ref.id


def _print_table(transactions: list[Transaction], account_names: dict[int, str]) -> None:
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<17} {'Value':>12}  {'Account':<20} {'Third party':<22} {'Description':<20}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date_time:%Y-%m-%d %H:%M} {format_money(txn.value):>12}  "
            f"{account_names.get(txn.account_id, 'Unknown'):<20} {txn.third_party[:22]:<22} "
            f"{(txn.description or '')[:20]:<20}"
        )
    click.echo("-" * 100)
    total = sum(txn.value for txn in transactions)
    click.echo(f"{'TOTAL':<6} {'':<17} {format_money(total):>12}  Count: {len(transactions)}")


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--date", "date_time", required=True, help="Date or date-time (e.g. 2024-03-05 or '2024-03-05 14:30')")
@click.option("--value", required=True, help="Signed value (e.g. 50.00 or -12.30)")
@click.option("--third-party", required=True, help="Counterparty name")
@click.option("--description", default="", help="Description")
@click.option("--address", help="Address")
@click.option("--invoice-data", help="Invoice data")
@click.option("--month-reference", "month_reference_id", type=int, help="Month reference ID")
@click.option("--month", type=click.IntRange(1, 12), help="Month of the period (with --year)")
@click.option("--year", type=int, help="Year of the period (with --month)")
@click.option("--link", "related_ids", type=int, multiple=True, help="Transaction ID to link (repeatable)")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    category: str,
    date_time: str,
    value: str,
    third_party: str,
    description: str,
    address: str | None,
    invoice_data: str | None,
    month_reference_id: int | None,
    month: int | None,
    year: int | None,
    related_ids: tuple[int, ...],
):
    """Add a transaction.

    The period is taken from --month-reference, or from --month/--year, or
    defaults to the month of --date. The period must be active.

    Examples:
        ledgerbook transaction add --account Checking --category Groceries \\
            --date 2024-03-05 --value 50.00 --third-party "Corner Shop"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    category_id = resolve_category_or_exit(ctx, CategoryService(db), category)

    try:
        when = parse_datetime(date_time)
        amount = parse_amount(value)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    period_id = _resolve_month_reference_or_exit(ctx, db, month_reference_id, month, year)
    if period_id is None:
        period_id = _resolve_month_reference_or_exit(ctx, db, None, when.month, when.year)

    try:
        txn = service.create_transaction(
            date_time=when,
            third_party=third_party,
            value=amount,
            description=description,
            account_id=account_id,
            category_id=category_id,
            month_reference_id=period_id,
            address=address,
            invoice_data=invoice_data,
            related_transaction_ids=related_ids,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date_time:%Y-%m-%d %H:%M}")
    click.echo(f"  Value: {format_money(txn.value)}")
    click.echo(f"  Third party: {txn.third_party}")
    if related_ids:
        click.echo(f"  Linked to: {', '.join(str(i) for i in related_ids)}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show one transaction with its related transactions."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    account = AccountService(db).get_account(txn.account_id)
    category = CategoryService(db).get_category(txn.category_id)
    month_ref = MonthReferenceService(db).get_month_reference(txn.month_reference_id)

    click.echo(f"\nTransaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date_time:%Y-%m-%d %H:%M}")
    click.echo(f"  Value: {format_money(txn.value)}")
    click.echo(f"  Third party: {txn.third_party}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if txn.address:
        click.echo(f"  Address: {txn.address}")
    if txn.invoice_data:
        click.echo(f"  Invoice: {txn.invoice_data}")
    click.echo(f"  Account: {account.name if account else 'Unknown'} (ID: {txn.account_id})")
    click.echo(f"  Category: {category.name if category else 'Unknown'} (ID: {txn.category_id})")
    click.echo(f"  Period: {month_ref.label if month_ref else 'Unknown'}")
    related = service.get_related_transactions(txn.id)
    if related:
        click.echo(f"  Related: {', '.join(str(r.id) for r in related)}")


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--month-reference", "month_reference_id", type=int, help="Month reference ID")
@click.pass_context
def list_transactions(ctx, account: str | None, category: str | None, month_reference_id: int | None):
    """List transactions, optionally narrowed by account, category or period."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None
    category_id = resolve_category_or_exit(ctx, CategoryService(db), category) if category else None

    transactions = TransactionService(db).list_transactions(
        account_id=account_id, category_id=category_id, month_reference_id=month_reference_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return
    _print_table(transactions, {acc.id: acc.name for acc in account_service.list_accounts()})


@transaction_group.command("search")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--month-reference", "month_reference_id", type=int, help="Month reference ID")
@click.option("--month", type=click.IntRange(1, 12), help="Period month (with --year)")
@click.option("--year", type=int, help="Period year (with --month)")
@click.option("--start-date", help="Earliest date, inclusive")
@click.option("--end-date", help="Latest date, inclusive")
@click.option("--period", type=click.Choice(PERIODS), help="Named date range")
@click.option("--min-value", help="Smallest value, inclusive")
@click.option("--max-value", help="Largest value, inclusive")
@click.option("--query", "-q", help="Text to find in description, third party or address")
@click.option("--third-party", help="Text to find in the third party")
@click.pass_context
def search_transactions(
    ctx,
    account: str | None,
    category: str | None,
    month_reference_id: int | None,
    month: int | None,
    year: int | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    min_value: str | None,
    max_value: str | None,
    query: str | None,
    third_party: str | None,
):
    """Search transactions. All given filters must match.

    At least one filter is required; searching with none returns nothing.
    """
    if (month is None) != (year is None):
        click.echo("Error: --month and --year must be given together.", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None
    category_id = resolve_category_or_exit(ctx, CategoryService(db), category) if category else None
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    try:
        filters = TransactionSearchFilters(
            account_id=account_id,
            category_id=category_id,
            month_reference_id=month_reference_id,
            month=month,
            year=year,
            start=start,
            end=end,
            min_value=parse_amount(min_value) if min_value is not None else None,
            max_value=parse_amount(max_value) if max_value is not None else None,
            query=query,
            third_party=third_party,
        )
        if filters.is_empty():
            click.echo("No filters given; specify at least one filter to search.")
            return
        transactions = TransactionService(db).search(filters)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return
    _print_table(transactions, {acc.id: acc.name for acc in account_service.list_accounts()})


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--date", "date_time", help="New date or date-time")
@click.option("--value", help="New signed value")
@click.option("--third-party", help="New counterparty")
@click.option("--description", help="New description")
@click.option("--address", help="New address")
@click.option("--invoice-data", help="New invoice data")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    category: str | None,
    date_time: str | None,
    value: str | None,
    third_party: str | None,
    description: str | None,
    address: str | None,
    invoice_data: str | None,
) -> None:
    """Update a transaction. Only the given fields change.

    Examples:
        ledgerbook transaction update 1 --value -75.00
        ledgerbook transaction update 1 --category Groceries --description "Weekly shop"
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None
    category_id = resolve_category_or_exit(ctx, CategoryService(db), category) if category else None

    try:
        TransactionService(db).update_transaction(
            transaction_id=transaction_id,
            date_time=parse_datetime(date_time) if date_time is not None else None,
            third_party=third_party,
            value=parse_amount(value) if value is not None else None,
            address=address,
            description=description,
            invoice_data=invoice_data,
            account_id=account_id,
            category_id=category_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and its links.

    Examples:
        ledgerbook transaction delete 1
    """
    service = TransactionService(ctx.obj["db"])

    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("move")
@click.argument("transaction_id", type=int)
@click.argument("account")
@click.pass_context
def move_transaction(ctx, transaction_id: int, account: str) -> None:
    """Move a transaction to another ACCOUNT (name or ID)."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    try:
        TransactionService(db).move_to_account(transaction_id, account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Moved transaction {transaction_id} to account {account_id}")


@transaction_group.command("link")
@click.argument("transaction_id", type=int)
@click.argument("related_id", type=int)
@click.pass_context
def link_transactions(ctx, transaction_id: int, related_id: int) -> None:
    """Link two transactions to each other."""
    try:
        TransactionService(ctx.obj["db"]).link_transaction(transaction_id, related_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Linked transactions {transaction_id} and {related_id}")


@transaction_group.command("unlink")
@click.argument("transaction_id", type=int)
@click.argument("related_id", type=int)
@click.pass_context
def unlink_transactions(ctx, transaction_id: int, related_id: int) -> None:
    """Remove the link between two transactions."""
    TransactionService(ctx.obj["db"]).unlink_transaction(transaction_id, related_id)
    click.echo(f"Unlinked transactions {transaction_id} and {related_id}")


@transaction_group.command("related")
@click.argument("transaction_id", type=int)
@click.pass_context
def related_transactions(ctx, transaction_id: int) -> None:
    """List the transactions linked to TRANSACTION_ID."""
    db = ctx.obj["db"]
    related = TransactionService(db).get_related_transactions(transaction_id)
    if not related:
        click.echo("No related transactions.")
        return
    _print_table(related, {acc.id: acc.name for acc in AccountService(db).list_accounts()})


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
