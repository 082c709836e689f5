"""Month reference commands."""

import click
from ledgerbook.cli.error_handling import format_money, handle_domain_error
from ledgerbook.domain.entities import MonthReference
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.month_reference import MonthReferenceService


def _describe(month_ref: MonthReference) -> str:
    status = "active" if month_ref.active else "inactive"
    return f"ID: {month_ref.id:3d} | {month_ref.label} | {status}"


@click.group()
def month_group():
    """Manage monthly reference periods."""
    pass


@month_group.command("create")
@click.argument("month", type=click.IntRange(1, 12))
@click.argument("year", type=int)
@click.option("--inactive", is_flag=True, help="Create the period closed for new transactions")
@click.pass_context
def create_month(ctx, month: int, year: int, inactive: bool):
    """Create a period for MONTH/YEAR.

    Examples:
        ledgerbook month create 3 2024
    """
    service = MonthReferenceService(ctx.obj["db"])
    try:
        month_ref = service.create_month_reference(month, year, active=not inactive)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created month reference {month_ref.label} (ID: {month_ref.id})")


@month_group.command("list")
@click.option("--active-only", is_flag=True, help="Only show active periods")
@click.pass_context
def list_months(ctx, active_only: bool):
    """List periods ordered by year and month."""
    service = MonthReferenceService(ctx.obj["db"])
    if active_only:
        month_refs = service.list_active_month_references()
    else:
        month_refs = service.list_month_references()

    if not month_refs:
        click.echo("No month references found.")
        return
    click.echo("\nMonth references:")
    click.echo("-" * 40)
    for month_ref in month_refs:
        click.echo(_describe(month_ref))


@month_group.command("find")
@click.argument("month", type=click.IntRange(1, 12))
@click.argument("year", type=int)
@click.pass_context
def find_month(ctx, month: int, year: int):
    """Look up the period for MONTH/YEAR."""
    service = MonthReferenceService(ctx.obj["db"])
    month_ref = service.find_by_period(month, year)
    if month_ref is None:
        click.echo(f"Error: No month reference for {year:04d}-{month:02d}", err=True)
        ctx.exit(1)
    click.echo(_describe(month_ref))


@month_group.command("update")
@click.argument("month_reference_id", type=int)
@click.option("--month", type=click.IntRange(1, 12), help="New month")
@click.option("--year", type=int, help="New year")
@click.option("--active/--inactive", default=None, help="Open or close the period")
@click.pass_context
def update_month(ctx, month_reference_id: int, month: int | None, year: int | None, active: bool | None):
    """Update a period."""
    service = MonthReferenceService(ctx.obj["db"])
    try:
        month_ref = service.update_month_reference(
            month_reference_id, month=month, year=year, active=active
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated {_describe(month_ref)}")


@month_group.command("toggle")
@click.argument("month_reference_id", type=int)
@click.pass_context
def toggle_month(ctx, month_reference_id: int):
    """Flip a period between active and inactive."""
    service = MonthReferenceService(ctx.obj["db"])
    try:
        month_ref = service.toggle_active(month_reference_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Month reference {month_ref.label} is now {'active' if month_ref.active else 'inactive'}")


@month_group.command("delete")
@click.argument("month_reference_id", type=int)
@click.pass_context
def delete_month(ctx, month_reference_id: int):
    """Delete a period that no transaction uses."""
    service = MonthReferenceService(ctx.obj["db"])
    try:
        service.delete_month_reference(month_reference_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted month reference {month_reference_id}")


@month_group.command("transactions")
@click.argument("month_reference_id", type=int)
@click.pass_context
def month_transactions(ctx, month_reference_id: int):
    """List the transactions filed under a period."""
    service = MonthReferenceService(ctx.obj["db"])
    try:
        transactions = service.list_month_transactions(month_reference_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date_time:%Y-%m-%d %H:%M}  {format_money(txn.value):>12}  {txn.third_party}"
        )


def register_commands(cli):
    """Register month reference commands with main CLI."""
    cli.add_command(month_group, name="month")
