"""Summary commands."""

import click
from ledgerbook.cli.error_handling import format_money, handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.summary import SummaryService
from ledgerbook.domain.transaction import TransactionService


@click.group()
def summary_group():
    """Show per-period summaries."""
    pass


@summary_group.command("monthly")
@click.option("--month", type=click.IntRange(1, 12), required=True, help="Month (1-12)")
@click.option("--year", type=int, required=True, help="Year")
@click.pass_context
def monthly_summary(ctx, month: int, year: int):
    """Show the raw sum of transaction values per account for a period.

    Values are summed as stored, without the Debit sign flip applied to
    balances.
    """
    db = ctx.obj["db"]
    totals = TransactionService(db).generate_monthly_summary(year, month)
    if not totals:
        click.echo(f"No transactions found for {year:04d}-{month:02d}.")
        return

    names = {acc.id: acc.name for acc in AccountService(db).list_accounts()}
    click.echo(f"\nMonthly Summary {year:04d}-{month:02d}:")
    click.echo("-" * 60)
    click.echo(f"{'Account':<40} {'Total':>18}")
    click.echo("-" * 60)
    for account_id, total in sorted(totals.items(), key=lambda item: names.get(item[0], "")):
        click.echo(f"{names.get(account_id, f'Account {account_id}'):<40} {format_money(total):>18}")
    click.echo("-" * 60)
    click.echo(f"{'TOTAL':<40} {format_money(sum(totals.values())):>18}")


@summary_group.command("report")
@click.option("--month", type=click.IntRange(1, 12), required=True, help="Month (1-12)")
@click.option("--year", type=int, required=True, help="Year")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([member.value for member in AccountType], case_sensitive=False),
    help="Only include accounts of this type",
)
@click.option("--details", is_flag=True, help="List the transactions under each category")
@click.pass_context
def expense_report(ctx, month: int, year: int, account_type: str | None, details: bool):
    """Show a period's transactions grouped by account and category.

    Examples:
        ledgerbook summary report --month 3 --year 2024
        ledgerbook summary report --month 3 --year 2024 --type Credit --details
    """
    try:
        report = SummaryService(ctx.obj["db"]).build_monthly_expense_report(
            month, year, account_type=account_type
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not report.accounts:
        click.echo(f"No transactions found for {year:04d}-{month:02d}.")
        return

    click.echo(f"\nExpense Report {year:04d}-{month:02d}:")
    click.echo("-" * 80)
    click.echo(f"{'Category':<50} {'Total':>20}")
    for section in report.accounts:
        click.echo("-" * 80)
        click.echo(f"{section.account.name} ({section.account.account_type.value})")
        click.echo("*" * 80)
        for item in section.categories:
            click.echo(f"    {item.category_name:<46} {format_money(item.total):>20}")
            if details:
                for txn in item.transactions:
                    click.echo(
                        f"        {txn.date_time:%Y-%m-%d}  {txn.third_party[:30]:<30} "
                        f"{format_money(txn.value):>12}"
                    )
        click.echo(f"{'Subtotal':<50} {format_money(section.total):>20}")
    click.echo("=" * 80)
    click.echo(f"{'TOTAL':<50} {format_money(report.total):>20}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
