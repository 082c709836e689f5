"""CLI error handling helpers."""

import click

from ledgerbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_money(value) -> str:
    """Render a Decimal with thousands separators and two places."""
    return f"{value:,.2f}"
