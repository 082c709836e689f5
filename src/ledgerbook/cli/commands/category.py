"""Category management commands."""

import click
from ledgerbook.cli.error_handling import format_money, handle_domain_error
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.errors import DomainError


def resolve_category_or_exit(ctx: click.Context, service: CategoryService, category: str) -> int:
    """Resolve a category name or ID, or exit with a CLI error."""
    match = service.get_category_by_name(category)
    if match is not None:
        return match.id
    try:
        category_id = int(category)
    except ValueError:
        click.echo(f"Error: Category '{category}' not found", err=True)
        ctx.exit(1)

    try:
        return service.require_category(category_id).id
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.pass_context
def create_category(ctx, name: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category = service.create_category(name=name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created category '{category.name}' (ID: {category.id})")


@category_group.command("rename")
@click.argument("category")
@click.argument("new_name")
@click.pass_context
def rename_category(ctx, category: str, new_name: str):
    """Rename a category. CATEGORY can be a name or ID."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, service, category)

    try:
        updated = service.update_category(category_id, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Renamed category to '{updated.name}'")


@category_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category that no transaction uses."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, service, category)

    try:
        service.delete_category(category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted category {category_id}")


@category_group.command("transactions")
@click.argument("category")
@click.pass_context
def category_transactions(ctx, category: str):
    """List the transactions filed under a category."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, service, category)

    transactions = service.list_category_transactions(category_id)
    if not transactions:
        click.echo("No transactions found.")
        return
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date_time:%Y-%m-%d %H:%M}  {format_money(txn.value):>12}  {txn.third_party}"
        )


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
