"""Main CLI entry point."""

import click

from ledgerbook.config import configure_logging, get_settings
from ledgerbook.database.factories import create_database, create_sqlite_database

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    category,
    month,
    transaction,
    summary,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERBOOK_DATABASE_URL and LEDGERBOOK_DB_PATH)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LEDGERBOOK_LOG_LEVEL",
    default=None,
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerbook - household ledger.

    Record transactions against accounts and categories, file them under
    monthly periods, link related transactions and read balances and
    monthly summaries.
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    configure_logging(log_level or settings.log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        # --db-path, then LEDGERBOOK_DATABASE_URL, then LEDGERBOOK_DB_PATH
        if db_path is None and settings.database_url:
            db = create_database(settings.database_url)
        else:
            db = create_sqlite_database(database_path=db_path or settings.database_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
month.register_commands(cli)
transaction.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
