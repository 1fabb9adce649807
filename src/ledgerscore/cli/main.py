"""Main CLI entry point."""

import click
from ledgerscore.database.factories import create_sqlite_database
from ledgerscore.utils.logging_setup import setup_logging

# Import and register all commands at module level
from ledgerscore.cli.commands import (
    customers,
    open_items,
    portfolio,
    lists,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERSCORE_DB_PATH environment variable)",
    envvar="LEDGERSCORE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="LEDGERSCORE_LOG_LEVEL",
    help="Log level for diagnostics written to stderr (default: WARNING)",
)
@click.option("--log-json", is_flag=True, help="Write log records as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, log_json: bool):
    """Ledgerscore - Customer debt rating for accounts receivable.

    Rate customers Good, Medium or Bad from a ledger CSV export, inspect
    their open items and aging, and summarize the portfolio by sales rep
    and period.
    """
    ctx.ensure_object(dict)
    setup_logging(level=log_level, json_output=log_json)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
customers.register_commands(cli)
open_items.register_commands(cli)
portfolio.register_commands(cli)
lists.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
