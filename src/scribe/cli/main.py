"""Main CLI entry point."""

import logging

import click
from scribe.database.factories import create_database

# Import and register all commands at module level
from scribe.cli.commands import (
    account,
    enroll,
    init_db,
    transfer,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Send log records to stderr at the requested level."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.WARNING))


@click.group()
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides SCRIBE_DATABASE_URL environment variable)",
    envvar="SCRIBE_DATABASE_URL",
)
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides SCRIBE_DB_PATH environment variable)",
    envvar="SCRIBE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="SCRIBE_LOG_LEVEL",
    help="Logging level",
)
@click.pass_context
def cli(ctx, database_url: str | None, db_path: str | None, log_level: str):
    """Scribe - atomic bulk transfers and class enrollments.

    Every transfer and enrollment runs in a single serializable database
    transaction: either all of its writes are applied or none are.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_db.register_commands(cli)
account.register_commands(cli)
transfer.register_commands(cli)
enroll.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
