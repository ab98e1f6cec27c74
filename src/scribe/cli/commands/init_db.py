"""Database setup commands."""

import click
from scribe.cli.error_handling import handle_domain_error
from scribe.database.seed import seed_database
from scribe.domain.errors import InfrastructureError


@click.command("init")
@click.pass_context
def init_database(ctx):
    """Create the database schema."""
    db = ctx.obj["db"]
    # The schema is created when the CLI connects
    click.echo(f"Initialized database at {db.database_url}")


@click.command("seed")
@click.pass_context
def seed(ctx):
    """Insert the demo bank account, courses and students.

    Rows that already exist are left untouched, so seeding twice is safe.
    """
    db = ctx.obj["db"]
    try:
        created = seed_database(db)
    except InfrastructureError as e:
        handle_domain_error(ctx, e)
    for table, count in created.items():
        click.echo(f"{table}: {count} created")


def register_commands(cli):
    """Register setup commands with main CLI."""
    cli.add_command(init_database)
    cli.add_command(seed)
