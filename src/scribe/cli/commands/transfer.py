"""Bulk transfer command."""

import click
from scribe.cli.error_handling import handle_domain_error
from scribe.database.sqlalchemy_db import SQLAlchemyAccountStore, SQLAlchemyLedgerStore
from scribe.domain.errors import DomainError, InfrastructureError
from scribe.domain.transfer import FundTransferWorkflow
from scribe.utils.amount_parser import format_cents
from scribe.utils.request_loader import load_bulk_transfer


@click.command("transfer")
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def transfer(ctx, request_file: str):
    """Execute a bulk transfer described by a JSON file.

    The account named by organization_iban is debited by the sum of all
    credit transfers, and every credit transfer is recorded. If the
    balance cannot cover the total, nothing is changed.

    Examples:
        scribe transfer bulk_transfer.json
    """
    db = ctx.obj["db"]
    accounts = SQLAlchemyAccountStore()
    workflow = FundTransferWorkflow(db, accounts, SQLAlchemyLedgerStore())

    try:
        bulk_transfer = load_bulk_transfer(request_file)
        inserted = workflow.execute(bulk_transfer)
    except (DomainError, InfrastructureError) as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Settled {len(inserted)} credit transfer{'s' if len(inserted) != 1 else ''} "
        f"totalling {format_cents(bulk_transfer.total_cents)} "
        f"from {bulk_transfer.account.organization_iban}"
    )


def register_commands(cli):
    """Register transfer command with main CLI."""
    cli.add_command(transfer)
