"""Bank account commands."""

import click
from scribe.cli.error_handling import handle_domain_error
from scribe.database.sqlalchemy_db import SQLAlchemyAccountStore, SQLAlchemyLedgerStore
from scribe.domain.account import AccountService
from scribe.domain.errors import DomainError, InfrastructureError
from scribe.utils.amount_parser import format_cents, parse_amount_cents


def _account_service(ctx) -> AccountService:
    return AccountService(ctx.obj["db"], SQLAlchemyAccountStore(), SQLAlchemyLedgerStore())


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("create")
@click.argument("organization_name", metavar="ORGANIZATION_NAME")
@click.option("--iban", required=True, help="Account IBAN")
@click.option("--bic", required=True, help="Bank identifier code")
@click.option("--balance", default="0", help="Opening balance (e.g., 100000.00)")
@click.pass_context
def create_account(ctx, organization_name: str, iban: str, bic: str, balance: str):
    """Create a new bank account.

    Examples:
        scribe account create "ACME Corp" --iban FR10474608000002006107XXXXX --bic OIVUSCLQXXX --balance 100000
    """
    service = _account_service(ctx)
    try:
        balance_cents = parse_amount_cents(balance)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)

    try:
        account = service.create_account(
            organization_name=organization_name, bic=bic, iban=iban, balance_cents=balance_cents
        )
    except (DomainError, InfrastructureError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{organization_name}' (ID: {account.id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all bank accounts with their balances."""
    service = _account_service(ctx)

    try:
        accounts = service.list_accounts()
    except (DomainError, InfrastructureError) as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.organization_name:20s} | {acc.organization_iban:30s} | "
            f"Balance: {format_cents(acc.balance_cents)}"
        )


@account_group.command("show")
@click.argument("iban", metavar="IBAN")
@click.pass_context
def show_account(ctx, iban: str):
    """Show a bank account and the credit transfers settled from it."""
    service = _account_service(ctx)

    try:
        acc, transfers = service.get_statement(iban)
    except (DomainError, InfrastructureError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"{acc.organization_name} ({acc.organization_bic})")
    click.echo(f"IBAN:    {acc.organization_iban}")
    click.echo(f"Balance: {format_cents(acc.balance_cents)}")
    if not transfers:
        click.echo("No transfers found.")
        return

    click.echo("\nTransfers:")
    click.echo("-" * 80)
    for transfer in transfers:
        click.echo(
            f"ID: {transfer.id:4d} | {format_cents(transfer.amount_cents):>12s} {transfer.currency} | "
            f"{transfer.counterparty_name:20s} | {transfer.counterparty_iban} | {transfer.description}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
