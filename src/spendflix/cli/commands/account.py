"""Account management commands."""

import click

from spendflix.domain.account import AccountService
from spendflix.domain.entities import SourceType
from spendflix.domain.errors import DomainError
from spendflix.cli.error_handling import handle_domain_error

SOURCE_TYPE_CHOICES = {
    "account": SourceType.ACCOUNT_STATEMENT_CSV,
    "credit-card": SourceType.CREDIT_CARD_STATEMENT_CSV,
}


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank-number", help="Bank number (e.g. 260)")
@click.option(
    "--source-type",
    type=click.Choice(sorted(SOURCE_TYPE_CHOICES)),
    help="Statement type this account accepts (any type if omitted)",
)
@click.pass_context
def create_account(ctx, name: str, bank_number: str | None, source_type: str | None):
    """Create a new account.

    Examples:
        spendflix account create "Checking"
        spendflix account create "Nubank Card" --bank-number 260 --source-type credit-card
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(
            user_id=ctx.obj["user_id"],
            name=name,
            bank_number=bank_number,
            source_type=SOURCE_TYPE_CHOICES.get(source_type) if source_type else None,
        )
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List your accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(user_id=ctx.obj["user_id"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        source_type = acc.source_type.value if acc.source_type else "any"
        bank = acc.bank_number or "-"
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Bank: {bank:5s} | Type: {source_type}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
