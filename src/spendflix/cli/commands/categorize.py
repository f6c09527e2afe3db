"""Category assignment, notes and visibility commands."""

import click

from spendflix.domain.category import CategoryService
from spendflix.domain.errors import DomainError
from spendflix.domain.transaction import TransactionService
from spendflix.cli.error_handling import handle_domain_error


@click.command("categorize")
@click.argument("transaction_ids", nargs=-1, required=True, type=int)
@click.argument("category", nargs=1)
@click.pass_context
def categorize_transaction(ctx, transaction_ids: tuple[int, ...], category: str):
    """Assign a category to transactions and learn a rule from it.

    The first transaction's description becomes the rule keyword for its
    account, so pass transactions that share a description.

    Examples:
        spendflix categorize 12 "Restaurants"
        spendflix categorize 12 15 31 "Food & Dining > Groceries"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    # Remove duplicates while preserving order
    unique_ids = list(dict.fromkeys(transaction_ids))

    try:
        target = CategoryService(db).resolve_category(category)
        rule_id = service.update_category(unique_ids, target.id)
        noun = "transaction" if len(unique_ids) == 1 else "transactions"
        click.echo(f"Categorized {len(unique_ids)} {noun} as '{target.name}' (rule {rule_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("notes")
@click.argument("transaction_id", type=int)
@click.argument("notes", required=False)
@click.option("--clear", is_flag=True, help="Clear notes")
@click.pass_context
def update_notes(ctx, transaction_id: int, notes: str | None, clear: bool):
    """Update transaction notes."""
    service = TransactionService(ctx.obj["db"])

    if clear:
        notes = None
    elif not notes:
        txn = service.get_transaction(transaction_id)
        if txn is None:
            click.echo(f"Error: Transaction {transaction_id} not found", err=True)
            ctx.exit(1)
        if txn.notes:
            click.echo(f"Current notes: {txn.notes}")
        else:
            click.echo("No notes set. Provide notes text to update.")
        return

    try:
        service.update_notes(transaction_id=transaction_id, notes=notes)
        if notes:
            click.echo(f"Updated notes for transaction {transaction_id}")
        else:
            click.echo(f"Cleared notes for transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("hide")
@click.argument("transaction_ids", nargs=-1, required=True, type=int)
@click.option("--unhide", is_flag=True, help="Show the transactions again")
@click.pass_context
def hide_transactions(ctx, transaction_ids: tuple[int, ...], unhide: bool):
    """Hide transactions from listings (or show them again with --unhide)."""
    service = TransactionService(ctx.obj["db"])

    try:
        for txn_id in dict.fromkeys(transaction_ids):
            service.set_hidden(txn_id, is_hidden=not unhide)
            click.echo(f"Transaction {txn_id} {'shown' if unhide else 'hidden'}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register categorize, notes and hide commands with main CLI."""
    cli.add_command(categorize_transaction)
    cli.add_command(update_notes)
    cli.add_command(hide_transactions)
