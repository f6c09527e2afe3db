"""Transaction viewing commands."""

import click

from spendflix.domain.account import AccountService
from spendflix.domain.category import CategoryService
from spendflix.domain.errors import DomainError
from spendflix.domain.transaction import TransactionService
from spendflix.utils.account_resolver import resolve_account
from spendflix.utils.date_parser import parse_date
from spendflix.cli.error_handling import handle_domain_error


def _parse_optional_date(ctx, value: str | None, label: str):
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.command("view")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--category", help="Category name, path or ID (e.g., 'Food & Dining > Groceries')")
@click.option("--account", help="Account name or ID")
@click.option("--uncategorized", is_flag=True, help="Only transactions without a category")
@click.option("--show-hidden", is_flag=True, help="Include hidden transactions")
@click.option("--details", "-d", is_flag=True, help="Show notes, score and source for each transaction")
@click.pass_context
def view_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    account: str | None,
    uncategorized: bool,
    show_hidden: bool,
    details: bool,
):
    """View transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    category_service = CategoryService(db)
    account_service = AccountService(db)

    start = _parse_optional_date(ctx, start_date, "start date")
    end = _parse_optional_date(ctx, end_date, "end date")

    try:
        account_id = resolve_account(account_service, account) if account else None
        category_id = category_service.resolve_category(category).id if category else None
        transactions = service.list_transactions(
            user_id=ctx.obj["user_id"],
            account_id=account_id,
            start_date=start,
            end_date=end,
            category_id=category_id,
            uncategorized=uncategorized,
            include_hidden=show_hidden,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Account':<18} {'Category':<28} {'Description':<30}"
    )
    click.echo("-" * 110)

    for txn in transactions:
        category_name = "Uncategorized"
        if txn.category_id:
            category_name = category_service.format_category_path(txn.category_id)
        hidden = " (hidden)" if txn.is_hidden else ""
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.amount:>12,.2f}  "
            f"{accounts.get(txn.account_id, 'Unknown')[:18]:<18} {category_name[:28]:<28} "
            f"{txn.description[:30]}{hidden}"
        )
        if details:
            score = f"{txn.category_score:.2f}" if txn.category_score is not None else "-"
            click.echo(f"       Source: {txn.source_id or '-'} | Rule: {txn.category_rule_id or '-'} | Score: {score}")
            if txn.notes:
                click.echo(f"       Notes: {txn.notes}")


@click.command("monthly")
@click.option("--account", required=True, help="Account name or ID")
@click.pass_context
def monthly_totals(ctx, account: str):
    """Show transaction count and total per month for an account."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        account_id = resolve_account(AccountService(db), account)
        months = service.count_per_month(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not months:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'Month':<8} {'Count':>6} {'Total':>14}")
    click.echo("-" * 30)
    for row in months:
        click.echo(f"{row.month:<8} {row.count:>6} {row.total:>14,.2f}")


def register_commands(cli):
    """Register view commands with main CLI."""
    cli.add_command(view_transactions)
    cli.add_command(monthly_totals)
