"""Statement import commands."""

from pathlib import Path

import click

from spendflix.domain.account import AccountService
from spendflix.domain.entities import SourceStatus
from spendflix.domain.errors import DomainError, ValidationError
from spendflix.domain.importer import ImporterService, ImportReport, RowOutcome
from spendflix.domain.source import SourceService
from spendflix.utils.account_resolver import resolve_account
from spendflix.utils.concurrency import ConcurrencyLimiter
from spendflix.cli.error_handling import handle_domain_error


def _importer(ctx) -> ImporterService:
    return ImporterService(
        ctx.obj["db"],
        ctx.obj["store"],
        limiter=ConcurrencyLimiter(ctx.obj["concurrency"]),
    )


def _print_report(report: ImportReport) -> None:
    click.echo("\nImport complete:")
    click.echo(f"  Rows: {report.rows_seen}")
    click.echo(f"  Imported: {report.count(RowOutcome.IMPORTED)} transactions")
    click.echo(f"  Skipped: {report.count(RowOutcome.DUPLICATE)} duplicates")
    click.echo(f"  Ignored: {report.count(RowOutcome.IGNORED)} payments and balances")
    click.echo(f"  Malformed: {report.count(RowOutcome.MALFORMED)} rows")


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", required=True, help="Account name or ID")
@click.pass_context
def import_csv(ctx, csv_file: str, account: str):
    """Upload a statement CSV and import its transactions.

    Examples:
        spendflix import nubank-2025-03.csv --account "Nubank Card"
    """
    db = ctx.obj["db"]
    source_service = SourceService(db, ctx.obj["store"])

    try:
        account_id = resolve_account(AccountService(db), account)
        source = source_service.upload(account_id, Path(csv_file).read_bytes())
        click.echo(f"Created source {source.id} ({source.source_type.value})")
        _print_report(_importer(ctx).run(source.id))
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("reimport")
@click.argument("source_id", type=int)
@click.option("--force", is_flag=True, help="Re-run a source that already completed")
@click.pass_context
def reimport(ctx, source_id: int, force: bool):
    """Re-run the import of a stored source.

    Sources left PENDING by an aborted import can be retried; rows imported
    before are recognised as duplicates.
    """
    source_service = SourceService(ctx.obj["db"], ctx.obj["store"])

    try:
        source = source_service.get_source(source_id)
        if source.status == SourceStatus.COMPLETED and not force:
            raise ValidationError(
                f"Source {source_id} already completed. Use --force to import it again."
            )
        _print_report(_importer(ctx).run(source.id))
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("sources")
@click.option("--account", help="Only sources of this account (name or ID)")
@click.option(
    "--status",
    type=click.Choice([s.value for s in SourceStatus], case_sensitive=False),
    help="Only sources in this state",
)
@click.pass_context
def list_sources(ctx, account: str | None, status: str | None):
    """List uploaded statements and their processing state."""
    db = ctx.obj["db"]
    source_service = SourceService(db, ctx.obj["store"])

    try:
        account_id = resolve_account(AccountService(db), account) if account else None
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    sources = source_service.list_sources(
        account_id=account_id,
        status=SourceStatus(status.upper()) if status else None,
    )
    if not sources:
        click.echo("No sources found.")
        return

    click.echo("\nSources:")
    click.echo("-" * 80)
    for src in sources:
        source_type = getattr(src.source_type, "value", src.source_type)
        click.echo(
            f"ID: {src.id:4d} | Account: {src.account_id:3d} | {source_type:26s} | "
            f"{src.status.value:9s} | {src.created_at:%Y-%m-%d %H:%M}"
        )


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_csv)
    cli.add_command(reimport)
    cli.add_command(list_sources)
