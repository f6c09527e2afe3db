"""Main CLI entry point."""

import logging

import click

from spendflix.config import Settings
from spendflix.database.factories import create_sqlite_database
from spendflix.domain.errors import DomainError
from spendflix.storage.local import LocalObjectStore

# Import and register all commands at module level
from spendflix.cli.commands import (
    account,
    category,
    init_categories,
    import_cmd,
    view,
    categorize,
    review,
)


def _configure_logging(verbose: bool, debug: bool, default_level: str) -> None:
    """Set up logging based on verbosity flags."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = getattr(logging, default_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        force=True,
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDFLIX_DB_PATH environment variable)",
    envvar="SPENDFLIX_DB_PATH",
)
@click.option(
    "--storage-dir",
    type=click.Path(file_okay=False),
    help="Directory holding uploaded statements (overrides SPENDFLIX_STORAGE_DIR)",
    envvar="SPENDFLIX_STORAGE_DIR",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    help="Rows imported in parallel (overrides SPENDFLIX_IMPORT_CONCURRENCY)",
)
@click.option(
    "--user-id",
    type=int,
    default=1,
    show_default=True,
    envvar="SPENDFLIX_USER_ID",
    help="Owner of the accounts being managed",
)
@click.option("--verbose", is_flag=True, default=False, help="Show progress messages.")
@click.option("--debug", is_flag=True, default=False, help="Show developer diagnostics.")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    storage_dir: str | None,
    concurrency: int | None,
    user_id: int,
    verbose: bool,
    debug: bool,
):
    """Spendflix - import bank statements and categorize spending.

    Statements are CSV exports of account or credit card activity. Each
    import is deduplicated, and categories you assign are learned as rules
    for future imports.
    """
    ctx.ensure_object(dict)

    try:
        settings = Settings.from_env()
    except DomainError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    _configure_logging(verbose, debug, settings.log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path or str(settings.db_path))
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["store"] = LocalObjectStore(storage_dir or settings.storage_dir)
        ctx.obj["concurrency"] = concurrency or settings.import_concurrency
        ctx.obj["user_id"] = user_id


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
import_cmd.register_commands(cli)
view.register_commands(cli)
categorize.register_commands(cli)
review.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
