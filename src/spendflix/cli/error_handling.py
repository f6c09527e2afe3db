"""Rendering of domain errors for CLI commands."""

import logging

import click

from spendflix.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print a domain error to stderr and exit with status 1.

    The traceback goes to the debug log, so ``--debug`` shows where the
    error was raised.
    """
    logger.debug("'%s' failed", ctx.command_path, exc_info=error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
