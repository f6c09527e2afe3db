"""Review of uncategorized transactions."""

import click

from spendflix.domain.uncategorized import UncategorizedGrouper


@click.command("review")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True, help="Groups to show")
@click.pass_context
def review_uncategorized(ctx, limit: int):
    """Show uncategorized transactions grouped by description.

    Each group lists the IDs to pass to 'categorize' in one go.
    """
    summary = UncategorizedGrouper(ctx.obj["db"]).summarize(ctx.obj["user_id"])

    click.echo(
        f"\nCategorized: {summary.categorized_percent:.0%} "
        f"({summary.categorized_count} categorized, {summary.uncategorized_count} uncategorized)"
    )
    if not summary.groups:
        click.echo("Nothing left to categorize.")
        return

    click.echo("-" * 80)
    for group in summary.groups[:limit]:
        total = sum(group.values)
        ids = " ".join(str(i) for i in group.ids)
        click.echo(f"{group.descriptions[0][:40]:<40} x{len(group.ids):<4} {total:>12,.2f}")
        click.echo(f"    IDs: {ids}")

    remaining = len(summary.groups) - limit
    if remaining > 0:
        click.echo(f"\n... and {remaining} more group(s). Use --limit to show more.")


def register_commands(cli):
    """Register review command with main CLI."""
    cli.add_command(review_uncategorized)
