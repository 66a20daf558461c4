"""mpl log command - show commit history."""

import click
from rich.console import Console
from rich.table import Table

from mergeplane.cli.utils import engine_errors, open_engine


@click.command()
@click.option("-n", "--limit", type=click.IntRange(min=1), default=None, help="Max commits")
@click.option("--branch", default=None, help="Walk from this branch instead of HEAD")
@click.pass_context
def log_command(ctx: click.Context, limit: int | None, branch: str | None) -> None:
    """Show commit history, newest first."""
    engine = open_engine(ctx)
    if limit is None:
        limit = engine.config.limits.history_default
    with engine_errors():
        commits = engine.branch_history(branch, limit) if branch else engine.history(limit)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Author")
    table.add_column("Date", no_wrap=True)
    table.add_column("Summary")
    for commit in commits:
        table.add_row(
            commit.short_sha,
            commit.author.name,
            commit.author.local_time.strftime("%Y-%m-%d %H:%M"),
            commit.summary,
        )
    Console().print(table)
