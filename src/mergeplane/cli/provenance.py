"""mpl provenance command - show which branch a branch was created from."""

import click

from mergeplane.cli.utils import engine_errors, open_engine


@click.command()
@click.argument("branch")
@click.option("--recent", type=click.IntRange(min=1), default=None, help="Also list reflog entries")
@click.pass_context
def provenance_command(ctx: click.Context, branch: str, recent: int | None) -> None:
    """Show the branch BRANCH was created from."""
    engine = open_engine(ctx)
    with engine_errors():
        found = engine.branch_creation_point(branch)
        entries = engine.recent_operations(recent) if recent else []

    if found is None:
        click.echo(f"{branch}: source unknown")
    else:
        click.echo(f"{branch}: created from {found.source_branch} ({found.evidence.value})")
    for entry in entries:
        click.echo(f"  {entry.new_sha[:7]} {entry.message}")
