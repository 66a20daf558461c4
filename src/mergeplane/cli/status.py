"""mpl status command - show branch and working tree state."""

import json

import click
from rich.console import Console

from mergeplane.cli.utils import current_branch_or_none, engine_errors, open_engine

_SECTIONS = (
    ("staged_new", "Staged (new)"),
    ("staged_modified", "Staged (modified)"),
    ("staged_deleted", "Staged (deleted)"),
    ("renamed", "Renamed"),
    ("typechange", "Type changed"),
    ("unstaged_modified", "Modified"),
    ("unstaged_deleted", "Deleted"),
    ("untracked", "Untracked"),
    ("conflicted", "Conflicted"),
)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def status_command(ctx: click.Context, as_json: bool) -> None:
    """Show the current branch and categorized changes."""
    engine = open_engine(ctx)
    with engine_errors():
        branch = current_branch_or_none(engine) or "(detached HEAD)"
        summary = engine.status_summary()
        pending_abort = engine.abort_artifact.exists()

    if as_json:
        data = {name: list(getattr(summary, name)) for name, _ in _SECTIONS}
        click.echo(
            json.dumps(
                {
                    "branch": branch,
                    "clean": summary.is_clean,
                    "abort_pending": pending_abort,
                    **data,
                }
            )
        )
        return

    console = Console()
    console.print(f"On branch [bold]{branch}[/bold]")
    if summary.is_clean:
        console.print("Working tree clean")
    for name, title in _SECTIONS:
        paths = getattr(summary, name)
        if not paths:
            continue
        console.print(f"{title}:")
        for path in paths:
            console.print(f"  {path}", highlight=False)
    if pending_abort:
        console.print(f"[yellow]Unresolved abort file:[/yellow] {engine.abort_artifact.path}")
