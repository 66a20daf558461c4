"""mpl cleanup command - delete issue branches already merged into main."""

import click

from mergeplane.cli.utils import current_branch_or_none, engine_errors, open_engine


@click.command()
@click.option("--dry-run", is_flag=True, help="Only list what would be deleted")
@click.pass_context
def cleanup_command(ctx: click.Context, dry_run: bool) -> None:
    """Delete merged issue branches; list the unmerged ones."""
    engine = open_engine(ctx)
    with engine_errors():
        unmerged = set(engine.list_unmerged_issue_branches())
        if dry_run:
            current = current_branch_or_none(engine)
            issue_branches = [b for b in engine.list_branches() if engine.is_issue_branch(b)]
            deleted = [b for b in issue_branches if b not in unmerged and b != current]
        else:
            deleted = engine.cleanup_merged_issue_branches()

    verb = "Would delete" if dry_run else "Deleted"
    for name in deleted:
        click.echo(f"{verb} {name}")
    for name in sorted(unmerged):
        click.echo(f"Kept {name} (not merged)")
    if not deleted and not unmerged:
        click.echo("No issue branches")
