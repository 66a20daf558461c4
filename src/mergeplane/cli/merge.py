"""mpl merge command - merge an issue branch back where it came from."""

import click

from mergeplane.cli.utils import open_engine
from mergeplane.git import (
    GitError,
    MergeConflictError,
    MergeKind,
    NoProvenanceError,
    UnmergeableStateError,
)


@click.command()
@click.argument("issue_id")
@click.option("--into", "target", default=None, help="Target branch (default: where it started)")
@click.pass_context
def merge_command(ctx: click.Context, issue_id: str, target: str | None) -> None:
    """Merge the branch for ISSUE_ID into its source branch."""
    engine = open_engine(ctx)
    abort_path = engine.abort_artifact.path
    try:
        result = engine.merge_issue(issue_id, target)
    except MergeConflictError as e:
        click.echo(f"Merge stopped: conflicts in {len(e.files)} file(s):", err=True)
        for path in e.files:
            click.echo(f"  {path}", err=True)
        click.echo(f"Details written to {abort_path}", err=True)
        raise click.ClickException(str(e)) from e
    except (NoProvenanceError, UnmergeableStateError) as e:
        click.echo(f"Details written to {abort_path}", err=True)
        raise click.ClickException(str(e)) from e
    except GitError as e:
        raise click.ClickException(str(e)) from e

    if result.kind is MergeKind.UP_TO_DATE:
        click.echo(f"{result.target} already contains {result.source}")
        return
    click.echo(f"Merged {result.source} into {result.target} ({result.kind.value})")
    click.echo(f"Commit: {result.commit_sha}")
