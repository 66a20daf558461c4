"""mpl work command - start or resume an issue branch."""

import click

from mergeplane.cli.utils import engine_errors, open_engine


@click.command()
@click.argument("issue_id")
@click.pass_context
def work_command(ctx: click.Context, issue_id: str) -> None:
    """Switch to the branch for ISSUE_ID, creating it from HEAD if needed."""
    engine = open_engine(ctx)
    with engine_errors():
        existed = engine.branch_exists(engine.issue_branch_name(issue_id))
        branch = engine.work_on_issue(issue_id)
    click.echo(f"{'Resumed' if existed else 'Created'} {branch}")
