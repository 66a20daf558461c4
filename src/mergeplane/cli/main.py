"""MergePlane CLI - mpl command."""

from pathlib import Path

import click

from mergeplane import __version__
from mergeplane.cli.cleanup import cleanup_command
from mergeplane.cli.log import log_command
from mergeplane.cli.merge import merge_command
from mergeplane.cli.provenance import provenance_command
from mergeplane.cli.status import status_command
from mergeplane.cli.work import work_command
from mergeplane.core.logging import configure_logging, set_operation_id


@click.group()
@click.version_option(version=__version__, prog_name="mpl")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-C",
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, repo_path: Path | None) -> None:
    """MergePlane - issue branches that know where they came from."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["repo_path"] = repo_path
    # Replaced by the repository's logging config once a command opens the engine
    configure_logging(level="DEBUG" if verbose else "WARNING")
    set_operation_id()


cli.add_command(work_command, name="work")
cli.add_command(merge_command, name="merge")
cli.add_command(status_command, name="status")
cli.add_command(log_command, name="log")
cli.add_command(provenance_command, name="provenance")
cli.add_command(cleanup_command, name="cleanup")


if __name__ == "__main__":
    cli()
