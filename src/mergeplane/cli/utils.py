"""CLI utilities."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from mergeplane.core.errors import ConfigError
from mergeplane.core.logging import configure_logging
from mergeplane.git import DetachedHeadError, GitEngine, GitError, NotARepositoryError


def open_engine(ctx: click.Context) -> GitEngine:
    """Open the engine for the repository given by -C (default: cwd).

    Applies the repository's logging config; -v forces DEBUG.

    Raises:
        click.ClickException: If the path is not inside a git repository
    """
    path: Path = ctx.obj.get("repo_path") or Path.cwd()
    try:
        engine = GitEngine(path)
    except NotARepositoryError as e:
        raise click.ClickException(
            f"Not inside a git repository: {path}\n"
            "MergePlane commands must be run from within a git repository, or pass -C PATH."
        ) from e
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = engine.config.logging
    if ctx.obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return engine


@contextmanager
def engine_errors() -> Iterator[None]:
    """Render engine errors as click errors (exit code 1)."""
    try:
        yield
    except GitError as e:
        raise click.ClickException(str(e)) from e


def current_branch_or_none(engine: GitEngine) -> str | None:
    """Current branch name, or None when HEAD is detached."""
    try:
        return engine.current_branch()
    except DetachedHeadError:
        return None
