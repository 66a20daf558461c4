"""Fixtures for CLI command tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import patch

import pygit2
import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path) -> Generator[None, None, None]:
    """Keep the user's global config out of CLI runs."""
    with patch("mergeplane.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers bound to the runner's streams once a command has finished."""
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with initial commit on main."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test"
    repo.config["user.email"] = "test@test.com"

    (repo_path / "README.md").write_text("# Test repo\n")
    repo.index.add("README.md")
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test", "test@test.com")
    repo.create_commit("HEAD", sig, sig, "Initial commit", tree, [])

    yield repo_path


@pytest.fixture
def temp_non_git(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary non-git directory."""
    non_git = tmp_path / "not-a-repo"
    non_git.mkdir()
    yield non_git


def commit(repo_path: Path, name: str, content: str, message: str) -> None:
    """Commit a single file on the current branch."""
    repo = pygit2.Repository(str(repo_path))
    (repo_path / name).write_text(content)
    repo.index.read()
    repo.index.add(name)
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test", "test@test.com")
    repo.create_commit("HEAD", sig, sig, message, tree, [repo.head.target])


@pytest.fixture
def commit_on_head() -> Callable[[Path, str, str, str], None]:
    return commit
