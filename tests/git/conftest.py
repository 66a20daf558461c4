"""Test fixtures for git module."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

from mergeplane.config.models import MergePlaneConfig
from mergeplane.git import GitEngine
from mergeplane.git.reflog import ProvenanceLookup

if TYPE_CHECKING:
    from collections.abc import Generator

CommitFile = Callable[..., pygit2.Oid]
Switch = Callable[[pygit2.Repository, str], None]
EngineFactory = Callable[..., GitEngine]


def _commit_file(
    repo: pygit2.Repository,
    name: str,
    content: str,
    message: str | None = None,
    *,
    author: pygit2.Signature | None = None,
) -> pygit2.Oid:
    """Write a file, stage it and commit on the current branch."""
    workdir = Path(repo.workdir)
    path = workdir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)

    index = repo.index
    index.read()
    index.add(name)
    index.write()
    tree = index.write_tree()
    sig = author or repo.default_signature
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("HEAD", sig, sig, message or f"Update {name}", tree, parents)


def _switch(repo: pygit2.Repository, name: str) -> None:
    """Check out an existing local branch (records a reflog checkout entry)."""
    repo.checkout(repo.branches.local[name])


@pytest.fixture
def commit_file() -> CommitFile:
    return _commit_file


@pytest.fixture
def switch() -> Switch:
    return _switch


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with initial commit on main."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    # Configure user
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    # Create initial commit
    (repo_path / "README.md").write_text("# Test Repo\n")
    repo.index.add("README.md")
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    repo.create_commit("refs/heads/main", sig, sig, "Initial commit", tree, [])

    yield repo


@pytest.fixture
def unborn_repo(tmp_path: Path) -> pygit2.Repository:
    """Repository with HEAD on main but no commits."""
    repo_path = tmp_path / "unborn"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"
    return repo


@pytest.fixture
def make_engine() -> EngineFactory:
    """Build engines with default config, isolated from user/global config files."""

    def factory(
        repo: pygit2.Repository | Path | str,
        *,
        config: MergePlaneConfig | None = None,
        provenance: ProvenanceLookup | None = None,
    ) -> GitEngine:
        path = repo.workdir if isinstance(repo, pygit2.Repository) else repo
        return GitEngine(path, config=config or MergePlaneConfig(), provenance=provenance)

    return factory


@pytest.fixture
def engine(temp_repo: pygit2.Repository, make_engine: EngineFactory) -> GitEngine:
    return make_engine(temp_repo)


@pytest.fixture
def repo_with_branches(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """Repository where main and feature diverge without touching the same files."""
    head_commit = temp_repo.head.peel(pygit2.Commit)
    temp_repo.branches.local.create("feature", head_commit)

    _commit_file(temp_repo, "main.txt", "main branch\n", "Commit on main")

    _switch(temp_repo, "feature")
    _commit_file(temp_repo, "feature.txt", "feature branch\n", "Commit on feature")

    _switch(temp_repo, "main")
    return temp_repo


@pytest.fixture
def repo_with_uncommitted(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """Repository with staged, modified and untracked changes."""
    workdir = Path(temp_repo.workdir)

    # Staged change
    (workdir / "staged.txt").write_text("staged content\n")
    temp_repo.index.add("staged.txt")
    temp_repo.index.write()

    # Modified (unstaged)
    (workdir / "README.md").write_text("# Modified\n")

    # Untracked
    (workdir / "untracked.txt").write_text("untracked\n")

    return temp_repo


@pytest.fixture
def repo_with_conflict(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """main and issue/9 both edit the same lines of shared.txt and other.txt.

    issue/9 also adds clean.txt, which does not conflict.
    """
    _commit_file(temp_repo, "shared.txt", "line one\nline two\n", "Add shared")
    _commit_file(temp_repo, "other.txt", "alpha\n", "Add other")
    base = temp_repo.head.peel(pygit2.Commit)
    temp_repo.branches.local.create("issue/9", base)

    _commit_file(temp_repo, "shared.txt", "line one\nmain edit\n", "Edit shared on main")
    _commit_file(temp_repo, "other.txt", "alpha main\n", "Edit other on main")

    _switch(temp_repo, "issue/9")
    _commit_file(temp_repo, "shared.txt", "line one\nissue edit\n", "Edit shared on issue")
    _commit_file(temp_repo, "other.txt", "alpha issue\n", "Edit other on issue")
    _commit_file(temp_repo, "clean.txt", "only on issue\n", "Add clean")

    _switch(temp_repo, "main")
    return temp_repo


@pytest.fixture
def repo_with_history(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """Repository with five commits after the initial one."""
    for i in range(5):
        _commit_file(temp_repo, f"file{i}.txt", f"content {i}\n", f"Commit {i}")
    return temp_repo
