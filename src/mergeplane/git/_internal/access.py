"""Repository handle - lazily discovers and owns the pygit2.Repository."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pygit2
import structlog

from mergeplane.git._internal.constants import CHECKOUT_FORCE, REPO_STATE_NONE, repo_state_name
from mergeplane.git._internal.errors import git_operation
from mergeplane.git._internal.parsing import extract_branch_name
from mergeplane.git.errors import (
    NotARepositoryError,
    RefNotFoundError,
    RepositoryStateError,
    UnbornBranchError,
)

log = structlog.get_logger(__name__)


def discover(start: Path) -> pygit2.Repository:
    """Open the repository containing ``start``, searching parent directories."""
    if not start.exists():
        raise NotARepositoryError(str(start))
    try:
        git_dir = pygit2.discover_repository(str(start))
    except (pygit2.GitError, KeyError) as e:
        raise NotARepositoryError(str(start)) from e
    if git_dir is None:
        raise NotARepositoryError(str(start))
    try:
        return pygit2.Repository(git_dir)
    except pygit2.GitError as e:
        raise NotARepositoryError(str(start)) from e


class RepoHandle:
    """Owns the pygit2.Repository for one engine instance.

    Nothing touches the filesystem until the first accessor is used; the
    discovered repository is then cached for the lifetime of the handle and
    never re-discovered.
    """

    def __init__(self, start_path: Path | str) -> None:
        self._start = Path(start_path)
        self._repo: pygit2.Repository | None = None

    def open_or_discover(self) -> pygit2.Repository:
        if self._repo is None:
            self._repo = discover(self._start)
            log.debug("repo.opened", start=str(self._start), git_dir=self._repo.path)
        return self._repo

    @property
    def repo(self) -> pygit2.Repository:
        return self.open_or_discover()

    @property
    def is_open(self) -> bool:
        return self._repo is not None

    def is_valid(self) -> bool:
        """True while the cached repository's git directory still exists."""
        return self._repo is not None and Path(self._repo.path).is_dir()

    # =========================================================================
    # Paths and Layout
    # =========================================================================

    @property
    def is_bare(self) -> bool:
        return self.repo.is_bare

    @property
    def git_dir(self) -> Path:
        return Path(self.repo.path)

    @property
    def workdir(self) -> Path | None:
        workdir = self.repo.workdir
        return Path(workdir) if workdir else None

    @property
    def root(self) -> Path:
        """Working directory, or the git directory for bare repositories."""
        return self.workdir or self.git_dir

    # =========================================================================
    # HEAD State Facts
    # =========================================================================

    @property
    def head(self) -> pygit2.Reference:
        with git_operation("read HEAD"):
            return self.repo.references["HEAD"]

    @property
    def is_unborn(self) -> bool:
        return self.repo.head_is_unborn

    @property
    def is_detached(self) -> bool:
        return self.repo.head_is_detached

    def head_branch_name(self) -> str | None:
        """Branch HEAD points at, including an unborn branch; None when detached."""
        if self.is_detached:
            return None
        target = self.head.target
        if isinstance(target, str):
            return extract_branch_name(target)
        return None

    def head_commit(self) -> pygit2.Commit | None:
        if self.is_unborn:
            return None
        with git_operation("resolve HEAD commit"):
            return self.repo.head.peel(pygit2.Commit)

    def must_head_commit(self, operation: str) -> pygit2.Commit:
        commit = self.head_commit()
        if commit is None:
            raise UnbornBranchError(operation)
        return commit

    @property
    def default_signature(self) -> pygit2.Signature | None:
        """Configured user identity, or None when user.name/user.email are unset."""
        try:
            return self.repo.default_signature
        except (KeyError, pygit2.GitError):
            return None

    def validate_state(self) -> None:
        """Raise if an interrupted merge/rebase/cherry-pick is in progress."""
        state = self.repo.state()
        if state != REPO_STATE_NONE:
            raise RepositoryStateError(repo_state_name(state))

    def is_state_clean(self) -> bool:
        return self.repo.state() == REPO_STATE_NONE

    # =========================================================================
    # Resolution Helpers
    # =========================================================================

    def resolve_commit(self, revision: str) -> pygit2.Commit:
        try:
            obj = self.repo.revparse_single(revision)
            commit = obj.peel(pygit2.Commit)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(revision) from e
        return commit

    # =========================================================================
    # Branch Access
    # =========================================================================

    def local_branch(self, name: str) -> pygit2.Branch | None:
        with git_operation(f"look up branch {name}"):
            return self.repo.branches.local.get(name)

    def local_branch_names(self) -> list[str]:
        with git_operation("list branches"):
            return sorted(self.repo.branches.local)

    def lookup_commit(self, oid: pygit2.Oid) -> pygit2.Commit:
        with git_operation(f"read commit {oid}"):
            return self.repo[oid].peel(pygit2.Commit)

    def branch_commit(self, branch: pygit2.Branch) -> pygit2.Commit:
        with git_operation(f"resolve branch {branch.branch_name}"):
            return branch.peel(pygit2.Commit)

    # =========================================================================
    # Low-level pygit2 Operations (all pygit2 quirks live here)
    # =========================================================================

    def create_local_branch(self, name: str, target: pygit2.Commit) -> pygit2.Branch:
        with git_operation(f"create branch {name}"):
            return self.repo.branches.local.create(name, target)

    def delete_local_branch(self, branch: pygit2.Branch) -> None:
        with git_operation(f"delete branch {branch.branch_name}"):
            branch.delete()

    def checkout_branch(self, branch: pygit2.Branch) -> None:
        """Materialize the branch tree (forced) and point HEAD at the branch.

        The tree is written before HEAD moves, so a failed checkout leaves HEAD
        where it was. Moving HEAD records a 'checkout: moving from' reflog entry.
        """
        with git_operation(f"checkout {branch.branch_name}"):
            self.repo.checkout(branch, strategy=CHECKOUT_FORCE)

    def set_head(self, refname: str) -> None:
        with git_operation(f"set HEAD to {refname}"):
            self.repo.set_head(refname)

    def checkout_head(self) -> None:
        """Force index and working tree to match HEAD."""
        with git_operation("checkout HEAD"):
            self.repo.checkout_head(strategy=CHECKOUT_FORCE)

    def status(self) -> dict[str, int]:
        with git_operation("read status"):
            return self.repo.status()

    def index_has_conflicts(self) -> bool:
        with git_operation("read index"):
            return self.repo.index.conflicts is not None

    def merge_analysis(self, their_oid: pygit2.Oid) -> tuple[int, int]:
        with git_operation("analyze merge"):
            return self.repo.merge_analysis(their_oid)

    def merge_base(self, oid1: pygit2.Oid, oid2: pygit2.Oid) -> pygit2.Oid | None:
        with git_operation("find merge base"):
            return self.repo.merge_base(oid1, oid2)

    def merge_trees(
        self, ancestor: pygit2.Tree, ours: pygit2.Tree, theirs: pygit2.Tree
    ) -> pygit2.Index:
        """Three-way merge in memory; the repository index is not touched."""
        with git_operation("merge trees"):
            return self.repo.merge_trees(ancestor, ours, theirs)

    def write_index_tree(self, index: pygit2.Index) -> pygit2.Oid:
        with git_operation("write merged tree"):
            return index.write_tree(self.repo)

    def create_commit(
        self,
        refname: str,
        author: pygit2.Signature,
        committer: pygit2.Signature,
        message: str,
        tree_id: pygit2.Oid,
        parents: list[pygit2.Oid],
    ) -> pygit2.Oid:
        with git_operation("create commit"):
            return self.repo.create_commit(refname, author, committer, message, tree_id, parents)

    def walk_commits(self, start: pygit2.Oid, sort: int) -> pygit2.Walker:
        with git_operation("walk history"):
            return self.repo.walk(start, sort)

    def descendant_of(self, oid: pygit2.Oid, ancestor: pygit2.Oid) -> bool:
        if oid == ancestor:
            return True
        with git_operation("check ancestry"):
            return self.repo.descendant_of(oid, ancestor)

    def head_reflog(self) -> Iterator[pygit2.RefLogEntry]:
        """HEAD reflog entries, newest first."""
        with git_operation("read HEAD reflog"):
            entries = list(self.repo.references["HEAD"].log())
        yield from entries
