"""Commit history traversal and filtering."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from itertools import islice

import pygit2

from mergeplane.git._internal import RepoHandle, git_operation, require_branch
from mergeplane.git._internal.constants import SORT_TOPO_TIME
from mergeplane.git.models import CommitInfo, Signature

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def _take(commits: Iterable[pygit2.Commit], limit: int | None) -> list[CommitInfo]:
    with git_operation("walk history"):
        return [CommitInfo.from_pygit2(c) for c in islice(commits, limit)]


class HistoryExplorer:
    """Newest-first commit walks from HEAD, branches and revision ranges."""

    def __init__(self, handle: RepoHandle) -> None:
        self._handle = handle

    def last_commit_summary(self) -> str:
        """'<sha>|<subject>|<author>|<YYYY-MM-DD HH:MM:SS +HHMM>' for HEAD."""
        commit = self._handle.must_head_commit("summarize last commit")
        info = CommitInfo.from_pygit2(commit)
        when = Signature.from_pygit2(commit.author).local_time.strftime(_TIMESTAMP_FORMAT)
        return f"{info.sha}|{info.summary}|{info.author.name}|{when}"

    def history(self, limit: int | None = None) -> list[CommitInfo]:
        head = self._handle.head_commit()
        if head is None:
            return []
        return _take(self._handle.walk_commits(head.id, SORT_TOPO_TIME), limit)

    def branch_history(self, branch: str, limit: int | None = None) -> list[CommitInfo]:
        tip = self._handle.branch_commit(require_branch(self._handle, branch))
        return _take(self._handle.walk_commits(tip.id, SORT_TOPO_TIME), limit)

    def unique_to_branch(self, branch: str, base: str) -> list[CommitInfo]:
        """Commits reachable from ``branch`` but not from ``base``."""
        tip = self._handle.branch_commit(require_branch(self._handle, branch))
        base_tip = self._handle.branch_commit(require_branch(self._handle, base))
        walker = self._handle.walk_commits(tip.id, SORT_TOPO_TIME)
        merge_base = self._handle.merge_base(tip.id, base_tip.id)
        if merge_base is not None:
            walker.hide(merge_base)
        return _take(walker, None)

    def by_author(self, needle: str, limit: int | None = None) -> list[CommitInfo]:
        """Commits whose author name or email contains ``needle``."""
        return self._filter(
            lambda c: needle in c.author.name or needle in c.author.email,
            limit,
        )

    def in_range(self, since: str, until: str) -> list[CommitInfo]:
        """Commits reachable from ``until`` but not from ``since`` (git's since..until)."""
        until_commit = self._handle.resolve_commit(until)
        since_commit = self._handle.resolve_commit(since)
        walker = self._handle.walk_commits(until_commit.id, SORT_TOPO_TIME)
        walker.hide(since_commit.id)
        return _take(walker, None)

    def _filter(
        self, predicate: Callable[[pygit2.Commit], bool], limit: int | None
    ) -> list[CommitInfo]:
        head = self._handle.head_commit()
        if head is None:
            return []
        matches = (c for c in self._handle.walk_commits(head.id, SORT_TOPO_TIME) if predicate(c))
        return _take(matches, limit)

