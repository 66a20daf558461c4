"""Reusable write patterns for merge commits."""

from __future__ import annotations

from dataclasses import dataclass

import pygit2

from mergeplane.git._internal.access import RepoHandle


@dataclass(frozen=True, slots=True)
class ConflictCheckResult:
    """Result of a tree merge that may produce conflicts."""

    has_conflicts: bool
    conflict_paths: tuple[str, ...]


class WriteFlows:
    """Reusable patterns for writing merge results."""

    def __init__(self, handle: RepoHandle) -> None:
        self._handle = handle

    @staticmethod
    def extract_conflict_paths(index: pygit2.Index) -> tuple[str, ...]:
        """Extract unique conflict paths from an index."""
        paths: set[str] = set()
        for ancestor, ours, theirs in index.conflicts or ():
            for entry in (ancestor, ours, theirs):
                if entry:
                    paths.add(entry.path)
        return tuple(sorted(paths))

    def check_conflicts(self, index: pygit2.Index) -> ConflictCheckResult:
        """
        Check if a merge index has conflicts and extract paths.

        Contract: Non-destructive read. Does not modify the index or resolve conflicts.
        """
        if index.conflicts:
            return ConflictCheckResult(True, self.extract_conflict_paths(index))
        return ConflictCheckResult(False, ())

    def commit_tree_on_head(
        self,
        tree_id: pygit2.Oid,
        message: str,
        parents: list[pygit2.Oid],
        signature: pygit2.Signature,
    ) -> pygit2.Oid:
        """
        Create a commit on the branch HEAD points at, then sync index and working tree.

        Contract: Uses passed parents verbatim - does NOT re-read HEAD. The on-disk
        index is only rewritten once the commit exists.
        """
        oid = self._handle.create_commit("HEAD", signature, signature, message, tree_id, parents)
        self._handle.checkout_head()
        return oid
