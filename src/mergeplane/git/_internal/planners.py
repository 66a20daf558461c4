"""Decision planners that separate "what to do" from "how to do it"."""

from __future__ import annotations

from dataclasses import dataclass

import pygit2

from mergeplane.git._internal.access import RepoHandle
from mergeplane.git._internal.constants import (
    MERGE_FASTFORWARD,
    MERGE_NORMAL,
    MERGE_UNBORN,
    MERGE_UP_TO_DATE,
)
from mergeplane.git.errors import GitError
from mergeplane.git.models import MergeKind


@dataclass(frozen=True, slots=True)
class MergePlan:
    """Plan for merging a source commit into HEAD."""

    kind: MergeKind
    source_oid: pygit2.Oid
    target_oid: pygit2.Oid | None = None
    base_oid: pygit2.Oid | None = None

    def must_target_and_base(self) -> tuple[pygit2.Oid, pygit2.Oid]:
        """(target, base) for plans that produce a commit."""
        if self.target_oid is None or self.base_oid is None:
            raise GitError(f"{self.kind.value} merge plan has no target or base commit")
        return self.target_oid, self.base_oid


class MergePlanner:
    """Classifies a merge of a source commit into the current HEAD."""

    def __init__(self, handle: RepoHandle) -> None:
        self._handle = handle

    def plan(self, source: pygit2.Commit) -> MergePlan:
        """Classify the merge. Reads only; nothing is written."""
        if not self._handle.is_state_clean() or self._handle.index_has_conflicts():
            return MergePlan(MergeKind.UNMERGED, source.id)

        target = self._handle.head_commit()
        if target is None:
            return MergePlan(MergeKind.UNBORN, source.id)

        analysis, _ = self._handle.merge_analysis(source.id)

        if analysis & MERGE_UP_TO_DATE:
            return MergePlan(MergeKind.UP_TO_DATE, source.id, target.id)

        if analysis & MERGE_UNBORN:
            return MergePlan(MergeKind.UNBORN, source.id, target.id)

        # libgit2 flags a fast-forward as NORMAL too, so check it first
        if analysis & MERGE_FASTFORWARD:
            return MergePlan(MergeKind.FAST_FORWARD, source.id, target.id, base_oid=target.id)

        if analysis & MERGE_NORMAL:
            base = self._handle.merge_base(target.id, source.id)
            if base is None:
                return MergePlan(MergeKind.UNMERGED, source.id, target.id)
            return MergePlan(MergeKind.NORMAL, source.id, target.id, base_oid=base)

        return MergePlan(MergeKind.UNMERGED, source.id, target.id)
