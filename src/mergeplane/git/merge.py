"""Merge orchestration: target resolution, classification, commit or conflict report."""

from __future__ import annotations

import pygit2
import structlog

from mergeplane.config.models import MergeConfig
from mergeplane.git._internal import MergePlan, MergePlanner, RepoHandle, WriteFlows, require_branch
from mergeplane.git.abort import (
    AbortArtifact,
    conflict_reason,
    no_target_reason,
    unmergeable_reason,
)
from mergeplane.git.branches import BranchManager
from mergeplane.git.errors import MergeConflictError, NoProvenanceError, UnmergeableStateError
from mergeplane.git.models import MergeKind, MergeResult
from mergeplane.git.reflog import ReflogAnalyzer
from mergeplane.git.status import StatusInspector

log = structlog.get_logger(__name__)


class MergeEngine:
    """Merges one branch into another, always recording an explicit merge commit.

    A fast-forwardable merge still produces a two-parent commit (target, source)
    with the source tree. Three-way merges are computed in memory, so a
    conflicting merge leaves the index, working tree and target branch as they
    were after the target was checked out.
    """

    def __init__(
        self,
        handle: RepoHandle,
        branches: BranchManager,
        status: StatusInspector,
        reflog: ReflogAnalyzer,
        abort: AbortArtifact,
        config: MergeConfig | None = None,
    ) -> None:
        self._handle = handle
        self._branches = branches
        self._status = status
        self._reflog = reflog
        self._abort = abort
        self._config = config or MergeConfig()
        self._planner = MergePlanner(handle)
        self._flows = WriteFlows(handle)

    def merge(self, source: str, target: str | None = None) -> MergeResult:
        """Merge ``source`` into ``target`` (resolved from provenance when None).

        Raises:
            BranchNotFoundError: source or explicit target does not exist.
            NoProvenanceError: no target given and none could be resolved (abort file written).
            MergeConflictError: conflicting changes (abort file written).
            UnmergeableStateError: no valid merge base or unresolved state (abort file written).
        """
        source_branch = require_branch(self._handle, source)
        if target is None:
            target = self.resolve_target(source)
        else:
            require_branch(self._handle, target)

        if self._status.has_uncommitted_changes():
            log.warning(
                "merge.overwriting_uncommitted",
                target=target,
                paths=self._status.list_changes(),
            )

        self._branches.checkout(target)
        source_commit = self._handle.branch_commit(source_branch)
        plan = self._planner.plan(source_commit)
        log.debug("merge.classified", source=source, target=target, kind=plan.kind.value)

        if plan.kind is MergeKind.UP_TO_DATE:
            log.info("merge.up_to_date", source=source, target=target)
            return MergeResult(MergeKind.UP_TO_DATE, source, target)

        if plan.kind is MergeKind.FAST_FORWARD:
            return self._commit(plan, source_commit.tree_id, source, target)

        if plan.kind is MergeKind.NORMAL:
            return self._three_way(plan, source, target)

        self._abort.write(unmergeable_reason(source, target, plan.kind.value))
        raise UnmergeableStateError(source, target, plan.kind.value)

    def resolve_target(self, source: str) -> str:
        """Target branch for ``source`` from provenance; writes the abort file on failure."""
        provenance = self._reflog.branch_creation_point(source)
        if provenance is None:
            self._abort.write(no_target_reason(source))
            raise NoProvenanceError(source)
        return provenance.source_branch

    def _three_way(self, plan: MergePlan, source: str, target: str) -> MergeResult:
        target_oid, base_oid = plan.must_target_and_base()
        ancestor = self._handle.lookup_commit(base_oid).tree
        ours = self._handle.lookup_commit(target_oid).tree
        theirs = self._handle.lookup_commit(plan.source_oid).tree

        index = self._handle.merge_trees(ancestor, ours, theirs)
        conflicts = self._flows.check_conflicts(index)
        if conflicts.has_conflicts:
            files = conflicts.conflict_paths
            self._abort.write(conflict_reason(source, target, files))
            log.warning("merge.conflicts", source=source, target=target, files=list(files))
            raise MergeConflictError(files, source, target)

        tree_id = self._handle.write_index_tree(index)
        return self._commit(plan, tree_id, source, target)

    def _commit(
        self, plan: MergePlan, tree_id: pygit2.Oid, source: str, target: str
    ) -> MergeResult:
        target_oid, _ = plan.must_target_and_base()
        parents = [target_oid, plan.source_oid]
        message = self._config.message_template.format(source=source, target=target)
        oid = self._flows.commit_tree_on_head(tree_id, message, parents, self._signature())
        log.info(
            "merge.completed",
            source=source,
            target=target,
            kind=plan.kind.value,
            sha=str(oid),
        )
        return MergeResult(
            plan.kind,
            source,
            target,
            commit_sha=str(oid),
            parent_shas=tuple(str(p) for p in parents),
        )

    def _signature(self) -> pygit2.Signature:
        sig = self._handle.default_signature
        if sig is not None:
            return sig
        return pygit2.Signature(self._config.fallback_name, self._config.fallback_email)
