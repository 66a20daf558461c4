"""GitEngine - public facade over the branch lifecycle and merge components.

One engine instance owns one repository handle. Instances are not safe for
concurrent use; hosts either serialize calls to a shared engine or build one
engine per unit of work. Every call blocks on local repository I/O.
"""

from __future__ import annotations

from pathlib import Path

from mergeplane.config.loader import load_config
from mergeplane.config.models import MergePlaneConfig
from mergeplane.git._internal import RepoHandle
from mergeplane.git.abort import AbortArtifact
from mergeplane.git.branches import BranchManager
from mergeplane.git.history import HistoryExplorer
from mergeplane.git.merge import MergeEngine
from mergeplane.git.models import (
    BranchProvenance,
    CommitInfo,
    MergeResult,
    ReflogEntry,
    StatusSummary,
)
from mergeplane.git.reflog import ProvenanceLookup, ReflogAnalyzer
from mergeplane.git.status import StatusInspector


class GitEngine:
    """Issue branch lifecycle and merge orchestration for one repository."""

    def __init__(
        self,
        path: Path | str,
        *,
        config: MergePlaneConfig | None = None,
        provenance: ProvenanceLookup | None = None,
    ) -> None:
        self._handle = RepoHandle(path)
        self._handle.open_or_discover()
        self._config = config or load_config(self._handle.root)

        self._branches = BranchManager(self._handle, self._config.branches)
        self._status = StatusInspector(self._handle)
        self._reflog = ReflogAnalyzer(self._handle, self._branches, provenance)
        self._abort = AbortArtifact(self._handle.root)
        self._merge = MergeEngine(
            self._handle,
            self._branches,
            self._status,
            self._reflog,
            self._abort,
            self._config.merge,
        )
        self._history = HistoryExplorer(self._handle)

    # =========================================================================
    # Repository
    # =========================================================================

    @property
    def root(self) -> Path:
        return self._handle.root

    @property
    def git_dir(self) -> Path:
        return self._handle.git_dir

    @property
    def workdir(self) -> Path | None:
        return self._handle.workdir

    @property
    def is_bare(self) -> bool:
        return self._handle.is_bare

    @property
    def config(self) -> MergePlaneConfig:
        return self._config

    @property
    def abort_artifact(self) -> AbortArtifact:
        return self._abort

    def validate_state(self) -> None:
        """Raise RepositoryStateError if an interrupted operation is in progress."""
        self._handle.validate_state()

    # =========================================================================
    # Branches
    # =========================================================================

    def current_branch(self) -> str:
        return self._branches.current_branch()

    def branch_exists(self, name: str) -> bool:
        return self._branches.branch_exists(name)

    def main_branch(self) -> str:
        return self._branches.main_branch()

    def validate_branch_name(self, name: str) -> None:
        self._branches.validate_branch_name(name)

    def is_issue_branch(self, name: str) -> bool:
        return self._branches.is_issue_branch(name)

    def issue_branch_name(self, issue_id: str) -> str:
        return self._branches.issue_branch_name(issue_id)

    def can_create(self, name: str) -> bool:
        return self._branches.can_create(name)

    def create_and_checkout(self, issue_id: str) -> str:
        """Create the issue branch at HEAD and switch to it. Returns the branch name."""
        return self._branches.create_and_checkout(self._branches.issue_branch_name(issue_id))

    def work_on_issue(self, issue_id: str) -> str:
        """Resume the issue branch if it exists, create it otherwise."""
        return self._branches.work_on_issue(issue_id)

    def checkout(self, branch: str) -> None:
        self._branches.checkout(branch)

    def list_branches(self) -> list[str]:
        return self._branches.list_branches()

    def delete_branch(self, name: str, *, force: bool = False) -> None:
        self._branches.delete_branch(name, force=force)

    def cleanup_merged_issue_branches(self) -> list[str]:
        return self._branches.cleanup_merged_issue_branches()

    def list_unmerged_issue_branches(self) -> list[str]:
        return self._branches.list_unmerged_issue_branches()

    # =========================================================================
    # Status
    # =========================================================================

    def list_changes(self) -> list[str]:
        return self._status.list_changes()

    def has_uncommitted_changes(self) -> bool:
        return self._status.has_uncommitted_changes()

    def status_summary(self) -> StatusSummary:
        return self._status.status_summary()

    # =========================================================================
    # Provenance
    # =========================================================================

    def find_merge_target(self, issue_branch: str) -> str:
        return self._reflog.find_merge_target(issue_branch)

    def branch_creation_point(self, branch: str) -> BranchProvenance | None:
        return self._reflog.branch_creation_point(branch)

    def recent_operations(self, limit: int | None = None) -> list[ReflogEntry]:
        if limit is None:
            limit = self._config.limits.recent_operations_default
        return self._reflog.recent_operations(limit)

    # =========================================================================
    # Merge
    # =========================================================================

    def merge(self, source: str, target: str | None = None) -> MergeResult:
        return self._merge.merge(source, target)

    def merge_issue(self, issue_id: str, target: str | None = None) -> MergeResult:
        return self._merge.merge(self._branches.issue_branch_name(issue_id), target)

    # =========================================================================
    # History
    # =========================================================================

    def last_commit_summary(self) -> str:
        return self._history.last_commit_summary()

    def history(self, limit: int | None = None) -> list[CommitInfo]:
        return self._history.history(limit)

    def branch_history(self, branch: str, limit: int | None = None) -> list[CommitInfo]:
        return self._history.branch_history(branch, limit)

    def unique_to_branch(self, branch: str, base: str) -> list[CommitInfo]:
        return self._history.unique_to_branch(branch, base)

    def by_author(self, needle: str, limit: int | None = None) -> list[CommitInfo]:
        return self._history.by_author(needle, limit)

    def in_range(self, since: str, until: str) -> list[CommitInfo]:
        return self._history.in_range(since, until)
