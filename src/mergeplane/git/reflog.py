"""Branch provenance reconstruction from the HEAD reflog."""

from __future__ import annotations

from collections.abc import Callable
from itertools import islice

import structlog

from mergeplane.git._internal import RepoHandle, parse_checkout, require_branch
from mergeplane.git.branches import BranchManager
from mergeplane.git.errors import NoProvenanceError
from mergeplane.git.models import BranchProvenance, EvidenceKind, ReflogEntry

log = structlog.get_logger(__name__)

ProvenanceLookup = Callable[[str], str | None]
"""Caller-owned lookup: branch name -> recorded source branch, or None."""


class ReflogAnalyzer:
    """Answers "which branch was this branch created from?".

    The HEAD reflog is the primary evidence. Reflog entries expire, so an
    optional externally persisted lookup is consulted when the reflog has
    nothing usable.
    """

    def __init__(
        self,
        handle: RepoHandle,
        branches: BranchManager,
        provenance: ProvenanceLookup | None = None,
    ) -> None:
        self._handle = handle
        self._branches = branches
        self._provenance = provenance

    def _accepts(self, candidate: str, branch: str) -> bool:
        # Issue branches never become merge targets, which rules out merge cycles
        return (
            candidate != branch
            and not self._branches.is_issue_branch(candidate)
            and self._branches.branch_exists(candidate)
        )

    def find_merge_target(self, issue_branch: str) -> str:
        """Most recent branch that ``issue_branch`` was checked out from.

        Raises BranchNotFoundError when ``issue_branch`` does not exist, and
        NoProvenanceError when no surviving, non-issue source is recorded.
        Writes nothing.
        """
        require_branch(self._handle, issue_branch)
        source = self._reflog_source(issue_branch)
        if source is None:
            raise NoProvenanceError(issue_branch)
        return source

    def _reflog_source(self, issue_branch: str) -> str | None:
        for entry in self._handle.head_reflog():
            transition = parse_checkout(entry.message or "")
            if transition is None:
                continue
            source, destination = transition
            if destination != issue_branch:
                continue
            if self._accepts(source, issue_branch):
                log.debug("provenance.reflog_match", branch=issue_branch, source=source)
                return source
            log.debug("provenance.candidate_rejected", branch=issue_branch, candidate=source)
        return None

    def recent_operations(self, limit: int) -> list[ReflogEntry]:
        """Newest-first HEAD reflog entries, at most ``limit``."""
        if limit <= 0:
            return []
        return [ReflogEntry.from_pygit2(e) for e in islice(self._handle.head_reflog(), limit)]

    def branch_creation_point(self, branch_name: str) -> BranchProvenance | None:
        """Source branch plus the kind of evidence used, or None if unknown."""
        source = self._reflog_source(branch_name)
        if source is not None:
            log.info("provenance.resolved", branch=branch_name, source=source, evidence="reflog")
            return BranchProvenance(source, EvidenceKind.REFLOG)

        if self._provenance is None:
            return None
        recorded = self._provenance(branch_name)
        if recorded and self._accepts(recorded, branch_name):
            log.info(
                "provenance.resolved", branch=branch_name, source=recorded, evidence="external"
            )
            return BranchProvenance(recorded, EvidenceKind.EXTERNAL)
        if recorded:
            log.warning("provenance.external_rejected", branch=branch_name, source=recorded)
        return None
