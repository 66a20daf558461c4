"""Precondition helpers and HEAD state policy for git operations."""

from __future__ import annotations

import pygit2

from mergeplane.git._internal.access import RepoHandle
from mergeplane.git.errors import (
    BranchNotFoundError,
    DetachedHeadError,
    GitError,
)

# =============================================================================
# HEAD Preconditions
# =============================================================================


def require_current_branch(handle: RepoHandle, operation: str) -> str:
    """Raise if detached HEAD; return current branch name."""
    branch = handle.head_branch_name()
    if not branch:
        raise DetachedHeadError(operation)
    return branch


# =============================================================================
# Branch Preconditions
# =============================================================================


def require_not_current_branch(handle: RepoHandle, branch_name: str) -> None:
    """Raise if trying to delete the branch HEAD is on."""
    if branch_name == handle.head_branch_name():
        raise GitError(f"Cannot delete current branch: {branch_name}")


def require_branch(handle: RepoHandle, branch_name: str) -> pygit2.Branch:
    """Return the local branch or raise BranchNotFoundError."""
    branch = handle.local_branch(branch_name)
    if branch is None:
        raise BranchNotFoundError(branch_name)
    return branch
