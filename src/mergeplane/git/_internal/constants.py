"""Internal pygit2 constants - keeps trivia out of public modules."""

from __future__ import annotations

import pygit2
from pygit2.enums import CheckoutStrategy, RepositoryState

# Commit walking (children before parents, newest first among siblings)
SORT_TOPO_TIME = pygit2.GIT_SORT_TOPOLOGICAL | pygit2.GIT_SORT_TIME

# Checkout strategies
CHECKOUT_FORCE = CheckoutStrategy.FORCE

# Index status flags
STATUS_INDEX_NEW = pygit2.GIT_STATUS_INDEX_NEW
STATUS_INDEX_MODIFIED = pygit2.GIT_STATUS_INDEX_MODIFIED
STATUS_INDEX_DELETED = pygit2.GIT_STATUS_INDEX_DELETED
STATUS_INDEX_RENAMED = pygit2.GIT_STATUS_INDEX_RENAMED
STATUS_INDEX_TYPECHANGE = pygit2.GIT_STATUS_INDEX_TYPECHANGE

# Working tree status flags
STATUS_WT_NEW = pygit2.GIT_STATUS_WT_NEW
STATUS_WT_MODIFIED = pygit2.GIT_STATUS_WT_MODIFIED
STATUS_WT_DELETED = pygit2.GIT_STATUS_WT_DELETED
STATUS_WT_RENAMED = pygit2.GIT_STATUS_WT_RENAMED
STATUS_WT_TYPECHANGE = pygit2.GIT_STATUS_WT_TYPECHANGE

STATUS_IGNORED = pygit2.GIT_STATUS_IGNORED
STATUS_CONFLICTED = pygit2.GIT_STATUS_CONFLICTED

# Everything that counts as tracked work (untracked files excluded)
STATUS_TRACKED_CHANGES = (
    STATUS_INDEX_NEW
    | STATUS_INDEX_MODIFIED
    | STATUS_INDEX_DELETED
    | STATUS_INDEX_RENAMED
    | STATUS_INDEX_TYPECHANGE
    | STATUS_WT_MODIFIED
    | STATUS_WT_DELETED
    | STATUS_WT_RENAMED
    | STATUS_WT_TYPECHANGE
    | STATUS_CONFLICTED
)

# Merge analysis flags
MERGE_UP_TO_DATE = pygit2.GIT_MERGE_ANALYSIS_UP_TO_DATE
MERGE_FASTFORWARD = pygit2.GIT_MERGE_ANALYSIS_FASTFORWARD
MERGE_NORMAL = pygit2.GIT_MERGE_ANALYSIS_NORMAL
MERGE_UNBORN = pygit2.GIT_MERGE_ANALYSIS_UNBORN

# Repository states
REPO_STATE_NONE = RepositoryState.NONE

_REPO_STATE_NAMES = {
    RepositoryState.MERGE: "merge",
    RepositoryState.REVERT: "revert",
    RepositoryState.REVERT_SEQUENCE: "revert",
    RepositoryState.CHERRYPICK: "cherry-pick",
    RepositoryState.CHERRYPICK_SEQUENCE: "cherry-pick",
    RepositoryState.BISECT: "bisect",
    RepositoryState.REBASE: "rebase",
    RepositoryState.REBASE_INTERACTIVE: "rebase",
    RepositoryState.REBASE_MERGE: "rebase",
    RepositoryState.APPLY_MAILBOX: "am",
    RepositoryState.APPLY_MAILBOX_OR_REBASE: "am",
}


def repo_state_name(state: int) -> str:
    """Human-readable name of a repository state value."""
    return _REPO_STATE_NAMES.get(state, f"unknown ({state})")
