"""Working tree and index change inspection."""

from __future__ import annotations

from mergeplane.git._internal import RepoHandle
from mergeplane.git._internal.constants import (
    STATUS_CONFLICTED,
    STATUS_IGNORED,
    STATUS_INDEX_DELETED,
    STATUS_INDEX_MODIFIED,
    STATUS_INDEX_NEW,
    STATUS_INDEX_RENAMED,
    STATUS_INDEX_TYPECHANGE,
    STATUS_TRACKED_CHANGES,
    STATUS_WT_DELETED,
    STATUS_WT_MODIFIED,
    STATUS_WT_NEW,
    STATUS_WT_RENAMED,
    STATUS_WT_TYPECHANGE,
)
from mergeplane.git.models import StatusSummary

# Summary field -> status flags that place a path in it
_CATEGORIES: tuple[tuple[str, int], ...] = (
    ("staged_modified", STATUS_INDEX_MODIFIED),
    ("staged_new", STATUS_INDEX_NEW),
    ("staged_deleted", STATUS_INDEX_DELETED),
    ("unstaged_modified", STATUS_WT_MODIFIED),
    ("unstaged_deleted", STATUS_WT_DELETED),
    ("untracked", STATUS_WT_NEW),
    ("renamed", STATUS_INDEX_RENAMED | STATUS_WT_RENAMED),
    ("typechange", STATUS_INDEX_TYPECHANGE | STATUS_WT_TYPECHANGE),
    ("conflicted", STATUS_CONFLICTED),
)


class StatusInspector:
    """Reports changes in the index and working tree."""

    def __init__(self, handle: RepoHandle) -> None:
        self._handle = handle

    def _changed(self) -> dict[str, int]:
        return {
            path: flags
            for path, flags in self._handle.status().items()
            if flags and not flags & STATUS_IGNORED
        }

    def list_changes(self) -> list[str]:
        """Modified, staged and untracked paths, sorted. Ignored paths are excluded."""
        return sorted(self._changed())

    def has_uncommitted_changes(self) -> bool:
        """True if anything is staged or a tracked file is modified; untracked files don't count."""
        return any(flags & STATUS_TRACKED_CHANGES for flags in self._changed().values())

    def status_summary(self) -> StatusSummary:
        changed = self._changed()
        buckets = {
            name: tuple(sorted(path for path, flags in changed.items() if flags & mask))
            for name, mask in _CATEGORIES
        }
        return StatusSummary(**buckets)
