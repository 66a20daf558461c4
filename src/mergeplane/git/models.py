"""Serializable data models for git engine results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, timezone
from enum import Enum

import pygit2

from mergeplane.config.constants import SHORT_SHA_LENGTH


@dataclass(frozen=True, slots=True)
class Signature:
    """Git author/committer signature."""

    name: str
    email: str
    time: datetime
    offset_minutes: int = 0

    @classmethod
    def from_pygit2(cls, sig: pygit2.Signature) -> Signature:
        return cls(
            sig.name,
            sig.email,
            datetime.fromtimestamp(sig.time, tz=UTC),
            sig.offset,
        )

    @property
    def local_time(self) -> datetime:
        """Timestamp in the signer's recorded UTC offset."""
        return self.time.astimezone(timezone(timedelta(minutes=self.offset_minutes)))


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Git commit information."""

    sha: str
    short_sha: str
    message: str
    summary: str
    author: Signature
    committer: Signature
    parent_shas: tuple[str, ...]

    @property
    def parent_count(self) -> int:
        return len(self.parent_shas)

    @property
    def timestamp(self) -> datetime:
        return self.author.time

    @classmethod
    def from_pygit2(cls, commit: pygit2.Commit) -> CommitInfo:
        sha = str(commit.id)
        message = commit.message.rstrip()
        return cls(
            sha=sha,
            short_sha=sha[:SHORT_SHA_LENGTH],
            message=message,
            summary=message.splitlines()[0] if message else "",
            author=Signature.from_pygit2(commit.author),
            committer=Signature.from_pygit2(commit.committer),
            parent_shas=tuple(str(p) for p in commit.parent_ids),
        )


@dataclass(frozen=True, slots=True)
class ReflogEntry:
    """Single HEAD reflog record."""

    old_sha: str
    new_sha: str
    committer: str
    message: str
    time: datetime

    @classmethod
    def from_pygit2(cls, entry: pygit2.RefLogEntry) -> ReflogEntry:
        committer = entry.committer
        return cls(
            old_sha=str(entry.oid_old),
            new_sha=str(entry.oid_new),
            committer=committer.name,
            message=entry.message or "",
            time=datetime.fromtimestamp(committer.time, tz=UTC),
        )


@dataclass(frozen=True, slots=True)
class StatusSummary:
    """Categorized working tree and index changes."""

    staged_modified: tuple[str, ...] = ()
    staged_new: tuple[str, ...] = ()
    staged_deleted: tuple[str, ...] = ()
    unstaged_modified: tuple[str, ...] = ()
    unstaged_deleted: tuple[str, ...] = ()
    untracked: tuple[str, ...] = ()
    renamed: tuple[str, ...] = ()
    typechange: tuple[str, ...] = ()
    conflicted: tuple[str, ...] = ()

    @property
    def deleted(self) -> tuple[str, ...]:
        return tuple(sorted({*self.staged_deleted, *self.unstaged_deleted}))

    @property
    def is_clean(self) -> bool:
        return self.total_changes == 0

    @property
    def total_changes(self) -> int:
        return (
            len(self.staged_modified)
            + len(self.staged_new)
            + len(self.staged_deleted)
            + len(self.unstaged_modified)
            + len(self.unstaged_deleted)
            + len(self.untracked)
            + len(self.renamed)
            + len(self.typechange)
            + len(self.conflicted)
        )


class MergeKind(Enum):
    """Classification of a merge attempt."""

    FAST_FORWARD = "fast_forward"
    NORMAL = "normal"
    UP_TO_DATE = "up_to_date"
    UNBORN = "unborn"
    UNMERGED = "unmerged"


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of a successful merge."""

    kind: MergeKind
    source: str
    target: str
    commit_sha: str | None = None
    parent_shas: tuple[str, ...] = field(default_factory=tuple)

    @property
    def created_commit(self) -> bool:
        return self.commit_sha is not None


class EvidenceKind(Enum):
    """Where a branch provenance answer came from."""

    REFLOG = "reflog"
    EXTERNAL = "external"


@dataclass(frozen=True, slots=True)
class BranchProvenance:
    """Branch an issue branch was created from, and how that was established."""

    source_branch: str
    evidence: EvidenceKind
