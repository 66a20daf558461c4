"""Git-native issue branch lifecycle and merge orchestration."""

from mergeplane.git.abort import AbortArtifact
from mergeplane.git.branches import BranchManager
from mergeplane.git.engine import GitEngine
from mergeplane.git.errors import (
    BranchExistsError,
    BranchNotFoundError,
    DetachedHeadError,
    GitError,
    InvalidBranchNameError,
    IssueBranchError,
    MergeConflictError,
    NoMainBranchError,
    NoProvenanceError,
    NotARepositoryError,
    RefNotFoundError,
    RepositoryFaultError,
    RepositoryStateError,
    UnbornBranchError,
    UnmergeableStateError,
    UnmergedBranchError,
)
from mergeplane.git.history import HistoryExplorer
from mergeplane.git.merge import MergeEngine
from mergeplane.git.models import (
    BranchProvenance,
    CommitInfo,
    EvidenceKind,
    MergeKind,
    MergeResult,
    ReflogEntry,
    Signature,
    StatusSummary,
)
from mergeplane.git.reflog import ProvenanceLookup, ReflogAnalyzer
from mergeplane.git.status import StatusInspector

__all__ = [
    # Facade
    "GitEngine",
    # Components
    "AbortArtifact",
    "BranchManager",
    "HistoryExplorer",
    "MergeEngine",
    "ProvenanceLookup",
    "ReflogAnalyzer",
    "StatusInspector",
    # Errors
    "BranchExistsError",
    "BranchNotFoundError",
    "DetachedHeadError",
    "GitError",
    "InvalidBranchNameError",
    "IssueBranchError",
    "MergeConflictError",
    "NoMainBranchError",
    "NoProvenanceError",
    "NotARepositoryError",
    "RefNotFoundError",
    "RepositoryFaultError",
    "RepositoryStateError",
    "UnbornBranchError",
    "UnmergeableStateError",
    "UnmergedBranchError",
    # Models
    "BranchProvenance",
    "CommitInfo",
    "EvidenceKind",
    "MergeKind",
    "MergeResult",
    "ReflogEntry",
    "Signature",
    "StatusSummary",
]
