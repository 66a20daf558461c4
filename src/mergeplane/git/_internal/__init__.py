"""Internal components for the git engine - not part of public API."""

from mergeplane.git._internal.access import RepoHandle, discover
from mergeplane.git._internal.errors import git_operation
from mergeplane.git._internal.flows import ConflictCheckResult, WriteFlows
from mergeplane.git._internal.parsing import (
    extract_branch_name,
    make_branch_ref,
    parse_checkout,
)
from mergeplane.git._internal.planners import MergePlan, MergePlanner
from mergeplane.git._internal.preconditions import (
    require_branch,
    require_current_branch,
    require_not_current_branch,
)

__all__ = [
    "ConflictCheckResult",
    "MergePlan",
    "MergePlanner",
    "RepoHandle",
    "WriteFlows",
    "discover",
    "extract_branch_name",
    "git_operation",
    "make_branch_ref",
    "parse_checkout",
    "require_branch",
    "require_current_branch",
    "require_not_current_branch",
]
