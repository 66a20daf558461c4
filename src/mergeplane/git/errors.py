"""Git engine error types."""

from __future__ import annotations

from collections.abc import Sequence


class GitError(Exception):
    """Base error for git engine operations."""

    pass


# =============================================================================
# Repository Errors
# =============================================================================


class NotARepositoryError(GitError):
    """Path is not inside a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository (or any parent directory): {path}")
        self.path = path


class RepositoryFaultError(GitError):
    """Underlying object-store failure."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class RepositoryStateError(GitError):
    """Repository has an interrupted operation in progress."""

    def __init__(self, state: str) -> None:
        super().__init__(
            f"Repository is in the middle of a {state} operation. "
            "Finish or abort it before continuing."
        )
        self.state = state


class RefNotFoundError(GitError):
    """Revision (branch, tag, commit) could not be resolved."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


# =============================================================================
# Branch Errors
# =============================================================================


class InvalidBranchNameError(GitError):
    """Branch name violates reference-naming rules."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid branch name {name!r}{detail}")
        self.name = name
        self.reason = reason


class BranchExistsError(GitError):
    """Branch already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Branch already exists: {name}")
        self.name = name


class BranchNotFoundError(GitError):
    """Branch not found."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Branch not found: {name}")
        self.name = name


class UnmergedBranchError(GitError):
    """Branch tip is not reachable from HEAD."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Branch has unmerged changes: {name}. Use force=True to delete.")
        self.name = name


class DetachedHeadError(GitError):
    """Operation requires HEAD to be on a named branch."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: HEAD is detached")
        self.operation = operation


class UnbornBranchError(GitError):
    """Operation requires HEAD to point at a commit."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: current branch has no commits yet")
        self.operation = operation


class NoMainBranchError(GitError):
    """None of the main branch candidates exist."""

    def __init__(self, candidates: Sequence[str]) -> None:
        names = ", ".join(candidates)
        super().__init__(f"No main branch found (tried: {names})")
        self.candidates = tuple(candidates)


class IssueBranchError(GitError):
    """Operation would chain an issue branch onto another issue branch."""

    def __init__(self, name: str, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} from issue branch {name!r}. Switch to a non-issue branch first."
        )
        self.name = name
        self.operation = operation


# =============================================================================
# Merge Errors
# =============================================================================


class NoProvenanceError(GitError):
    """No recorded source branch could be found for a branch."""

    def __init__(self, branch: str) -> None:
        super().__init__(f"Cannot determine which branch {branch!r} was created from")
        self.branch = branch


class MergeConflictError(GitError):
    """Merge produced conflicts that need manual resolution."""

    def __init__(self, files: Sequence[str], source: str, target: str) -> None:
        super().__init__(
            f"Merging {source} into {target} produced conflicts in: {', '.join(files)}"
        )
        self.files = tuple(files)
        self.source = source
        self.target = target


class UnmergeableStateError(GitError):
    """Merge has no valid base to work from."""

    def __init__(self, source: str, target: str, kind: str) -> None:
        super().__init__(f"Cannot merge {source} into {target}: repository state is {kind}")
        self.source = source
        self.target = target
        self.kind = kind
