"""Branch detection, validation, creation and checkout."""

from __future__ import annotations

import pygit2
import structlog

from mergeplane.config.models import BranchConfig
from mergeplane.git._internal import (
    RepoHandle,
    make_branch_ref,
    require_branch,
    require_current_branch,
    require_not_current_branch,
)
from mergeplane.git.errors import (
    BranchExistsError,
    InvalidBranchNameError,
    IssueBranchError,
    NoMainBranchError,
    RepositoryFaultError,
    UnbornBranchError,
    UnmergedBranchError,
)

log = structlog.get_logger(__name__)


class BranchManager:
    """Local branch operations for one repository handle."""

    def __init__(self, handle: RepoHandle, config: BranchConfig | None = None) -> None:
        self._handle = handle
        self._config = config or BranchConfig()

    @property
    def issue_prefix(self) -> str:
        return self._config.issue_prefix

    # =========================================================================
    # Queries
    # =========================================================================

    def current_branch(self) -> str:
        """Name of the branch HEAD points at (may be unborn). Raises when detached."""
        return require_current_branch(self._handle, "determine current branch")

    def branch_exists(self, name: str) -> bool:
        # An invalid name can never have been created
        if not self.is_valid_branch_name(name):
            return False
        return self._handle.local_branch(name) is not None

    def list_branches(self) -> list[str]:
        return self._handle.local_branch_names()

    def main_branch(self) -> str:
        for candidate in self._config.main_branch_candidates:
            if self.branch_exists(candidate):
                return candidate
        raise NoMainBranchError(self._config.main_branch_candidates)

    def is_issue_branch(self, name: str) -> bool:
        return name.startswith(self._config.issue_prefix)

    def issue_branch_name(self, issue_id: str) -> str:
        """Conventional branch name for an issue, validated."""
        name = f"{self._config.issue_prefix}{issue_id}"
        self.validate_branch_name(name)
        return name

    # =========================================================================
    # Validation
    # =========================================================================

    @staticmethod
    def is_valid_branch_name(name: str) -> bool:
        try:
            BranchManager.validate_branch_name(name)
        except InvalidBranchNameError:
            return False
        return True

    @staticmethod
    def validate_branch_name(name: str) -> None:
        """Syntactic check against reference-naming rules. Existence is not checked."""
        if not name or not name.strip():
            raise InvalidBranchNameError(name, "name is empty")
        if name != name.strip():
            raise InvalidBranchNameError(name, "name has leading or trailing whitespace")
        if name.startswith("-"):
            raise InvalidBranchNameError(name, "name starts with '-'")
        if name == "HEAD":
            raise InvalidBranchNameError(name, "'HEAD' is reserved")
        if not pygit2.reference_is_valid_name(make_branch_ref(name)):
            raise InvalidBranchNameError(name, "not a valid reference name")

    def can_create(self, name: str) -> bool:
        """True if ``name`` is free and HEAD has a commit to branch from.

        Raises InvalidBranchNameError for syntactically invalid names.
        """
        self.validate_branch_name(name)
        if self.branch_exists(name):
            return False
        return not self._handle.is_unborn

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_and_checkout(self, name: str) -> str:
        """Create ``name`` at the HEAD commit, switch to it and force-sync the tree.

        Either the branch is created and checked out, or it is removed again and
        HEAD is left where it was.
        """
        self.validate_branch_name(name)
        if self.branch_exists(name):
            raise BranchExistsError(name)
        head_commit = self._handle.head_commit()
        if head_commit is None:
            raise UnbornBranchError(f"create branch {name}")

        branch = self._handle.create_local_branch(name, head_commit)
        try:
            self._handle.checkout_branch(branch)
        except RepositoryFaultError:
            log.warning("branch.create_rolled_back", branch=name)
            self._handle.delete_local_branch(branch)
            raise

        log.info("branch.created", branch=name, sha=str(head_commit.id))
        return name

    def checkout(self, name: str) -> None:
        """Switch HEAD to an existing branch and force-sync the working tree.

        Uncommitted changes to tracked files are overwritten; callers that care
        consult the status inspector first.
        """
        branch = require_branch(self._handle, name)
        self._handle.checkout_branch(branch)
        log.info("branch.checked_out", branch=name)

    def delete_branch(self, name: str, *, force: bool = False) -> None:
        """Delete a local branch. Unmerged branches need ``force``."""
        branch = require_branch(self._handle, name)
        require_not_current_branch(self._handle, name)
        if not force and not self._is_merged_into_head(branch):
            raise UnmergedBranchError(name)
        self._handle.delete_local_branch(branch)
        log.info("branch.deleted", branch=name, force=force)

    def work_on_issue(self, issue_id: str) -> str:
        """Resume or start work on an issue branch; returns the branch name.

        Refuses to branch off another issue branch.
        """
        name = self.issue_branch_name(issue_id)
        current = self._handle.head_branch_name()
        if current == name:
            return name
        if current is not None and self.is_issue_branch(current):
            raise IssueBranchError(current, f"start work on {name}")
        if self.branch_exists(name):
            self.checkout(name)
            return name
        return self.create_and_checkout(name)

    # =========================================================================
    # Issue Branch Housekeeping
    # =========================================================================

    def issue_branches(self) -> list[str]:
        return [b for b in self.list_branches() if self.is_issue_branch(b)]

    def list_unmerged_issue_branches(self) -> list[str]:
        """Issue branches whose tip is not reachable from the main branch."""
        main_tip = self._branch_tip(self.main_branch())
        return [
            name
            for name in self.issue_branches()
            if not self._handle.descendant_of(main_tip, self._branch_tip(name))
        ]

    def cleanup_merged_issue_branches(self) -> list[str]:
        """Delete issue branches already merged into the main branch."""
        main_tip = self._branch_tip(self.main_branch())
        current = self._handle.head_branch_name()
        deleted: list[str] = []
        for name in self.issue_branches():
            if name == current:
                continue
            if self._handle.descendant_of(main_tip, self._branch_tip(name)):
                self._handle.delete_local_branch(require_branch(self._handle, name))
                deleted.append(name)
        if deleted:
            log.info("branch.cleanup", deleted=deleted)
        return deleted

    def _branch_tip(self, name: str) -> pygit2.Oid:
        return self._handle.branch_commit(require_branch(self._handle, name)).id

    def _is_merged_into_head(self, branch: pygit2.Branch) -> bool:
        head = self._handle.head_commit()
        if head is None:
            return False
        return self._handle.descendant_of(head.id, self._handle.branch_commit(branch).id)
