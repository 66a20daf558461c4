"""Tests for BranchManager."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pygit2
import pytest

from mergeplane.config.models import BranchConfig
from mergeplane.git import (
    BranchExistsError,
    BranchManager,
    BranchNotFoundError,
    DetachedHeadError,
    GitError,
    InvalidBranchNameError,
    IssueBranchError,
    NoMainBranchError,
    RepositoryFaultError,
    UnbornBranchError,
    UnmergedBranchError,
)
from mergeplane.git._internal import RepoHandle

CommitFile = Callable[..., pygit2.Oid]


def _manager(repo: pygit2.Repository, **config: object) -> BranchManager:
    return BranchManager(RepoHandle(repo.workdir), BranchConfig(**config))


class TestCurrentBranch:
    def test_returns_branch_name(self, temp_repo: pygit2.Repository) -> None:
        """Returns the branch HEAD points at."""
        assert _manager(temp_repo).current_branch() == "main"

    def test_detached_head_raises(self, temp_repo: pygit2.Repository) -> None:
        """Raises DetachedHeadError when HEAD is detached."""
        temp_repo.set_head(temp_repo.head.target)
        with pytest.raises(DetachedHeadError):
            _manager(temp_repo).current_branch()

    def test_unborn_branch_still_named(self, unborn_repo: pygit2.Repository) -> None:
        """Names the branch even before its first commit."""
        assert _manager(unborn_repo).current_branch() == "main"


class TestBranchExists:
    def test_existing_branch(self, temp_repo: pygit2.Repository) -> None:
        """Returns True for a local branch."""
        assert _manager(temp_repo).branch_exists("main")

    def test_missing_branch(self, temp_repo: pygit2.Repository) -> None:
        """Returns False for an unknown branch."""
        assert not _manager(temp_repo).branch_exists("never-created")

    @pytest.mark.parametrize("name", ["", "bad..name", "has space", "-dash"])
    def test_invalid_names_do_not_exist(self, temp_repo: pygit2.Repository, name: str) -> None:
        """Invalid names are reported as missing, not raised."""
        assert not _manager(temp_repo).branch_exists(name)

    def test_list_branches_sorted(self, repo_with_branches: pygit2.Repository) -> None:
        """Lists local branches in sorted order."""
        assert _manager(repo_with_branches).list_branches() == ["feature", "main"]


class TestValidateBranchName:
    @pytest.mark.parametrize("name", ["issue/42", "feature/x", "fix-1.2", "a_b"])
    def test_valid_names(self, name: str) -> None:
        """Accepts well-formed branch names."""
        BranchManager.validate_branch_name(name)

    @pytest.mark.parametrize(
        "name",
        ["", "   ", "bad..name", "has space", "-dash", "HEAD", "ends.lock", "a~b", "a:b", "x/"],
    )
    def test_invalid_names(self, name: str) -> None:
        """Rejects malformed branch names."""
        with pytest.raises(InvalidBranchNameError):
            BranchManager.validate_branch_name(name)

    def test_error_carries_name(self) -> None:
        """InvalidBranchNameError carries the offending name."""
        with pytest.raises(InvalidBranchNameError) as exc_info:
            BranchManager.validate_branch_name("bad..name")
        assert exc_info.value.name == "bad..name"


class TestCanCreate:
    def test_new_name(self, temp_repo: pygit2.Repository) -> None:
        """A free, valid name can be created."""
        assert _manager(temp_repo).can_create("issue/1")

    def test_existing_name(self, temp_repo: pygit2.Repository) -> None:
        """An existing name cannot be created."""
        assert not _manager(temp_repo).can_create("main")

    def test_unborn_head(self, unborn_repo: pygit2.Repository) -> None:
        """Nothing can be created before the first commit."""
        assert not _manager(unborn_repo).can_create("issue/1")

    def test_invalid_name_raises(self, temp_repo: pygit2.Repository) -> None:
        """Invalid names raise rather than return False."""
        with pytest.raises(InvalidBranchNameError):
            _manager(temp_repo).can_create("bad..name")


class TestCreateAndCheckout:
    def test_creates_and_switches(self, temp_repo: pygit2.Repository) -> None:
        """Creates the branch at HEAD and switches to it."""
        head_before = temp_repo.head.target
        manager = _manager(temp_repo)

        assert manager.create_and_checkout("issue/42") == "issue/42"

        assert manager.current_branch() == "issue/42"
        assert manager.branch_exists("issue/42")
        assert temp_repo.branches.local["issue/42"].target == head_before

    def test_existing_branch_untouched(
        self, temp_repo: pygit2.Repository, commit_file: CommitFile
    ) -> None:
        """An existing branch is neither moved nor checked out."""
        initial = temp_repo.head.peel(pygit2.Commit)
        temp_repo.branches.local.create("feature", initial)
        commit_file(temp_repo, "more.txt", "more\n")
        manager = _manager(temp_repo)

        with pytest.raises(BranchExistsError):
            manager.create_and_checkout("feature")

        assert temp_repo.branches.local["feature"].target == initial.id
        assert manager.current_branch() == "main"

    def test_unborn_head_raises(self, unborn_repo: pygit2.Repository) -> None:
        """Raises UnbornBranchError before the first commit."""
        with pytest.raises(UnbornBranchError):
            _manager(unborn_repo).create_and_checkout("issue/1")

    def test_invalid_name_raises(self, temp_repo: pygit2.Repository) -> None:
        """Invalid names raise InvalidBranchNameError."""
        with pytest.raises(InvalidBranchNameError):
            _manager(temp_repo).create_and_checkout("bad..name")

    def test_failed_checkout_removes_branch(
        self, temp_repo: pygit2.Repository, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failed checkout deletes the new branch and keeps HEAD."""
        handle = RepoHandle(temp_repo.workdir)
        manager = BranchManager(handle)

        def broken_checkout(branch: pygit2.Branch) -> None:
            raise RepositoryFaultError("checkout", OSError("disk full"))

        monkeypatch.setattr(handle, "checkout_branch", broken_checkout)

        with pytest.raises(RepositoryFaultError):
            manager.create_and_checkout("issue/1")

        assert not manager.branch_exists("issue/1")
        assert manager.current_branch() == "main"


class TestCheckout:
    def test_switches_and_syncs_tree(self, repo_with_branches: pygit2.Repository) -> None:
        """Switches HEAD and updates the working tree."""
        workdir = Path(repo_with_branches.workdir)
        manager = _manager(repo_with_branches)

        manager.checkout("feature")

        assert manager.current_branch() == "feature"
        assert (workdir / "feature.txt").exists()
        assert not (workdir / "main.txt").exists()

    def test_missing_branch_raises(self, temp_repo: pygit2.Repository) -> None:
        """Raises BranchNotFoundError for an unknown branch."""
        with pytest.raises(BranchNotFoundError):
            _manager(temp_repo).checkout("nope")

    def test_overwrites_tracked_modifications(self, repo_with_branches: pygit2.Repository) -> None:
        """Forced checkout overwrites tracked modifications."""
        readme = Path(repo_with_branches.workdir) / "README.md"
        readme.write_text("scribbles\n")

        _manager(repo_with_branches).checkout("feature")

        assert readme.read_text() == "# Test Repo\n"

    def test_keeps_untracked_files(self, repo_with_branches: pygit2.Repository) -> None:
        """Untracked files survive a checkout."""
        stray = Path(repo_with_branches.workdir) / "stray.txt"
        stray.write_text("keep me\n")

        _manager(repo_with_branches).checkout("feature")

        assert stray.read_text() == "keep me\n"


class TestMainBranch:
    def test_prefers_main(self, temp_repo: pygit2.Repository) -> None:
        """main is preferred when present."""
        temp_repo.branches.local.create("master", temp_repo.head.peel(pygit2.Commit))
        assert _manager(temp_repo).main_branch() == "main"

    def test_falls_back_to_master(self, temp_repo: pygit2.Repository) -> None:
        """master is used when main is absent."""
        temp_repo.branches.local.create("master", temp_repo.head.peel(pygit2.Commit))
        temp_repo.checkout(temp_repo.branches.local["master"])
        temp_repo.branches.local["main"].delete()
        assert _manager(temp_repo).main_branch() == "master"

    def test_no_candidate_raises(self, temp_repo: pygit2.Repository) -> None:
        """Raises BranchNotFoundError when no candidate exists."""
        with pytest.raises(NoMainBranchError) as exc_info:
            _manager(temp_repo, main_branch_candidates=["trunk"]).main_branch()
        assert exc_info.value.candidates == ("trunk",)


class TestIssueBranches:
    def test_is_issue_branch(self, temp_repo: pygit2.Repository) -> None:
        """Recognizes names carrying the issue prefix."""
        manager = _manager(temp_repo)
        assert manager.is_issue_branch("issue/42")
        assert not manager.is_issue_branch("feature/issue")

    def test_custom_prefix(self, temp_repo: pygit2.Repository) -> None:
        """Honours a configured issue prefix."""
        manager = _manager(temp_repo, issue_prefix="ticket-")
        assert manager.issue_branch_name("7") == "ticket-7"
        assert manager.is_issue_branch("ticket-7")
        assert not manager.is_issue_branch("issue/7")

    def test_issue_branch_name_validated(self, temp_repo: pygit2.Repository) -> None:
        """Issue ids that make invalid branch names are rejected."""
        with pytest.raises(InvalidBranchNameError):
            _manager(temp_repo).issue_branch_name("has space")


class TestWorkOnIssue:
    def test_creates_branch(self, temp_repo: pygit2.Repository) -> None:
        """Creates the issue branch when it does not exist."""
        manager = _manager(temp_repo)
        assert manager.work_on_issue("1") == "issue/1"
        assert manager.current_branch() == "issue/1"

    def test_already_on_branch(self, temp_repo: pygit2.Repository) -> None:
        """Staying on the current issue branch is a no-op."""
        manager = _manager(temp_repo)
        manager.work_on_issue("1")
        assert manager.work_on_issue("1") == "issue/1"

    def test_resumes_existing_branch(self, temp_repo: pygit2.Repository) -> None:
        """Checks out an existing issue branch."""
        manager = _manager(temp_repo)
        manager.work_on_issue("1")
        manager.checkout("main")

        assert manager.work_on_issue("1") == "issue/1"
        assert manager.current_branch() == "issue/1"

    def test_refuses_from_other_issue_branch(self, temp_repo: pygit2.Repository) -> None:
        """Refuses to branch off another issue branch."""
        manager = _manager(temp_repo)
        manager.work_on_issue("1")

        with pytest.raises(IssueBranchError):
            manager.work_on_issue("2")
        assert not manager.branch_exists("issue/2")


class TestDeleteBranch:
    def test_deletes_merged_branch(self, temp_repo: pygit2.Repository) -> None:
        """A branch merged into HEAD is deleted without force."""
        temp_repo.branches.local.create("done", temp_repo.head.peel(pygit2.Commit))
        manager = _manager(temp_repo)

        manager.delete_branch("done")

        assert not manager.branch_exists("done")

    def test_unmerged_requires_force(self, repo_with_branches: pygit2.Repository) -> None:
        """An unmerged branch needs force to be deleted."""
        manager = _manager(repo_with_branches)

        with pytest.raises(UnmergedBranchError):
            manager.delete_branch("feature")
        manager.delete_branch("feature", force=True)

        assert not manager.branch_exists("feature")

    def test_current_branch_refused(self, temp_repo: pygit2.Repository) -> None:
        """The current branch cannot be deleted."""
        with pytest.raises(GitError, match="current branch"):
            _manager(temp_repo).delete_branch("main")

    def test_missing_branch_raises(self, temp_repo: pygit2.Repository) -> None:
        """Raises BranchNotFoundError for an unknown branch."""
        with pytest.raises(BranchNotFoundError):
            _manager(temp_repo).delete_branch("nope")


class TestIssueBranchHousekeeping:
    @pytest.fixture
    def manager(self, temp_repo: pygit2.Repository, commit_file: CommitFile) -> BranchManager:
        head = temp_repo.head.peel(pygit2.Commit)
        temp_repo.branches.local.create("issue/1", head)
        temp_repo.branches.local.create("issue/2", head)
        temp_repo.checkout(temp_repo.branches.local["issue/2"])
        commit_file(temp_repo, "two.txt", "work\n")
        temp_repo.checkout(temp_repo.branches.local["main"])
        return _manager(temp_repo)

    def test_list_unmerged(self, manager: BranchManager) -> None:
        """Lists issue branches not yet merged into HEAD."""
        assert manager.list_unmerged_issue_branches() == ["issue/2"]

    def test_cleanup_deletes_only_merged(self, manager: BranchManager) -> None:
        """Cleanup deletes merged issue branches and keeps the rest."""
        assert manager.cleanup_merged_issue_branches() == ["issue/1"]
        assert manager.list_branches() == ["issue/2", "main"]

    def test_cleanup_skips_current_branch(self, manager: BranchManager) -> None:
        """Cleanup never deletes the checked-out branch."""
        manager.checkout("issue/1")
        assert manager.cleanup_merged_issue_branches() == []
