"""Mapping of pygit2 faults to engine errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from mergeplane.git.errors import GitError, RepositoryFaultError


class ErrorMapper:
    """Maps pygit2 exceptions to engine error types."""

    @staticmethod
    @contextmanager
    def guard(operation: str) -> Iterator[None]:
        """Re-raise object-store failures as RepositoryFaultError.

        pygit2 reports libgit2 ENOTFOUND as KeyError and EINVALIDSPEC as ValueError;
        inside a guarded block both indicate a fault, not a lookup miss.
        """
        try:
            yield
        except GitError:
            raise
        except (pygit2.GitError, KeyError, ValueError, OSError) as e:
            raise RepositoryFaultError(operation, e) from e


def git_operation(operation: str) -> AbstractContextManager[None]:
    """Context manager for git operations with error mapping."""
    return ErrorMapper.guard(operation)
