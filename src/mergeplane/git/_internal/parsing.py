"""String parsing helpers for git ref names and reflog messages."""

from __future__ import annotations

from mergeplane.config.constants import CHECKOUT_MESSAGE_PREFIX, CHECKOUT_MESSAGE_SEPARATOR

_REFS_HEADS_PREFIX = "refs/heads/"


def extract_branch_name(refname: str) -> str | None:
    """Extract branch name from full ref (e.g., 'refs/heads/main' -> 'main')."""
    if refname.startswith(_REFS_HEADS_PREFIX):
        return refname[len(_REFS_HEADS_PREFIX) :]
    return None


def make_branch_ref(name: str) -> str:
    """Create full branch ref from name."""
    return f"{_REFS_HEADS_PREFIX}{name}"


def parse_checkout(message: str) -> tuple[str, str] | None:
    """Parse a checkout reflog message into (source, destination).

    'checkout: moving from main to issue/42' -> ('main', 'issue/42').
    Returns None for any other kind of reflog message.
    """
    if not message.startswith(CHECKOUT_MESSAGE_PREFIX):
        return None
    transition = message[len(CHECKOUT_MESSAGE_PREFIX) :].strip()
    source, sep, destination = transition.partition(CHECKOUT_MESSAGE_SEPARATOR)
    if not sep or not source or not destination:
        return None
    return source, destination
