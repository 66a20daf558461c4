"""Abort artifact: operator guidance left behind when a merge cannot finish."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from mergeplane.config.constants import ABORT_FILE_NAME, CONFIG_DIR_NAME

log = structlog.get_logger(__name__)


class AbortArtifact:
    """Plain-text file at ``<root>/.mergeplane/.abort``.

    The engine writes it on failure and never removes it; clearing it is the
    host's decision once an operator has acted on it.
    """

    def __init__(self, root: Path) -> None:
        self.path = root / CONFIG_DIR_NAME / ABORT_FILE_NAME

    def write(self, reason: str) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(reason if reason.endswith("\n") else f"{reason}\n")
        log.warning("abort.written", path=str(self.path))
        return self.path

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str | None:
        if not self.exists():
            return None
        return self.path.read_text()

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def no_target_reason(source: str) -> str:
    return (
        f"Merge of branch '{source}' stopped: could not work out which branch it was "
        "created from.\n"
        "\n"
        "Likely causes:\n"
        "- the branch history that recorded where it started has expired\n"
        "- the branch it was created from has since been deleted\n"
        "- it was created from another issue branch\n"
        "\n"
        "Decision needed: choose the branch it should be merged into and run the merge "
        "again with that target given explicitly.\n"
    )


def conflict_reason(source: str, target: str, files: Sequence[str]) -> str:
    listing = "\n".join(f"- {path}" for path in files)
    return (
        f"Merge of branch '{source}' into '{target}' stopped because both branches changed "
        "the same parts of these files:\n"
        "\n"
        f"{listing}\n"
        "\n"
        f"'{target}' has not been changed. Resolve the differences in the files above by "
        f"hand (for example by updating '{source}' so it agrees with '{target}'), then run "
        "the merge again.\n"
    )


def unmergeable_reason(source: str, target: str, state: str) -> str:
    return (
        f"Merge of branch '{source}' into '{target}' stopped: the repository is not in a "
        f"state that can be merged automatically ({state}).\n"
        "\n"
        "This happens when an earlier merge or similar operation was interrupted and "
        "left unresolved files behind, or when the two branches share no history.\n"
        "\n"
        "Decision needed: finish or undo the interrupted operation, or merge these "
        "branches by hand.\n"
    )
