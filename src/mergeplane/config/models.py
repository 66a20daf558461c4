"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (MERGEPLANE__SECTION__KEY)
3. Repo YAML (.mergeplane/config.yaml)
4. Global YAML (~/.config/mergeplane/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    MERGEPLANE__<SECTION>__<KEY>=<VALUE>

Examples:
    MERGEPLANE__LOGGING__LEVEL=DEBUG
    MERGEPLANE__BRANCHES__ISSUE_PREFIX=ticket/
    MERGEPLANE__LIMITS__RECENT_OPERATIONS_DEFAULT=50
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        MERGEPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO records every branch and merge write; DEBUG also "
        "logs each reflog candidate considered.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class BranchConfig(BaseModel):
    """Branch naming conventions.

    Env vars:
        MERGEPLANE__BRANCHES__ISSUE_PREFIX: Prefix marking issue branches
    """

    issue_prefix: str = Field(
        default="issue/",
        description="Prefix that marks a branch as an issue branch. Issue branches are never "
        "accepted as merge targets.",
    )
    main_branch_candidates: list[str] = Field(
        default_factory=lambda: ["main", "master"],
        description="Names tried in order when looking up the main branch.",
    )

    @field_validator("issue_prefix")
    @classmethod
    def validate_issue_prefix(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("issue_prefix must not be empty")
        return v

    @field_validator("main_branch_candidates")
    @classmethod
    def validate_main_branch_candidates(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("main_branch_candidates must name at least one branch")
        return v


class MergeConfig(BaseModel):
    """Merge commit settings.

    Env vars:
        MERGEPLANE__MERGE__MESSAGE_TEMPLATE: Merge commit message template
        MERGEPLANE__MERGE__FALLBACK_NAME: Identity used when user.name is unset
        MERGEPLANE__MERGE__FALLBACK_EMAIL: Identity used when user.email is unset
    """

    message_template: str = Field(
        default="Merge {source} into {target}",
        description="Merge commit message. Placeholders: {source}, {target}.",
    )
    fallback_name: str = Field(
        default="mergeplane",
        description="Author name for merge commits when the repository has no identity.",
    )
    fallback_email: str = Field(
        default="mergeplane@localhost",
        description="Author email for merge commits when the repository has no identity.",
    )

    @field_validator("message_template")
    @classmethod
    def validate_message_template(cls, v: str) -> str:
        try:
            v.format(source="source", target="target")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid message template: {e}") from e
        return v


class LimitsConfig(BaseModel):
    """Default result limits for diagnostic queries.

    Env vars:
        MERGEPLANE__LIMITS__RECENT_OPERATIONS_DEFAULT: Reflog entries shown by default
        MERGEPLANE__LIMITS__HISTORY_DEFAULT: Commits shown by default (unset = all)
    """

    recent_operations_default: int = Field(
        default=20,
        gt=0,
        description="Reflog entries returned when no limit is given.",
    )
    history_default: int | None = Field(
        default=None,
        gt=0,
        description="Commits returned by CLI history views when no limit is given.",
    )


class MergePlaneConfig(BaseModel):
    """Root configuration for MergePlane.

    All settings can be configured via:
    1. Environment variables: MERGEPLANE__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    branches: BranchConfig = Field(default_factory=BranchConfig)
    merge: MergeConfig = Field(default_factory=MergeConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
