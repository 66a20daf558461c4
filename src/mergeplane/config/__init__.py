"""Config module exports."""

from mergeplane.config.loader import load_config
from mergeplane.config.models import (
    BranchConfig,
    LimitsConfig,
    LoggingConfig,
    LogOutputConfig,
    MergeConfig,
    MergePlaneConfig,
)

__all__ = [
    "load_config",
    "BranchConfig",
    "LimitsConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "MergeConfig",
    "MergePlaneConfig",
]
