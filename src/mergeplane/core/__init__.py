"""Core module exports."""

from mergeplane.core.errors import (
    ConfigError,
    ErrorCode,
    MergePlaneError,
)
from mergeplane.core.logging import (
    clear_operation_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_operation_id,
    set_operation_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "MergePlaneError",
    # Logging
    "clear_operation_id",
    "configure_logging",
    "get_log_file_path",
    "get_logger",
    "get_operation_id",
    "set_operation_id",
]
