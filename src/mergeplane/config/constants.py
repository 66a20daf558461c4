"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are on-disk layout conventions and git message formats the engine relies on.

For configurable values, see models.py (BranchConfig, MergeConfig, etc.).
"""

# =============================================================================
# On-disk Layout
# =============================================================================

CONFIG_DIR_NAME = ".mergeplane"
"""Per-repository directory holding config.yaml and the abort file."""

REPO_CONFIG_FILE = "config.yaml"
"""Repository-level YAML config file name inside CONFIG_DIR_NAME."""

ABORT_FILE_NAME = ".abort"
"""Abort artifact file name inside CONFIG_DIR_NAME."""

# =============================================================================
# Git Message Formats
# =============================================================================

CHECKOUT_MESSAGE_PREFIX = "checkout: moving from "
"""Prefix libgit2 and git porcelain write to the HEAD reflog on checkout."""

CHECKOUT_MESSAGE_SEPARATOR = " to "
"""Separator between source and destination in a checkout reflog message."""

SHORT_SHA_LENGTH = 7
"""Length of abbreviated commit ids."""
