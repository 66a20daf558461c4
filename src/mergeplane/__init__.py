"""MergePlane - git-native issue branch lifecycle and merge orchestration."""

__version__ = "0.1.0"
