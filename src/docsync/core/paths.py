"""
docsync directory structure management.

This module provides centralized path management for per-user state
that lives outside of any synced repository.
"""

import os
from pathlib import Path


class DocsyncPaths:
    """Manage the docsync per-user directory structure."""

    @staticmethod
    def get_base_dir() -> Path:
        """Get base docsync directory."""
        base = os.getenv("DOCSYNC_DATA_DIR")
        if base:
            return Path(base)
        return Path.home() / ".docsync"

    @staticmethod
    def get_config_file() -> Path:
        """Get the file backing the persistent decision store.

        Returns:
            Path to the JSON config file
        """
        return DocsyncPaths.get_base_dir() / "config.json"
