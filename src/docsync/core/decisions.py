"""Persistent record of per-repository workflow setup decisions.

The store lives in the user's docsync data directory, never inside the
repository being synced, and is shared by every docsync invocation.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from docsync.core.paths import DocsyncPaths

logger = logging.getLogger(__name__)

DECISION_KEY_PREFIX = "create_workflow."


def get_decision_key(repo_root: Optional[str]) -> str:
    """Build the store key for a repository root.

    Args:
        repo_root: Repository root path, empty or None outside a repository

    Returns:
        Namespaced key, e.g. "create_workflow./home/me/project"
    """
    return f"{DECISION_KEY_PREFIX}{repo_root or ''}"


class DecisionStore:
    """JSON-file backed key/value store.

    Last write wins; concurrent invocations are not coordinated.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    @classmethod
    def default(cls) -> "DecisionStore":
        """Create a store backed by the per-user config file."""
        return cls(DocsyncPaths.get_config_file())

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable decision store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.debug(f"Ignoring malformed decision store {self.path}")
            return {}
        return data

    def get(self, key: str) -> Optional[int]:
        """Get the stored value for a key.

        Returns:
            The stored integer, or None when absent or not an integer
        """
        value = self._load().get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def set(self, key: str, value: int) -> None:
        """Store a value, overwriting any previous one."""
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug(f"Stored decision {key}={value} in {self.path}")
