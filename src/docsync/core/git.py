"""Read-only inspection of the local git repository."""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from docsync.core.models import RepoContext

logger = logging.getLogger(__name__)

# Line of `git remote show <name>` output naming the remote's default branch
HEAD_BRANCH_RE = re.compile(r"^ {2}HEAD branch: (.*)$", re.MULTILINE)

# Kept loose on purpose so GitHub Enterprise hosts match too
GITHUB_HOST_MARKERS = ("github",)
NON_GITHUB_HOST_MARKERS = ("gitlab", "bitbucket")


class GitInspector:
    """Collect repository facts by shelling out to git.

    Every query degrades to "unknown" on failure; inspect() never raises.
    """

    def __init__(self, cwd: Optional[Union[str, Path]] = None, timeout: int = 30) -> None:
        self.cwd = str(cwd) if cwd is not None else None
        self.timeout = timeout

    def _run_git(self, args: List[str]) -> Optional[str]:
        """Run a git command and return stdout, or None on any failure."""
        cmd = ["git", *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=self.cwd,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"[git] {' '.join(cmd)} failed: {e}")
            return None

        if result.returncode != 0:
            logger.debug(
                f"[git] {' '.join(cmd)} exited with {result.returncode}: "
                f"{result.stderr.strip()}"
            )
            return None

        return result.stdout

    def is_repository(self) -> bool:
        output = self._run_git(["rev-parse", "--is-inside-work-tree"])
        return output is not None and output.strip() == "true"

    def get_repo_root(self) -> Optional[str]:
        output = self._run_git(["rev-parse", "--show-toplevel"])
        if not output or not output.strip():
            return None
        return output.strip()

    def get_default_branch(self, remote: str) -> Optional[str]:
        """Extract the default branch from `git remote show <remote>`."""
        output = self._run_git(["remote", "show", remote])
        if not output:
            return None
        match = HEAD_BRANCH_RE.search(output)
        if not match:
            return None
        branch = match.group(1).strip()
        # Reported when the remote is unreachable or has no HEAD
        if not branch or branch == "(unknown)":
            return None
        return branch

    def inspect(self) -> RepoContext:
        """Gather the repository facts used by the workflow setup flow.

        Returns:
            RepoContext describing the working tree
        """
        is_repo = self.is_repository()
        logger.debug(f"[inspect] is_repository result: {is_repo}")

        has_github_remote = False
        has_non_github_remote = False
        default_branch = None

        raw_remotes = self._run_git(["remote"]) or ""
        logger.debug(f"[inspect] raw remotes result: {raw_remotes!r}")

        remote_names = [line.strip() for line in raw_remotes.splitlines() if line.strip()]
        if remote_names:
            remote = remote_names[0]
            default_branch = self.get_default_branch(remote)

            remotes_list = self._run_git(["remote", "-v"]) or ""
            logger.debug(f"[inspect] remotes list result: {remotes_list!r}")
            has_github_remote = any(marker in remotes_list for marker in GITHUB_HOST_MARKERS)
            has_non_github_remote = any(
                marker in remotes_list for marker in NON_GITHUB_HOST_MARKERS
            )

        repo_root = self.get_repo_root()

        context = RepoContext(
            is_repository=is_repo,
            has_github_remote=has_github_remote,
            has_non_github_remote=has_non_github_remote,
            default_branch=default_branch,
            repo_root=repo_root,
        )
        logger.debug(f"[inspect] context: {context.model_dump_json()}")
        return context
