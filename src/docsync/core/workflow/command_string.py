"""Reconstruct CLI invocations and workflow file names for GitHub Actions."""

import os
import re
from typing import Any, Mapping, Sequence

from docsync.core.config import API_KEY_ENV
from docsync.core.models import ArgSpec

# Directory where GitHub Actions workflow files are stored, the same for
# every repository on GitHub.
GITHUB_WORKFLOW_DIR = os.path.join(".github", "workflows")

# GitHub secret the generated workflow reads the project API key from
GITHUB_SECRET_NAME = API_KEY_ENV

SECRET_ARG_NAME = "key"

# Opt-in flag for this flow; never carried into the generated workflow
WORKFLOW_ARG_NAME = "github"

_NON_ALPHANUMERIC_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def clean_file_name(value: str) -> str:
    """Replace every non-alphanumeric character with a hyphen.

    Used for file names and YAML keys.
    """
    return _NON_ALPHANUMERIC_RE.sub("-", value)


def get_workflow_file_name(file_name: str) -> str:
    """Turn a raw name into the relative path of a workflow file.

    Example:
        get_workflow_file_name("My Workflow!") -> ".github/workflows/my-workflow-.yml"
    """
    return os.path.join(GITHUB_WORKFLOW_DIR, f"{clean_file_name(file_name).lower()}.yml")


def redact_key(key: str) -> str:
    """Mask all but the last 5 characters of an API key."""
    return f"••••••••••••{key[-5:]}"


def secret_reference(name: str = GITHUB_SECRET_NAME) -> str:
    return "${{ secrets." + name + " }}"


def build_command_string(
    command: str,
    args: Sequence[ArgSpec],
    options: Mapping[str, Any],
) -> str:
    """Build the command line the generated workflow will run.

    The positional argument comes first, followed by the remaining flags
    in declaration order. The API key is replaced by a GitHub secret
    reference so its value never lands in the workflow file.

    Args:
        command: Command name, e.g. "changelogs"
        args: Arguments accepted by the command
        options: Parsed option values keyed by argument name

    Returns:
        The command string, e.g. "changelogs docs --key=${{ secrets.DOCSYNC_API_KEY }}"
    """
    ordered = sorted(args, key=lambda arg: 0 if arg.positional else 1)

    parts = []
    for arg in ordered:
        if arg.name == WORKFLOW_ARG_NAME:
            continue

        value = options.get(arg.name)
        if value is None or value is False or value == "":
            continue

        if arg.positional:
            parts.append(str(value))
        elif arg.name == SECRET_ARG_NAME:
            parts.append(f"--{arg.name}={secret_reference()}")
        elif arg.type == "boolean":
            parts.append(f"--{arg.name}")
        else:
            parts.append(f"--{arg.name}={value}")

    return f"{command} {' '.join(parts)}".strip()
