"""Continuous-integration environment detection."""

import os

# Variables set by common CI runners
CI_ENV_VARS = (
    "CONTINUOUS_INTEGRATION",
    "BUILD_NUMBER",
    "RUN_ID",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "BUILDKITE",
    "CIRCLECI",
    "TRAVIS",
    "JENKINS_URL",
    "TF_BUILD",
)


def is_ci() -> bool:
    """Check whether the process is running inside a recognized CI runner."""
    ci_value = os.environ.get("CI")
    if ci_value and ci_value.lower() not in ("false", "0"):
        return True
    return any(os.environ.get(name) for name in CI_ENV_VARS)


def is_github_actions() -> bool:
    """Check whether the process is running inside GitHub Actions.

    See https://docs.github.com/en/actions/learn-github-actions/variables#default-environment-variables
    """
    return os.environ.get("GITHUB_ACTIONS") == "true"
