"""Environment-driven configuration for docsync."""

import os

DEFAULT_API_URL = "https://dash.readme.com/api/v1"
DEFAULT_HTTP_TIMEOUT = 30.0

# Name of the CLI binary, used in usage strings and generated workflow names
CLI_NAME = "docsync"

# Environment variable holding the project API key. The generated GitHub
# Actions workflow stores the key in a secret of the same name.
API_KEY_ENV = "DOCSYNC_API_KEY"

SKIP_WORKFLOW_SETUP_ENV = "DOCSYNC_SKIP_WORKFLOW_SETUP"


def env_flag(name: str) -> bool:
    """Return True when an environment variable holds a truthy value."""
    value = os.environ.get(name, "").strip().lower()
    return value not in {"", "0", "false", "no"}


class ApiConfig:
    """Configuration for the documentation API connection."""

    def __init__(self) -> None:
        self.base_url: str = os.environ.get("DOCSYNC_API_URL", DEFAULT_API_URL).rstrip("/")
        self.timeout_raw: str = os.environ.get("DOCSYNC_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))
        verify_env = os.environ.get("DOCSYNC_HTTP_VERIFY", "true").lower()
        self.verify: bool = verify_env not in {"0", "false", "no"}

    @property
    def timeout(self) -> float:
        return float(self.timeout_raw)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If the API URL or timeout is malformed
        """
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"DOCSYNC_API_URL must be an http(s) URL, got '{self.base_url}'"
            )

        try:
            timeout = float(self.timeout_raw)
        except ValueError:
            raise ValueError(
                f"DOCSYNC_HTTP_TIMEOUT must be a number, got '{self.timeout_raw}'"
            ) from None

        if timeout <= 0:
            raise ValueError("DOCSYNC_HTTP_TIMEOUT must be positive")
