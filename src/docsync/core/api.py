"""HTTP client for the documentation hosting API."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from docsync import __version__
from docsync.core.ci import is_github_actions
from docsync.core.config import ApiConfig

logger = logging.getLogger(__name__)


class APIError(Exception):
    """The documentation API returned an error response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _build_http_client(api_key: str, config: ApiConfig) -> httpx.Client:
    """Build an httpx client configured for the documentation API."""
    headers = {
        "Accept": "application/json",
        "User-Agent": f"docsync/{__version__}",
        "x-docsync-source": "cli-gh" if is_github_actions() else "cli",
    }
    return httpx.Client(
        base_url=config.base_url,
        auth=(api_key, ""),
        headers=headers,
        timeout=config.timeout,
        verify=config.verify,
    )


def handle_response(response: httpx.Response) -> Any:
    """Return the decoded JSON body of a successful response.

    Raises:
        APIError: If the response status is not 2xx
    """
    if response.is_success:
        if not response.content:
            return None
        return response.json()

    message = f"{response.status_code} {response.reason_phrase}"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or message

    logger.debug(f"API error {response.status_code}: {message}")
    raise APIError(str(message), status_code=response.status_code)


class DocsAPIClient:
    """Thin wrapper over the documentation API endpoints used by docsync."""

    def __init__(
        self,
        api_key: str,
        config: Optional[ApiConfig] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not api_key:
            raise ValueError("No project API key provided. Please use `--key`.")

        if http_client is None:
            config = config or ApiConfig()
            config.validate()
            http_client = _build_http_client(api_key, config)

        self._client = http_client

    def __enter__(self) -> "DocsAPIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # Changelogs

    def get_changelog(self, slug: str) -> Optional[Dict[str, Any]]:
        """Fetch a changelog by slug.

        Returns:
            The changelog, or None if it does not exist
        """
        response = self._client.get(f"/changelogs/{slug}")
        if response.status_code == 404:
            return None
        return handle_response(response)

    def create_changelog(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.post("/changelogs", json=payload)
        return handle_response(response)

    def update_changelog(self, slug: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.put(f"/changelogs/{slug}", json=payload)
        return handle_response(response)

    # Versions

    def list_versions(self) -> List[Dict[str, Any]]:
        response = self._client.get("/version")
        return handle_response(response) or []

    def create_version(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.post("/version", json=payload)
        return handle_response(response)
