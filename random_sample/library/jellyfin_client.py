"""HTTP client for the Jellyfin REST API."""

import logging
from typing import Any, Dict, Optional

import requests

from random_sample.errors import HostAuthError, HostServiceError


logger = logging.getLogger(__name__)


def authorization_header(token: str) -> str:
    """Build the MediaBrowser authorization header value for a token."""
    return f'MediaBrowser Token="{token}"'


class JellyfinClient:
    """Thin synchronous client for the media server API.

    Features:
    - Shared connection pool via requests.Session
    - Per-call access token (calls run as the requesting user)
    - Timeout control
    - Host faults mapped to HostServiceError / HostAuthError

    There is no retry logic: a failed call fails the operation that made it.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """Initialize the client.

        Args:
            base_url: Media server base URL, e.g. http://localhost:8096
            timeout: Request timeout in seconds
            session: Optional preconfigured session
        """
        if not base_url:
            raise HostServiceError("Media server URL not configured")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        logger.info(f"Jellyfin client initialized: {self.base_url} (timeout={timeout}s)")

    def request(
        self,
        method: str,
        endpoint: str,
        token: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> requests.Response:
        """Make an API request and check its status.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL, starting with '/'
            token: Access token the call runs as
            params: Query parameters
            json: JSON body

        Returns:
            The successful response

        Raises:
            HostAuthError: On 401/403
            HostServiceError: On any other HTTP error or transport failure
        """
        url = f"{self.base_url}{endpoint}"
        headers = {
            "Authorization": authorization_header(token),
            "Accept": "application/json",
        }

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise HostServiceError(f"Connection error: {e}") from e

        if response.status_code in (401, 403):
            raise HostAuthError(
                f"Media server rejected the access token ({response.status_code})",
                status_code=response.status_code,
            )
        if response.status_code >= 400:
            raise HostServiceError(
                f"Media server error {response.status_code} on {method} {endpoint}: "
                f"{response.text[:200]}",
                status_code=response.status_code,
            )

        return response

    def get_json(self, endpoint: str, token: str, **params) -> Any:
        """GET an endpoint and decode its JSON body."""
        response = self.request("GET", endpoint, token, params=params or None)
        try:
            return response.json()
        except ValueError as e:
            raise HostServiceError(f"Invalid JSON from {endpoint}: {e}") from e

    def post_json(self, endpoint: str, token: str, payload: Any) -> requests.Response:
        """POST a JSON body to an endpoint."""
        return self.request("POST", endpoint, token, json=payload)

    def ping(self) -> bool:
        """Check if the media server answers its public info endpoint.

        Returns:
            True if the server is reachable, False otherwise
        """
        try:
            response = self.session.get(
                f"{self.base_url}/System/Info/Public",
                timeout=self.timeout,
            )
            response.raise_for_status()
            return True
        except requests.exceptions.RequestException as e:
            logger.warning(f"Media server health check failed: {e}")
            return False

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
