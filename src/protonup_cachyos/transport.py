"""requests-based HTTP client."""

import logging

import requests

from .exceptions import NetworkError

logger = logging.getLogger(__name__)


class RequestsHttpClient:
    """Blocking HTTP client implementing HttpClientProtocol."""

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None):
        """Initialize client.

        Args:
            session: Optional session to reuse (a new one is created otherwise)
            timeout: Optional per-request timeout in seconds; None waits indefinitely
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str, user_agent: str | None = None) -> bytes:
        headers = {"User-Agent": user_agent} if user_agent else {}
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Request to {url} failed: {e}", context={"url": url}) from e

        logger.debug(f"Fetched {len(response.content)} bytes from {response.url}")
        return response.content
