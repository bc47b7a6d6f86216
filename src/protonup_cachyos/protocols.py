"""Protocols for the HTTP transport.

The pipeline only needs "fetch this URL into bytes"; apps and tests provide
any implementation with this shape.
"""

from typing import Protocol


class HttpClientProtocol(Protocol):
    """Protocol for HTTP clients used by the resolver and installer.

    Example implementations:
    - RequestsHttpClient: requests-based client (default)
    - Fake clients in tests serving canned bytes
    """

    def fetch(self, url: str, user_agent: str | None = None) -> bytes:
        """Fetch the full response body of a GET request, following redirects.

        Args:
            url: URL to fetch
            user_agent: Optional User-Agent header value

        Raises:
            NetworkError: If the request fails or returns an error status
        """
        ...
