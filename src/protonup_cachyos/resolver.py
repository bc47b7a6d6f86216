"""Release resolver - pick the asset matching the host CPU level.

One metadata fetch per run. No retry, no caching: a failed fetch is fatal.
"""

import logging

from .capability import MicroarchTag
from .config import API_URL
from .config import USER_AGENT
from .exceptions import NoMatchingAssetError
from .protocols import HttpClientProtocol
from .schema import AssetDescriptor
from .schema import ReleaseMetadata

logger = logging.getLogger(__name__)


class ReleaseResolver:
    """
    Resolve the latest release asset for a microarchitecture tag.

    The feed endpoint and client are injected so tests and other apps can
    point the resolver elsewhere.
    """

    def __init__(
        self,
        client: HttpClientProtocol,
        api_url: str = API_URL,
        user_agent: str = USER_AGENT,
    ):
        """Initialize resolver.

        Args:
            client: HTTP client used for the metadata fetch
            api_url: Release feed endpoint returning the latest release
            user_agent: User-Agent sent to the feed (GitHub rejects requests without one)
        """
        self.client = client
        self.api_url = api_url
        self.user_agent = user_agent

    def fetch_latest(self) -> ReleaseMetadata:
        """
        Fetch and parse the latest release metadata.

        Raises:
            NetworkError: If the fetch fails
            ParseError: If the response is not release metadata
        """
        logger.info(f"Fetching release metadata from {self.api_url}")
        body = self.client.fetch(self.api_url, user_agent=self.user_agent)
        release = ReleaseMetadata.from_json(body)
        logger.debug(f"Latest release {release.tag_name} has {len(release.assets)} assets")
        return release

    @staticmethod
    def select_asset(release: ReleaseMetadata, tag: MicroarchTag) -> AssetDescriptor:
        """
        Select the first asset (feed order) built for ``tag``.

        Raises:
            NoMatchingAssetError: If no asset URL ends with ``<tag>.tar.xz``
        """
        suffix = tag.asset_suffix
        for asset in release.assets:
            if asset.download_url.endswith(suffix):
                return asset

        raise NoMatchingAssetError(
            f"No asset in release {release.tag_name} matches *{suffix}",
            context={"release": release.tag_name, "tag": tag.value},
        )

    def resolve_asset(self, tag: MicroarchTag) -> AssetDescriptor:
        """Fetch the latest release and select the asset for ``tag``."""
        return self.select_asset(self.fetch_latest(), tag)
