"""Release feed and install result schemas.

The feed document is the GitHub "latest release" JSON; only the fields the
installer needs are modelled, everything else is ignored.
"""

from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .exceptions import ParseError


class AssetDescriptor(BaseModel):
    """One downloadable build attached to a release."""

    model_config = ConfigDict(frozen=True)

    browser_download_url: str
    name: str = ""

    @property
    def download_url(self) -> str:
        return self.browser_download_url


class ReleaseMetadata(BaseModel):
    """
    Latest published release as reported by the feed.

    Assets keep feed order; asset selection relies on it.
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str
    assets: list[AssetDescriptor]

    @classmethod
    def from_json(cls, payload: bytes | str) -> "ReleaseMetadata":
        """
        Parse release metadata from a feed response body.

        Args:
            payload: Raw JSON document

        Returns:
            ReleaseMetadata instance

        Raises:
            ParseError: If the body is not JSON or lacks tag_name/assets
        """
        try:
            return cls.model_validate_json(payload)
        except ValidationError as e:
            raise ParseError(
                f"Malformed release metadata: {e.error_count()} validation error(s)",
                context={"errors": e.errors(include_url=False)},
            ) from e


class InstallResult(BaseModel):
    """Outcome of a completed archive install."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    archive_size: int
    payload_name: str


class RunOutcome(BaseModel):
    """Summary of one end-to-end run."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    tag: str
    release_tag: str
    already_installed: bool = False
    pruned: list[Path] = Field(default_factory=list)
