"""Installer configuration.

All policy (where to install, which feed, naming conventions) lives in one
immutable value object built once per run and passed through the pipeline.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .exceptions import ConfigError

API_URL = "https://api.github.com/repos/CachyOS/proton-cachyos/releases/latest"
USER_AGENT = "protonup-cachyos"

# Upstream naming conventions; keep in sync with the release layout.
PACKAGE_PREFIX = "proton-cachyos-"
PAYLOAD_PREFIX = "proton-"

# Relative to $HOME, in priority order
INSTALL_ROOT_CANDIDATES = (
    Path(".steam/root/compatibilitytools.d"),
    Path(".local/share/Steam/compatibilitytools.d"),
)

LOG_LEVEL_ENV = "PROTONUP_CACHYOS_LOG_LEVEL"


class InstallerConfig(BaseModel):
    """Run configuration (immutable)."""

    model_config = ConfigDict(frozen=True)

    home: Path
    install_candidates: list[Path] = Field(default_factory=list)
    api_url: str = API_URL
    user_agent: str = USER_AGENT
    package_prefix: str = PACKAGE_PREFIX
    payload_prefix: str = PAYLOAD_PREFIX
    cpuinfo_path: Path = Path("/proc/cpuinfo")
    scratch_dir: Path | None = None
    timeout: float | None = None

    @classmethod
    def for_home(cls, home: Path, **overrides) -> "InstallerConfig":
        """Build config with the default install candidates under ``home``."""
        candidates = [home / candidate for candidate in INSTALL_ROOT_CANDIDATES]
        overrides.setdefault("install_candidates", candidates)
        return cls(home=home, **overrides)

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "InstallerConfig":
        """
        Build config from process environment.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            InstallerConfig with install candidates under $HOME

        Raises:
            ConfigError: If HOME is unset or empty
        """
        environ = os.environ if environ is None else environ
        home = environ.get("HOME")
        if not home:
            raise ConfigError("HOME is not set; cannot locate the Steam compatibility tools directory")
        return cls.for_home(Path(home))
