"""protonup-cachyos - Install and upgrade proton-cachyos for Steam.

Public API: each pipeline stage is usable on its own; run() composes them.
"""

from .capability import MicroarchTag
from .capability import detect_microarch
from .config import InstallerConfig
from .exceptions import ArchiveError
from .exceptions import ConfigError
from .exceptions import DownloadError
from .exceptions import FilesystemError
from .exceptions import InstallerError
from .exceptions import InstallMoveError
from .exceptions import LayoutError
from .exceptions import NetworkError
from .exceptions import NoMatchingAssetError
from .exceptions import ParseError
from .exceptions import PrivilegeError
from .install_dir import InstallDirectoryManager
from .installer import ArchiveInstaller
from .orchestrator import ensure_not_superuser
from .orchestrator import run
from .protocols import HttpClientProtocol
from .resolver import ReleaseResolver
from .schema import AssetDescriptor
from .schema import InstallResult
from .schema import ReleaseMetadata
from .schema import RunOutcome
from .transport import RequestsHttpClient
from .utils import install_name_from_url

__all__ = [
    # Capability detection
    "MicroarchTag",
    "detect_microarch",
    # Release feed
    "ReleaseResolver",
    "ReleaseMetadata",
    "AssetDescriptor",
    # Installation
    "ArchiveInstaller",
    "InstallResult",
    "InstallDirectoryManager",
    # Orchestration
    "InstallerConfig",
    "RunOutcome",
    "run",
    "ensure_not_superuser",
    # Transport
    "HttpClientProtocol",
    "RequestsHttpClient",
    # Exceptions
    "InstallerError",
    "PrivilegeError",
    "ConfigError",
    "NetworkError",
    "DownloadError",
    "ParseError",
    "NoMatchingAssetError",
    "ArchiveError",
    "LayoutError",
    "InstallMoveError",
    "FilesystemError",
    # Utilities
    "install_name_from_url",
]

__version__ = "0.1.0"
