"""Installer exceptions.

Every stage of the install pipeline raises a subclass of InstallerError.
All of them are fatal to a run; the CLI prints the message and exits non-zero.
"""


class InstallerError(Exception):
    """Base exception for install pipeline failures."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, URLs, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class PrivilegeError(InstallerError):
    """Refusing to run with superuser privileges."""


class ConfigError(InstallerError):
    """Required environment value missing or invalid."""


class NetworkError(InstallerError):
    """HTTP transport failure."""


class DownloadError(NetworkError):
    """Release asset download failed."""


class ParseError(InstallerError):
    """Release metadata is not well-formed."""


class NoMatchingAssetError(InstallerError):
    """No release asset matches the detected CPU level."""


class ArchiveError(InstallerError):
    """Archive is corrupt, truncated, or could not be extracted."""


class LayoutError(InstallerError):
    """Extracted archive does not have the expected shape."""


class InstallMoveError(InstallerError):
    """Moving the extracted payload into the install root failed."""


class FilesystemError(InstallerError):
    """Directory creation or listing failed."""
