"""Install name derivation.

The install name doubles as the on-disk directory name and the idempotency
key, so every consumer must derive it the same way.
"""

from urllib.parse import urlsplit

from .exceptions import ParseError

ARCHIVE_SUFFIX = ".tar.xz"


def install_name_from_url(url: str) -> str:
    """Derive the install directory name from an asset download URL.

    Args:
        url: Asset download URL

    Returns:
        Final path segment with the archive extension stripped

    Raises:
        ParseError: If the URL does not name a .tar.xz archive

    Examples:
        >>> install_name_from_url(
        ...     "https://github.com/CachyOS/proton-cachyos/releases/download/"
        ...     "cachyos-10.0-20250807-slr/proton-cachyos-10.0-20250807-slr-x86_64_v3.tar.xz"
        ... )
        'proton-cachyos-10.0-20250807-slr-x86_64_v3'
    """
    filename = urlsplit(url).path.rsplit("/", 1)[-1]
    if not filename.endswith(ARCHIVE_SUFFIX):
        raise ParseError(
            f"Asset URL does not point to a {ARCHIVE_SUFFIX} archive: {url}", context={"url": url}
        )

    name = filename.removesuffix(ARCHIVE_SUFFIX)
    if not name or name in (".", ".."):
        raise ParseError(f"Cannot derive install name from asset URL: {url}", context={"url": url})
    return name
