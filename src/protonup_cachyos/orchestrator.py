"""End-to-end install flow.

detect -> resolve -> skip if installed -> download/extract/move -> prune.
The first error from any stage aborts the run.
"""

import logging
import os
from collections.abc import Callable

import click

from .capability import MicroarchTag
from .capability import detect_microarch
from .config import InstallerConfig
from .exceptions import PrivilegeError
from .install_dir import InstallDirectoryManager
from .installer import ArchiveInstaller
from .protocols import HttpClientProtocol
from .resolver import ReleaseResolver
from .schema import RunOutcome
from .utils import install_name_from_url

logger = logging.getLogger(__name__)


def ensure_not_superuser(geteuid: Callable[[], int] = os.geteuid) -> None:
    """Raise PrivilegeError when running as root."""
    if geteuid() == 0:
        raise PrivilegeError("Do not run as root.")


def run(
    config: InstallerConfig,
    client: HttpClientProtocol,
    *,
    echo: Callable[[str], None] = click.echo,
    geteuid: Callable[[], int] = os.geteuid,
) -> RunOutcome:
    """
    Install or upgrade to the latest release for this CPU.

    Args:
        config: Run configuration
        client: HTTP client for metadata and asset downloads
        echo: Sink for line-oriented status messages
        geteuid: Effective uid provider (checked before any other work)

    Returns:
        RunOutcome describing what was installed (or found already installed)

    Raises:
        InstallerError: Subclass for whichever stage failed
    """
    ensure_not_superuser(geteuid)

    directories = InstallDirectoryManager(config.install_candidates)
    install_root = directories.resolve_install_root()

    tag = detect_microarch(config.cpuinfo_path)
    logger.debug(f"Detected microarchitecture: {tag.value}")

    resolver = ReleaseResolver(client, api_url=config.api_url, user_agent=config.user_agent)
    release = resolver.fetch_latest()
    asset = resolver.select_asset(release, tag)

    install_name = install_name_from_url(asset.download_url)
    install_path = install_root / install_name

    if directories.is_already_installed(install_root, install_name):
        echo(f"[✓] Already installed: {install_name}")
        return RunOutcome(
            name=install_name,
            path=install_path,
            tag=tag.value,
            release_tag=release.tag_name,
            already_installed=True,
        )

    if tag is MicroarchTag.V3:
        echo("[*] CPU supports x86_64_v3, using optimized build")
    else:
        echo("[*] CPU does not support x86_64_v3, using baseline x86_64 build")

    installer = ArchiveInstaller(client, payload_prefix=config.payload_prefix, scratch_dir=config.scratch_dir)

    echo(f"[↓] Downloading: {asset.download_url.rsplit('/', 1)[-1]}")
    data = installer.download(asset.download_url)

    echo("[>] Extracting...")
    result = installer.unpack(data, install_root, install_name)

    pruned = directories.prune_superseded(install_root, keep=install_name, prefix=config.package_prefix)

    echo(f"[✓] Installed: {result.name}")
    echo("[✓] Done. Restart Steam to use the new version.")

    return RunOutcome(
        name=result.name,
        path=result.path,
        tag=tag.value,
        release_tag=release.tag_name,
        pruned=pruned,
    )
