"""Archive installation mechanism.

Download, extract into a scratch area, then move the payload into place with a
single rename. Nothing is written at the final path until that rename, so an
interrupted run never leaves a half-unpacked install visible to Steam.

The scratch copy is left behind on failure for diagnosis; the next run
sweeps it away before extracting.
"""

import errno
import io
import logging
import lzma
import os
import shutil
import tarfile
from pathlib import Path

from .config import PAYLOAD_PREFIX
from .exceptions import ArchiveError
from .exceptions import DownloadError
from .exceptions import FilesystemError
from .exceptions import InstallMoveError
from .exceptions import LayoutError
from .exceptions import NetworkError
from .protocols import HttpClientProtocol
from .schema import InstallResult

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = ".protonup-cachyos-"


def default_scratch_dir(dest_root: Path) -> Path:
    """Per-process scratch location next to (not inside) the install root.

    Sharing the parent keeps the final rename on one filesystem.
    """
    return dest_root.parent / f"{SCRATCH_PREFIX}{os.getpid()}"


def _find_payload_root(scratch: Path, prefix: str) -> Path:
    """Find the single top-level payload directory in the scratch area.

    Args:
        scratch: Directory the archive was extracted into
        prefix: Name prefix the payload directory must carry

    Returns:
        Path to the payload directory

    Raises:
        LayoutError: If zero or several top-level directories match
    """
    candidates = sorted(
        entry
        for entry in scratch.iterdir()
        if entry.name.startswith(prefix) and entry.is_dir() and not entry.is_symlink()
    )

    if not candidates:
        raise LayoutError(
            f"Extracted folder not found: no top-level '{prefix}*' directory in archive",
            context={"scratch": str(scratch)},
        )
    if len(candidates) > 1:
        raise LayoutError(
            f"Archive contains {len(candidates)} top-level '{prefix}*' directories: "
            f"{', '.join(c.name for c in candidates)}",
            context={"scratch": str(scratch)},
        )
    return candidates[0]


class ArchiveInstaller:
    """Install a .tar.xz release asset into an install root."""

    def __init__(
        self,
        client: HttpClientProtocol,
        payload_prefix: str = PAYLOAD_PREFIX,
        scratch_dir: Path | None = None,
    ):
        """Initialize installer.

        Args:
            client: HTTP client used for the asset download
            payload_prefix: Required name prefix of the archive's top-level directory
            scratch_dir: Extraction workspace (defaults to a per-process path beside
                         the install root). Owned by the installer: it is wiped
                         before every extraction.
        """
        self.client = client
        self.payload_prefix = payload_prefix
        self.scratch_dir = scratch_dir

    def install(self, url: str, dest_root: Path, dest_name: str) -> InstallResult:
        """
        Download ``url`` and install its payload as ``dest_root / dest_name``.

        Process:
        1. Download archive into memory
        2. Recreate empty scratch area
        3. Extract xz-compressed tar into scratch area
        4. Locate the single payload directory
        5. Rename payload to the final path

        Raises:
            DownloadError: If the download fails
            FilesystemError: If the scratch area cannot be prepared
            ArchiveError: If the archive is corrupt or extraction fails
            LayoutError: If the archive does not contain exactly one payload directory
            InstallMoveError: If the final rename fails or the target already exists
        """
        return self.unpack(self.download(url), dest_root, dest_name)

    def download(self, url: str) -> bytes:
        """
        Download the archive body into memory.

        Raises:
            DownloadError: If the download fails
        """
        try:
            data = self.client.fetch(url)
        except NetworkError as e:
            raise DownloadError(f"Failed to download {url}: {e.message}", context={"url": url}) from e
        logger.info(f"Downloaded {len(data)} bytes from {url}")
        return data

    def unpack(self, data: bytes, dest_root: Path, dest_name: str) -> InstallResult:
        """
        Extract downloaded archive bytes and move the payload to ``dest_root / dest_name``.

        Steps 2-5 of install().
        """
        dest = dest_root / dest_name

        scratch = self._prepare_scratch(self.scratch_dir or default_scratch_dir(dest_root))
        self._extract(data, scratch)
        payload = _find_payload_root(scratch, self.payload_prefix)
        logger.debug(f"Payload directory: {payload.name}")

        self._move_into_place(payload, dest)
        logger.info(f"Installed {dest_name} to {dest}")
        self._discard_scratch(scratch)

        return InstallResult(name=dest_name, path=dest, archive_size=len(data), payload_name=payload.name)

    def _prepare_scratch(self, scratch: Path) -> Path:
        self._sweep_stale_scratch(scratch)
        try:
            if scratch.exists():
                logger.debug(f"Removing stale scratch area {scratch}")
                shutil.rmtree(scratch)
            scratch.mkdir(parents=True)
        except OSError as e:
            raise FilesystemError(
                f"Cannot prepare scratch area {scratch}: {e}", context={"path": str(scratch)}
            ) from e
        return scratch

    def _sweep_stale_scratch(self, scratch: Path) -> None:
        """Remove scratch areas left behind by earlier failed runs."""
        parent = scratch.parent
        if not parent.is_dir():
            return

        try:
            entries = sorted(parent.iterdir())
        except OSError as e:
            logger.warning(f"Could not list {parent} for stale scratch areas: {e}")
            return

        for entry in entries:
            if entry == scratch or not entry.name.startswith(SCRATCH_PREFIX):
                continue
            if entry.is_symlink() or not entry.is_dir():
                continue

            try:
                shutil.rmtree(entry)
            except OSError as e:
                logger.warning(f"Could not remove stale scratch area {entry}: {e}")
                continue
            logger.debug(f"Removed stale scratch area {entry}")

    def _discard_scratch(self, scratch: Path) -> None:
        # Payload already moved out; leftovers are not part of the install
        try:
            shutil.rmtree(scratch)
        except OSError as e:
            logger.debug(f"Could not remove scratch area {scratch}: {e}")

    def _extract(self, data: bytes, scratch: Path) -> None:
        try:
            with tarfile.open(fileobj=io.BytesIO(data), mode="r:xz") as archive:
                archive.extractall(scratch, filter="data")
        except (tarfile.TarError, lzma.LZMAError, EOFError, OSError) as e:
            raise ArchiveError(f"Failed to extract archive: {e}", context={"scratch": str(scratch)}) from e

    def _move_into_place(self, payload: Path, dest: Path) -> None:
        if dest.exists():
            raise InstallMoveError(f"Install target already exists: {dest}", context={"path": str(dest)})

        try:
            payload.rename(dest)
        except OSError as e:
            if e.errno == errno.EXDEV:
                message = f"Cannot move {payload} to {dest}: scratch area is on a different filesystem"
            else:
                message = f"Cannot move {payload} to {dest}: {e}"
            raise InstallMoveError(message, context={"source": str(payload), "path": str(dest)}) from e
