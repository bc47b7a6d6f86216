"""Install directory management.

Candidate roots are app policy, injected in priority order. This module only
picks one, answers "is it already there", and prunes superseded copies.
"""

import logging
import shutil
from pathlib import Path

from .exceptions import FilesystemError

logger = logging.getLogger(__name__)


class InstallDirectoryManager:
    """
    Manage the compatibility tools directory (with injected candidate roots).

    Philosophy:
    - Ordered list scanned once, no discovery heuristics
    - Pruning is hygiene: failures are logged, never raised
    """

    def __init__(self, candidates: list[Path]):
        """Initialize with app-provided candidate roots.

        Args:
            candidates: Install roots in priority order (first existing wins,
                        first entry is created when none exists)

        Example:
            >>> manager = InstallDirectoryManager([
            ...     Path.home() / ".steam/root/compatibilitytools.d",
            ...     Path.home() / ".local/share/Steam/compatibilitytools.d",
            ... ])
        """
        if not candidates:
            raise ValueError("At least one install root candidate is required")
        self.candidates = candidates

    def resolve_install_root(self) -> Path:
        """
        Return the first existing candidate, creating the primary one if none exist.

        Raises:
            FilesystemError: If the directory cannot be created
        """
        root = next((candidate for candidate in self.candidates if candidate.exists()), self.candidates[0])

        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Cannot create install directory {root}: {e}", context={"path": str(root)}
            ) from e

        logger.debug(f"Install root: {root}")
        return root

    def is_already_installed(self, root: Path, name: str) -> bool:
        return (root / name).exists()

    def prune_superseded(self, root: Path, keep: str, prefix: str) -> list[Path]:
        """
        Remove sibling installs of the same package other than ``keep``.

        Only directories directly under ``root`` whose name starts with
        ``prefix`` are candidates. Removal failures are logged and skipped.

        Args:
            root: Install root
            keep: Install name to preserve
            prefix: Package naming prefix (must be the package's own prefix)

        Returns:
            Paths that were removed

        Raises:
            ValueError: If prefix is empty
            FilesystemError: If ``root`` cannot be listed
        """
        if not prefix:
            raise ValueError("Refusing to prune with an empty name prefix")

        try:
            entries = sorted(root.iterdir())
        except OSError as e:
            raise FilesystemError(
                f"Cannot list install directory {root}: {e}", context={"path": str(root)}
            ) from e

        removed = []
        for entry in entries:
            if entry.name == keep or not entry.name.startswith(prefix):
                continue
            if entry.is_symlink() or not entry.is_dir():
                continue

            try:
                shutil.rmtree(entry)
            except OSError as e:
                logger.warning(f"Could not remove old version {entry.name}: {e}")
                continue

            logger.info(f"Removed old version: {entry.name}")
            removed.append(entry)

        return removed
