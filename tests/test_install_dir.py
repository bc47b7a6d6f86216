"""Tests for InstallDirectoryManager with injected candidate roots."""

import shutil
import tempfile
from pathlib import Path

import pytest
from protonup_cachyos import FilesystemError
from protonup_cachyos import InstallDirectoryManager

PREFIX = "proton-cachyos-"


def test_resolve_prefers_existing_candidate():
    """The first existing candidate wins even if it is not the primary one."""
    with tempfile.TemporaryDirectory() as tmpdir:
        primary = Path(tmpdir) / ".steam" / "root" / "compatibilitytools.d"
        secondary = Path(tmpdir) / ".local" / "share" / "Steam" / "compatibilitytools.d"
        secondary.mkdir(parents=True)

        manager = InstallDirectoryManager([primary, secondary])

        assert manager.resolve_install_root() == secondary
        assert not primary.exists()


def test_resolve_respects_priority_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        primary = Path(tmpdir) / "primary"
        secondary = Path(tmpdir) / "secondary"
        primary.mkdir()
        secondary.mkdir()

        manager = InstallDirectoryManager([primary, secondary])

        assert manager.resolve_install_root() == primary


def test_resolve_creates_primary_when_none_exist():
    """No candidate exists: the primary one is created (with parents)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        primary = Path(tmpdir) / ".steam" / "root" / "compatibilitytools.d"
        secondary = Path(tmpdir) / ".local" / "share" / "Steam" / "compatibilitytools.d"

        manager = InstallDirectoryManager([primary, secondary])
        root = manager.resolve_install_root()

        assert root == primary
        assert primary.is_dir()
        assert not secondary.exists()

        # Idempotent
        assert manager.resolve_install_root() == primary


def test_resolve_creation_failure():
    """A file in the way of the primary candidate is a FilesystemError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        blocker = Path(tmpdir) / "blocker"
        blocker.write_text("not a directory")

        manager = InstallDirectoryManager([blocker / "compatibilitytools.d"])

        with pytest.raises(FilesystemError, match="Cannot create install directory"):
            manager.resolve_install_root()


def test_requires_candidates():
    with pytest.raises(ValueError):
        InstallDirectoryManager([])


def test_is_already_installed():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        manager = InstallDirectoryManager([root])

        assert not manager.is_already_installed(root, "proton-cachyos-2-x86_64")

        (root / "proton-cachyos-2-x86_64").mkdir()

        assert manager.is_already_installed(root, "proton-cachyos-2-x86_64")


def test_prune_removes_superseded_versions_only():
    """Older same-prefix directories go; kept version and unrelated entries stay."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        for name in [
            "proton-cachyos-1-x86_64",
            "proton-cachyos-1-x86_64_v3",
            "proton-cachyos-2-x86_64_v3",
            "GE-Proton10-20",
            "other-thing",
        ]:
            (root / name).mkdir()
        (root / "proton-cachyos-notes.txt").write_text("keep me")

        manager = InstallDirectoryManager([root])
        removed = manager.prune_superseded(root, keep="proton-cachyos-2-x86_64_v3", prefix=PREFIX)

        assert sorted(p.name for p in removed) == ["proton-cachyos-1-x86_64", "proton-cachyos-1-x86_64_v3"]
        assert sorted(p.name for p in root.iterdir()) == [
            "GE-Proton10-20",
            "other-thing",
            "proton-cachyos-2-x86_64_v3",
            "proton-cachyos-notes.txt",
        ]


def test_prune_leaves_symlinked_directories():
    """Symlinks are never followed into for removal."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "root"
        elsewhere = Path(tmpdir) / "elsewhere"
        root.mkdir()
        elsewhere.mkdir()
        (elsewhere / "data").write_text("important")
        (root / "proton-cachyos-linked").symlink_to(elsewhere, target_is_directory=True)

        manager = InstallDirectoryManager([root])
        removed = manager.prune_superseded(root, keep="proton-cachyos-2", prefix=PREFIX)

        assert removed == []
        assert (elsewhere / "data").exists()


def test_prune_failures_are_not_fatal(monkeypatch, caplog):
    """A directory that cannot be removed is logged and skipped."""
    real_rmtree = shutil.rmtree

    def flaky_rmtree(path, *args, **kwargs):
        if Path(path).name == "proton-cachyos-locked":
            raise PermissionError(13, "Permission denied", str(path))
        return real_rmtree(path, *args, **kwargs)

    monkeypatch.setattr(shutil, "rmtree", flaky_rmtree)

    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "proton-cachyos-locked").mkdir()
        (root / "proton-cachyos-old").mkdir()
        (root / "proton-cachyos-new").mkdir()

        manager = InstallDirectoryManager([root])
        removed = manager.prune_superseded(root, keep="proton-cachyos-new", prefix=PREFIX)

        assert [p.name for p in removed] == ["proton-cachyos-old"]
        assert (root / "proton-cachyos-locked").exists()
        assert "proton-cachyos-locked" in caplog.text


def test_prune_rejects_empty_prefix():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "anything").mkdir()

        with pytest.raises(ValueError):
            InstallDirectoryManager([root]).prune_superseded(root, keep="x", prefix="")

        assert (root / "anything").exists()


def test_prune_missing_root():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "missing"

        with pytest.raises(FilesystemError, match="Cannot list install directory"):
            InstallDirectoryManager([root]).prune_superseded(root, keep="x", prefix=PREFIX)
