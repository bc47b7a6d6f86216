"""Shared test fixtures."""

import io
import tarfile

import pytest

RELEASE_BASE = "https://github.com/CachyOS/proton-cachyos/releases/download/cachyos-10.0-20250807-slr"


def build_archive(entries: dict[str, bytes | None]) -> bytes:
    """Build an in-memory .tar.xz; a None value creates a directory entry."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:xz") as archive:
        for name, content in entries.items():
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                archive.addfile(info)
            else:
                info.size = len(content)
                info.mode = 0o644
                archive.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def make_archive():
    return build_archive


@pytest.fixture
def release_json():
    """Build a latest-release document for the given asset file names."""

    def _build(filenames: list[str], tag: str = "cachyos-10.0-20250807-slr") -> bytes:
        assets = ",".join(
            f'{{"name": "{name}", "browser_download_url": "{RELEASE_BASE}/{name}", "size": 1}}'
            for name in filenames
        )
        return f'{{"tag_name": "{tag}", "draft": false, "assets": [{assets}]}}'.encode()

    return _build
