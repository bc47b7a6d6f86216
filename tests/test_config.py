"""Tests for InstallerConfig."""

from pathlib import Path

import pytest
from protonup_cachyos import ConfigError
from protonup_cachyos import InstallerConfig
from pydantic import ValidationError


def test_from_environment_uses_home():
    config = InstallerConfig.from_environment({"HOME": "/home/gamer"})

    assert config.home == Path("/home/gamer")
    assert config.install_candidates == [
        Path("/home/gamer/.steam/root/compatibilitytools.d"),
        Path("/home/gamer/.local/share/Steam/compatibilitytools.d"),
    ]
    assert config.package_prefix == "proton-cachyos-"
    assert config.api_url.endswith("/CachyOS/proton-cachyos/releases/latest")


@pytest.mark.parametrize("environ", [{}, {"HOME": ""}])
def test_from_environment_requires_home(environ):
    with pytest.raises(ConfigError, match="HOME"):
        InstallerConfig.from_environment(environ)


def test_for_home_overrides():
    config = InstallerConfig.for_home(Path("/h"), install_candidates=[Path("/custom")], timeout=5.0)

    assert config.install_candidates == [Path("/custom")]
    assert config.timeout == 5.0


def test_config_is_immutable():
    config = InstallerConfig.for_home(Path("/h"))

    with pytest.raises(ValidationError):
        config.home = Path("/elsewhere")  # type: ignore
