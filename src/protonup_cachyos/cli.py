"""protonup-cachyos command line entrypoint.

Usage:
    protonup-cachyos
    python -m protonup_cachyos
"""

import os
import sys

import click

from .config import LOG_LEVEL_ENV
from .config import InstallerConfig
from .exceptions import InstallerError
from .logging_config import setup_logging
from .orchestrator import ensure_not_superuser
from .orchestrator import run
from .transport import RequestsHttpClient


@click.command()
def main() -> None:
    """Install or upgrade proton-cachyos for the current user's Steam."""
    setup_logging(os.environ.get(LOG_LEVEL_ENV, "WARNING"))

    try:
        ensure_not_superuser()
        config = InstallerConfig.from_environment()
        run(config, RequestsHttpClient(timeout=config.timeout))
    except InstallerError as e:
        click.secho(f"[-] {e.message}", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
