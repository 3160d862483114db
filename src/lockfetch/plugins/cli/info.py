"""
CLI command: info

Displays the lockfetch version and the registered fetchers.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

import click

from lockfetch.fetch import get_fetcher_info

# Configure module-level logger
logger = logging.getLogger("lockfetch.cli.info")


@click.command("info")
def cli() -> None:
    """
    Show package metadata and registered fetchers.
    """
    # Retrieve package version, fallback if not installed
    try:
        pkg_version = version("lockfetch")
        logger.debug("Retrieved package version: %s", pkg_version)
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
        logger.warning(
            "Package 'lockfetch' not found; using development version placeholder."
        )

    click.echo(f"lockfetch version: {pkg_version}")

    click.echo("\nRegistered fetchers:")
    for fetcher_type, description in get_fetcher_info().items():
        click.echo(f"  - {fetcher_type}: {description}")
