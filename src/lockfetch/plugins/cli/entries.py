"""
CLI command: list

Lists lock entries with the transport each one would use.
"""

import logging

import click

from lockfetch.errors import ManifestError
from lockfetch.fetch import classify_source
from lockfetch.manifest import load_lock
from lockfetch.settings import Settings

logger = logging.getLogger("lockfetch.cli.list")


@click.command("list")
@click.option(
    "--lock-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Lock manifest to read [default: ./Gopkg.lock]",
)
@click.pass_context
def cli(ctx, lock_file) -> None:
    """
    List lock entries and how their sources classify.

    No network access is made: entries that need go-import discovery are
    shown as "discovery".
    """
    settings = ((ctx.obj or {}).get("settings") or Settings()).with_overrides(
        lock_file=lock_file
    )
    try:
        manifest = load_lock(settings.lock_file)
    except ManifestError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    if not manifest.projects:
        click.echo(f"No entries in {settings.lock_file}")
        return

    for entry in manifest.projects:
        source = classify_source(entry.source_path)
        label = f" ({entry.version})" if entry.version else ""
        click.echo(
            f"  - {entry.name}{label} @ {entry.revision[:12]} "
            f"[{source.kind}: {source.describe()}]"
        )
