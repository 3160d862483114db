"""
CLI command: fetch

Fetches every entry of the lock manifest (or only the named ones) into the
vendor directory.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from lockfetch.errors import ManifestError
from lockfetch.fetch import (
    FetchManager,
    FetchSummary,
    UnitProfiler,
    save_summary_to_yaml,
)
from lockfetch.manifest import load_lock
from lockfetch.settings import Settings

# Configure module-level logger
logger = logging.getLogger("lockfetch.cli.fetch")


def report_failures(summary: FetchSummary) -> None:
    """
    Write captured process output, the entry name and the error to stderr.
    """
    for result in summary.failed:
        if result.output:
            click.echo(result.output.rstrip(), err=True)
        click.echo(result.name, err=True)
        click.echo(f"{result.error_kind}: {result.error_message}", err=True)


@click.command("fetch")
@click.argument("names", nargs=-1)
@click.option("-v", "--verbose", is_flag=True, help="verbose output")
@click.option(
    "-p",
    "--parallelism",
    type=click.IntRange(min=1),
    default=None,
    help="parallelism of download [default: 4]",
)
@click.option(
    "--cpuprofile",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="write cpu profile to file",
)
@click.option(
    "--lock-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Lock manifest to read [default: ./Gopkg.lock]",
)
@click.option(
    "--vendor-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory receiving the fetched trees [default: ./vendor]",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a YAML summary of the run",
)
@click.pass_context
def cli(
    ctx,
    names: Tuple[str, ...],
    verbose: bool,
    parallelism: Optional[int],
    cpuprofile: Optional[Path],
    lock_file: Optional[Path],
    vendor_dir: Optional[Path],
    report: Optional[Path],
) -> None:
    """
    Fetch the pinned revision of every entry, or only of NAMES.

    Examples:
        lockfetch fetch
        lockfetch fetch -v -p 8
        lockfetch fetch github.com/pkg/errors --report fetch.yml
    """
    base = (ctx.obj or {}).get("settings") or Settings()
    settings = base.with_overrides(
        verbose=verbose or None,
        max_workers=parallelism,
        lock_file=lock_file,
        vendor_dir=vendor_dir,
    )

    try:
        manifest = load_lock(settings.lock_file)
        entries = manifest.select(names) if names else manifest.projects
    except ManifestError as e:
        logger.error("Cannot read lock manifest: %s", e)
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    click.echo("Download start:")

    profiler = UnitProfiler() if cpuprofile else None
    try:
        summary = FetchManager(settings, profiler=profiler).fetch_all(entries)
    finally:
        if profiler is not None:
            profiler.dump_stats(cpuprofile)

    click.echo("Download done.")

    if report:
        save_summary_to_yaml(summary, report)

    report_failures(summary)
    click.echo(
        f"\nCompleted: {len(summary.succeeded)}/{len(summary.results)} "
        "entries fetched successfully"
    )
    if not summary.ok:
        ctx.exit(1)
