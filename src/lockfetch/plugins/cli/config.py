"""
CLI command: config

Configuration management commands.
"""

import logging

import click

from lockfetch.settings import Settings

# Configure module-level logger
logger = logging.getLogger("lockfetch.cli.config")


@click.group("config")
def cli():
    """
    Configuration management commands.
    """
    pass


@cli.command("show")
@click.pass_context
def show_config(ctx):
    """
    Show current configuration.
    """
    settings = (ctx.obj or {}).get("settings") or Settings()

    click.echo("lockfetch Configuration")
    click.echo("=" * 30)
    click.echo(f"Root Directory: {settings.root_dir}")
    click.echo(f"Vendor Directory: {settings.vendor_dir}")
    click.echo(f"Lock File: {settings.lock_file}")
    click.echo(f"Max Workers: {settings.max_workers}")
    click.echo(f"Request Timeout: {settings.request_timeout or 'none'}")
    click.echo(f"Archive API: {settings.archive_api_url}")
    click.echo(f"Git Binary: {settings.git_binary}")
    click.echo(f"Verbose: {settings.verbose}")
    click.echo(f"Log Level: {settings.log_level}")
