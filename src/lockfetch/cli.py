"""
Core lockfetch CLI: dynamically loads commands from plugins/cli.
"""

import importlib
import logging
import pathlib
import pkgutil

import click

from lockfetch.settings import Settings

# Logging configuration
logger = logging.getLogger("lockfetch")
handler = logging.StreamHandler()
formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.INFO)


@click.group()
@click.option("--log-level", default=None, help="Set logging level")
@click.pass_context
def main(ctx, log_level):
    """
    lockfetch CLI
    """
    ctx.ensure_object(dict)
    settings = Settings().with_overrides(log_level=log_level)
    ctx.obj["settings"] = settings

    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))


def load_commands():
    """
    Auto-discover and register click commands from lockfetch/plugins/cli/*.py
    Each plugin module must define a top-level `cli` click.Command.
    """
    plugins_path = pathlib.Path(__file__).parent / "plugins" / "cli"
    package = "lockfetch.plugins.cli"
    for _, module_name, _ in pkgutil.iter_modules([str(plugins_path)]):
        full_name = f"{package}.{module_name}"
        try:
            module = importlib.import_module(full_name)
            cmd = getattr(module, "cli", None)
            if isinstance(cmd, click.Command):
                main.add_command(cmd)
        except Exception as e:
            logger.error(f"Failed to load plugin {full_name}: {e}")


# Load all plugin commands
load_commands()

if __name__ == "__main__":
    main()
