"""archscan CLI - archscan command."""

import click

from archscan.cli.clear import clear_command
from archscan.cli.scan import scan_command
from archscan.config import load_config
from archscan.config.constants import TOOL_VERSION
from archscan.core.errors import ConfigError
from archscan.core.logging import configure_logging


@click.group()
@click.version_option(version=TOOL_VERSION, prog_name="archscan")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """archscan - domain ownership report for PHP and JS/TS source trees."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    try:
        config = load_config()
    except ConfigError as e:
        configure_logging(level="DEBUG" if verbose else "INFO")
        raise click.ClickException(str(e)) from e

    if verbose:
        config.logging = config.logging.model_copy(update={"level": "DEBUG"})
    configure_logging(config=config.logging)
    ctx.obj["config"] = config


cli.add_command(scan_command, name="scan")
cli.add_command(clear_command, name="clear")


if __name__ == "__main__":
    cli()
