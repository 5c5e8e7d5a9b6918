"""appinspector CLI - appinspector command."""

import click

from appinspector import __version__
from appinspector.cli.inspect import enums_command, models_command
from appinspector.cli.serve import serve_command
from appinspector.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="appinspector")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """appinspector - Inspect an application's models and enums for AI agents."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(models_command, name="models")
cli.add_command(enums_command, name="enums")
cli.add_command(serve_command, name="serve")


if __name__ == "__main__":
    cli()
