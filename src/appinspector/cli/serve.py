"""appinspector serve command - run the MCP server over stdio."""

from pathlib import Path

import click

from appinspector.config.loader import load_config
from appinspector.core.progress import status
from appinspector.runtime.bootstrap import has_bootstrap_entry, locate_app_root


@click.command()
@click.argument("path", default=None, required=False, type=click.Path(exists=True, path_type=Path))
def serve_command(path: Path | None) -> None:
    """Start the MCP server for an application.

    Serves over stdio. Every tool call inspects the application in a fresh
    subprocess, so code changes are picked up without a restart.

    PATH is the application root. If not specified, uses APPINSPECTOR_APP_PATH,
    then the current directory when it looks like the application, then
    ../.. relative to the current directory.
    """
    from appinspector.mcp.server import run_server

    target = load_config(Path.cwd()).target
    app_root = path.resolve() if path is not None else locate_app_root(target)
    config = load_config(app_root)

    if not has_bootstrap_entry(app_root, config.target):
        raise click.ClickException(
            f"Application not found at: {app_root}\n"
            f"Expected the '{config.target.bootstrap_module}' module under the application root."
        )

    status(f"Serving {app_root} over stdio", style="success")
    run_server(app_root, config)
