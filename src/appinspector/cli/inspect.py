"""appinspector models / enums commands - one inspection per invocation.

Each invocation bootstraps the target application afresh, runs a single
command and prints one JSON document on stdout. Anything the application
prints while being imported is redirected to stderr.
"""

from __future__ import annotations

import contextlib
import json
import sys
from pathlib import Path
from typing import Any

import click

from appinspector.commands import dispatch
from appinspector.config.loader import load_config
from appinspector.core.errors import BootstrapError, ConfigError
from appinspector.core.logging import configure_logging, set_request_id
from appinspector.core.progress import print_catalog_table
from appinspector.runtime.bootstrap import Runtime, bootstrap, locate_app_root


def emit(result: dict[str, Any]) -> None:
    """Print a command result as indented JSON on stdout."""
    click.echo(json.dumps(result, indent=2, default=str))


def run_inspection(
    category: str,
    command: str | None,
    argument: str | None,
    *,
    verbose: bool = False,
) -> dict[str, Any]:
    """Resolve the app, dispatch one command and return its result.

    Raises:
        BootstrapError: The application cannot be located or initialized.
        ConfigError: The configuration is invalid.
    """
    set_request_id()
    target = load_config(Path.cwd()).target
    app_root = locate_app_root(target)
    config = load_config(app_root)
    if not verbose:
        configure_logging(config=config.logging)

    def bootstrap_runtime() -> Runtime:
        return bootstrap(app_root, config.target)

    with contextlib.redirect_stdout(sys.stderr):
        return dispatch(category, command, argument, bootstrap_runtime)


def _run(
    ctx: click.Context,
    category: str,
    command: str | None,
    argument: str | None,
    as_table: bool,
) -> None:
    verbose = bool((ctx.obj or {}).get("verbose"))
    try:
        result = run_inspection(category, command, argument, verbose=verbose)
    except (BootstrapError, ConfigError) as e:
        emit({"error": e.message})
        ctx.exit(1)

    if as_table and isinstance(result.get(category), list):
        print_catalog_table(category.title(), result[category])
        return
    emit(result)


_table_option = click.option(
    "--table", "as_table", is_flag=True, help="Render list and search results as a table"
)


@click.command()
@click.argument("command", required=False)
@click.argument("argument", required=False)
@_table_option
@click.pass_context
def models_command(
    ctx: click.Context, command: str | None, argument: str | None, as_table: bool
) -> None:
    """Inspect data models.

    \b
    COMMAND is one of:
      list                 List all models
      schema <ModelName>   Get schema for a specific model
      search <query>       Search models by name
    """
    _run(ctx, "models", command, argument, as_table)


@click.command()
@click.argument("command", required=False)
@click.argument("argument", required=False)
@_table_option
@click.pass_context
def enums_command(
    ctx: click.Context, command: str | None, argument: str | None, as_table: bool
) -> None:
    """Inspect enums.

    \b
    COMMAND is one of:
      list                 List all enums
      details <EnumName>   Get full details for a specific enum
      values <EnumName>    Get just the case names and values
      search <query>       Search enums by name
    """
    _run(ctx, "enums", command, argument, as_table)
