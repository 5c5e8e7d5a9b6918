"""FastMCP server creation and wiring."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from appinspector.config.models import AppInspectorConfig
    from appinspector.mcp.context import AppContext

log = structlog.get_logger(__name__)

INSTRUCTIONS = (
    "Inspects the data models and enums of a live application. "
    "Use list/search tools to find names, then the schema and details tools for structure."
)


def create_mcp_server(context: AppContext) -> FastMCP:
    """Create FastMCP server with all tools wired to context.

    Args:
        context: AppContext with the application root and runner

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    from appinspector.mcp._compat import get_tools_sync
    from appinspector.mcp.tools import enums, models

    log.info("mcp_server_creating", app_root=str(context.app_root))

    mcp = FastMCP(context.config.server.name, instructions=INSTRUCTIONS)

    models.register_tools(mcp, context)
    enums.register_tools(mcp, context)

    tool_names = sorted(get_tools_sync(mcp))
    log.info("mcp_server_created", tool_count=len(tool_names), tools=tool_names)

    return mcp


def run_server(app_root: Path, config: AppInspectorConfig) -> None:
    """Create and run the MCP server over stdio."""
    from appinspector.config.models import LoggingConfig, LogOutputConfig
    from appinspector.core.logging import configure_logging, get_log_file_path
    from appinspector.mcp.context import AppContext

    # Console: INFO on stderr (stdout carries the protocol); file outputs as configured
    file_outputs = [o for o in config.logging.outputs if o.destination != "stderr"]
    configure_logging(
        config=LoggingConfig(
            level="DEBUG" if file_outputs else "INFO",
            outputs=[
                LogOutputConfig(destination="stderr", format="console", level="INFO"),
                *file_outputs,
            ],
        )
    )

    log.info(
        "mcp_server_starting",
        app_root=str(app_root),
        log_file=str(get_log_file_path()) if get_log_file_path() else None,
    )

    context = AppContext.create(app_root, config)
    mcp = create_mcp_server(context)

    log.info("mcp_server_running", transport="stdio")
    mcp.run()
