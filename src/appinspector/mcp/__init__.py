"""MCP server module - FastMCP tool registration and wiring."""

from appinspector.mcp.context import AppContext
from appinspector.mcp.runner import InspectorRunner
from appinspector.mcp.server import create_mcp_server

__all__ = ["AppContext", "InspectorRunner", "create_mcp_server"]
