"""MCP tool handlers."""

from appinspector.mcp.tools import enums, models

__all__ = ["enums", "models"]
