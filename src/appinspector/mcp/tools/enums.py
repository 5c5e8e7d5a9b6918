"""Enum MCP tools - list_enums, get_enum_details, get_enum_values, search_enums."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from appinspector.mcp.context import AppContext


def register_tools(mcp: FastMCP, app_ctx: AppContext) -> None:
    """Register enum tools with FastMCP server."""

    @mcp.tool
    async def list_enums() -> dict[str, Any]:
        """List all enums in the application. Returns enum names, backing types, and case counts."""
        return await app_ctx.runner.run("list_enums", "enums", "list")

    @mcp.tool
    async def get_enum_details(
        enum: str = Field(
            ...,
            description=(
                "The enum name (e.g., 'AccountType', 'accounts/account_status/AccountStatus'). "
                "Can include subdirectory path."
            ),
        ),
    ) -> dict[str, Any]:
        """Get detailed information for a specific enum.

        Returns all cases with values, custom methods, annotations, mixins, and capabilities.
        """
        return await app_ctx.runner.run("get_enum_details", "enums", "details", enum)

    @mcp.tool
    async def get_enum_values(
        enum: str = Field(..., description="The enum name"),
    ) -> dict[str, Any]:
        """Get just the case names and values for an enum.

        Useful for quick lookups of valid values.
        """
        return await app_ctx.runner.run("get_enum_values", "enums", "values", enum)

    @mcp.tool
    async def search_enums(
        query: str = Field(..., description="Search query to match against enum names"),
    ) -> dict[str, Any]:
        """Search for enums by name. Useful when you're not sure of the exact enum name."""
        return await app_ctx.runner.run("search_enums", "enums", "search", query)
