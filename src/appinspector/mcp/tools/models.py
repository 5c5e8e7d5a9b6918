"""Model MCP tools - list_models, get_model_schema, search_models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from appinspector.mcp.context import AppContext


def register_tools(mcp: FastMCP, app_ctx: AppContext) -> None:
    """Register model tools with FastMCP server."""

    @mcp.tool
    async def list_models() -> dict[str, Any]:
        """List all SQLAlchemy models in the application.

        Returns model names and their full class paths.
        """
        return await app_ctx.runner.run("list_models", "models", "list")

    @mcp.tool
    async def get_model_schema(
        model: str = Field(
            ...,
            description=(
                "The model name (e.g., 'User', 'Account', 'accounts/ira_account/IraAccount'). "
                "Can include subdirectory path."
            ),
        ),
    ) -> dict[str, Any]:
        """Get detailed schema information for a specific model.

        Returns columns, types, relationships, casts, fillable/guarded fields, and mixins.
        """
        return await app_ctx.runner.run("get_model_schema", "models", "schema", model)

    @mcp.tool
    async def search_models(
        query: str = Field(..., description="Search query to match against model names"),
    ) -> dict[str, Any]:
        """Search for models by name. Useful when you're not sure of the exact model name."""
        return await app_ctx.runner.run("search_models", "models", "search", query)
