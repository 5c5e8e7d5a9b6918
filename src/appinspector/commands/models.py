"""Model commands: list, schema, search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from appinspector.commands.registry import registry
from appinspector.introspection.catalog import search_catalog
from appinspector.introspection.models import inspect_model, list_models

if TYPE_CHECKING:
    from appinspector.introspection.catalog import CatalogEntry
    from appinspector.runtime.bootstrap import Runtime


def _catalog_result(entries: list[CatalogEntry]) -> dict[str, Any]:
    return {"models": [entry.to_dict() for entry in entries], "total": len(entries)}


@registry.register("models", "list", "List all models")
def list_command(runtime: Runtime, _argument: str | None) -> dict[str, Any]:
    return _catalog_result(list_models(runtime))


@registry.register(
    "models",
    "schema",
    "Get schema for a specific model",
    argument="ModelName",
    missing_argument="Model name required",
    subject_key="model",
)
def schema_command(runtime: Runtime, name: str) -> dict[str, Any]:
    return inspect_model(runtime, name).to_dict()


@registry.register(
    "models",
    "search",
    "Search models by name",
    argument="query",
    missing_argument="Search query required",
)
def search_command(runtime: Runtime, query: str) -> dict[str, Any]:
    return _catalog_result(search_catalog(list_models(runtime), query))
