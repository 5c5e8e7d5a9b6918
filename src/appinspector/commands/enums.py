"""Enum commands: list, details, values, search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from appinspector.commands.registry import registry
from appinspector.introspection.catalog import search_catalog
from appinspector.introspection.enums import enum_entry_dict, enum_values, inspect_enum, list_enums

if TYPE_CHECKING:
    from appinspector.introspection.catalog import CatalogEntry
    from appinspector.runtime.bootstrap import Runtime


def _catalog_result(entries: list[CatalogEntry]) -> dict[str, Any]:
    return {"enums": [enum_entry_dict(entry) for entry in entries], "total": len(entries)}


@registry.register("enums", "list", "List all enums")
def list_command(runtime: Runtime, _argument: str | None) -> dict[str, Any]:
    return _catalog_result(list_enums(runtime))


@registry.register(
    "enums",
    "details",
    "Get full details for a specific enum",
    argument="EnumName",
    missing_argument="Enum name required",
    subject_key="enum",
)
def details_command(runtime: Runtime, name: str) -> dict[str, Any]:
    return inspect_enum(runtime, name).to_dict()


@registry.register(
    "enums",
    "values",
    "Get just the case names and values",
    argument="EnumName",
    missing_argument="Enum name required",
    subject_key="enum",
)
def values_command(runtime: Runtime, name: str) -> dict[str, Any]:
    return enum_values(runtime, name).to_dict()


@registry.register(
    "enums",
    "search",
    "Search enums by name",
    argument="query",
    missing_argument="Search query required",
)
def search_command(runtime: Runtime, query: str) -> dict[str, Any]:
    return _catalog_result(search_catalog(list_enums(runtime), query))
