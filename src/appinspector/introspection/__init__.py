"""Structural introspection of an application's models and enums."""

from appinspector.introspection.catalog import (
    CatalogEntry,
    Category,
    enum_category,
    model_category,
    resolve_name,
    scan_catalog,
    search_catalog,
)
from appinspector.introspection.enums import (
    EnumRecord,
    EnumValuesRecord,
    enum_entry_dict,
    enum_values,
    inspect_enum,
    list_enums,
)
from appinspector.introspection.models import ModelSchemaRecord, inspect_model, list_models
from appinspector.introspection.relationships import RelationshipKind

__all__ = [
    # Catalog
    "CatalogEntry",
    "Category",
    "enum_category",
    "model_category",
    "resolve_name",
    "scan_catalog",
    "search_catalog",
    # Models
    "ModelSchemaRecord",
    "RelationshipKind",
    "inspect_model",
    "list_models",
    # Enums
    "EnumRecord",
    "EnumValuesRecord",
    "enum_entry_dict",
    "enum_values",
    "inspect_enum",
    "list_enums",
]
