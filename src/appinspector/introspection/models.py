"""Model introspection.

Produces a ``ModelSchemaRecord`` for one mapped class: table identity,
primary key, live database columns, attribute configuration (casts,
fillable, guarded, hidden), relationships and composition mixins.

Attribute configuration is derived from the mapper unless the class
declares one of the override attributes ``__casts__``, ``__fillable__``,
``__guarded__``, ``__hidden__`` or ``__timestamps__``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog
from sqlalchemy import Engine, MetaData, Table
from sqlalchemy import Enum as SAEnum
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapper
from sqlalchemy.types import NullType, TypeEngine

from appinspector.config.constants import TIMESTAMP_COLUMNS, UNKNOWN_TYPE
from appinspector.introspection.catalog import (
    CatalogEntry,
    model_category,
    resolve_name,
    scan_category,
)
from appinspector.introspection.members import (
    application_bases,
    basic_names,
    is_interface_like,
)
from appinspector.introspection.relationships import collect_relationships, qualified_class_name
from appinspector.runtime.bootstrap import Runtime

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ModelSchemaRecord:
    """Structural description of one model."""

    model: str
    qualified_name: str
    table: str | None
    primary_key: str | list[str] | None
    key_type: str
    incrementing: bool
    timestamps: bool
    columns: dict[str, dict[str, str]]
    casts: dict[str, str]
    fillable: list[str]
    guarded: list[str]
    hidden: list[str]
    relationships: dict[str, dict[str, str]]
    mixins: list[str]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def list_models(runtime: Runtime) -> list[CatalogEntry]:
    return scan_category(model_category(runtime))


def inspect_model(runtime: Runtime, name: str) -> ModelSchemaRecord:
    """Describe the model ``name`` resolves to.

    Raises:
        TypeNotFoundError: ``name`` does not resolve to a model.
        Exception: Anything raised while instantiating or reading the model
            propagates to the caller's error boundary.
    """
    cls = resolve_name(model_category(runtime), name)
    mapper: Mapper[Any] = sa_inspect(cls)

    configured = configure_registry(mapper)
    if configured:
        cls()
    table = mapper.local_table if isinstance(mapper.local_table, Table) else None

    primary_key = _primary_key(mapper)
    fillable = _fillable(cls, mapper, table)

    return ModelSchemaRecord(
        model=name,
        qualified_name=qualified_class_name(cls),
        table=table.name if table is not None else None,
        primary_key=primary_key,
        key_type=_key_type(mapper),
        incrementing=table is not None and table.autoincrement_column is not None,
        timestamps=_timestamps(cls, mapper),
        columns=live_columns(runtime.engine, table),
        casts=_casts(cls, mapper),
        fillable=fillable,
        guarded=_guarded(cls, mapper, fillable),
        hidden=list(getattr(cls, "__hidden__", None) or []),
        relationships=collect_relationships(mapper, configured=configured),
        mixins=sorted(basic_names(model_mixins(cls))),
    )


def configure_registry(mapper: Mapper[Any]) -> bool:
    """Configure every mapper of ``mapper``'s registry.

    Returns False when some relationship in the registry cannot be set up.
    Columns and keys stay readable in that case; relationships are then read
    from their declarations and the model is not instantiated.
    """
    try:
        mapper.registry.configure(cascade=True)
    except Exception as e:
        log.warning("mapper_configuration_failed", model=mapper.class_.__name__, error=str(e))
        return False
    return True


# =============================================================================
# Keys
# =============================================================================


def _attribute_name(mapper: Mapper[Any], column: Any) -> str:
    try:
        return mapper.get_property_by_column(column).key
    except Exception:
        return column.key


def _primary_key(mapper: Mapper[Any]) -> str | list[str] | None:
    names = [_attribute_name(mapper, column) for column in mapper.primary_key]
    if not names:
        return None
    return names[0] if len(names) == 1 else names


def python_type_name(type_: TypeEngine[Any]) -> str | None:
    """Name of the Python type a column type loads as, None if it has none."""
    if isinstance(type_, SAEnum) and type_.enum_class is not None:
        return qualified_class_name(type_.enum_class)
    try:
        return type_.python_type.__name__
    except NotImplementedError:
        return None


def _key_type(mapper: Mapper[Any]) -> str:
    names = {python_type_name(column.type) for column in mapper.primary_key}
    if len(names) != 1:
        return UNKNOWN_TYPE
    name = names.pop()
    if name is None:
        return UNKNOWN_TYPE
    return {"int": "integer", "str": "string"}.get(name, name.lower())


def _timestamps(cls: type, mapper: Mapper[Any]) -> bool:
    declared = getattr(cls, "__timestamps__", None)
    if declared is not None:
        return bool(declared)
    return all(name in mapper.columns for name in TIMESTAMP_COLUMNS)


# =============================================================================
# Live columns
# =============================================================================


def column_type_name(type_: TypeEngine[Any], engine: Engine, column: str) -> str:
    if isinstance(type_, NullType):
        log.debug("column_type_unknown", column=column, reason="unsupported type")
        return UNKNOWN_TYPE
    try:
        return str(type_.compile(dialect=engine.dialect)).lower()
    except Exception as e:
        log.debug("column_type_unknown", column=column, reason=str(e))
        return UNKNOWN_TYPE


def live_columns(engine: Engine | None, table: Table | None) -> dict[str, dict[str, str]]:
    """Columns of ``table`` as the live database reports them.

    Returns an empty mapping when there is no engine, the database cannot be
    reached, or the table does not exist.
    """
    if engine is None or table is None:
        return {}
    try:
        inspector = sa_inspect(engine)
        if not inspector.has_table(table.name, schema=table.schema):
            log.debug("columns_table_missing", table=table.name)
            return {}
        reflected = inspector.get_columns(table.name, schema=table.schema)
    except SQLAlchemyError as e:
        log.info("columns_unavailable", table=table.name, error=str(e))
        return {}

    return {
        column["name"]: {"type": column_type_name(column["type"], engine, column["name"])}
        for column in reflected
    }


# =============================================================================
# Attribute configuration
# =============================================================================


def _casts(cls: type, mapper: Mapper[Any]) -> dict[str, str]:
    declared = getattr(cls, "__casts__", None)
    if declared is not None:
        return {str(key): str(value) for key, value in dict(declared).items()}

    casts: dict[str, str] = {}
    for attr, column in mapper.columns.items():
        name = python_type_name(column.type)
        if name is not None:
            casts[attr] = name
    return casts


def _is_server_managed(column: Any, table: Table | None) -> bool:
    if getattr(column, "computed", None) is not None:
        return True
    if getattr(column, "identity", None) is not None:
        return True
    return bool(
        getattr(column, "primary_key", False)
        and table is not None
        and table.autoincrement_column is column
    )


def _fillable(cls: type, mapper: Mapper[Any], table: Table | None) -> list[str]:
    declared = getattr(cls, "__fillable__", None)
    if declared is not None:
        return list(declared)
    return [
        attr for attr, column in mapper.columns.items() if not _is_server_managed(column, table)
    ]


def _guarded(cls: type, mapper: Mapper[Any], fillable: list[str]) -> list[str]:
    declared = getattr(cls, "__guarded__", None)
    if declared is not None:
        return list(declared)
    allowed = set(fillable)
    return [attr for attr in mapper.columns.keys() if attr not in allowed]


# =============================================================================
# Mixins
# =============================================================================


def _is_model_hierarchy(base: type) -> bool:
    """Mapped parents, declarative bases and abstract model bases."""
    if sa_inspect(base, raiseerr=False) is not None:
        return True
    if isinstance(getattr(base, "metadata", None), MetaData):
        return True
    return bool(vars(base).get("__abstract__"))


def model_mixins(cls: type) -> list[type]:
    return [
        base
        for base in application_bases(cls, _is_model_hierarchy)
        if not is_interface_like(base)
    ]
