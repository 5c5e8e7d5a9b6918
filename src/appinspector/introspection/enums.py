"""Enum introspection and values projection."""

from __future__ import annotations

import dataclasses
import inspect
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any

import structlog

from appinspector.introspection.catalog import (
    CatalogEntry,
    enum_category,
    resolve_name,
    scan_category,
)
from appinspector.introspection.members import (
    application_bases,
    basic_names,
    is_interface_like,
    is_scalar,
    own_public_members,
    render_annotation,
)
from appinspector.introspection.relationships import qualified_class_name
from appinspector.runtime.bootstrap import Runtime

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CaseRecord:
    name: str
    value: Any = None
    backed: bool = False
    annotations: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.backed:
            data["value"] = self.value
        if self.annotations:
            data["annotations"] = [dict(annotation) for annotation in self.annotations]
        return data


@dataclass(frozen=True, slots=True)
class ParameterRecord:
    name: str
    type: str | None = None
    default: Any = None
    has_default: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.type is not None:
            data["type"] = self.type
        if self.has_default:
            data["default"] = self.default
        return data


@dataclass(frozen=True, slots=True)
class MethodRecord:
    name: str
    static: bool
    parameters: list[ParameterRecord]
    return_type: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "static": self.static,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
            "return_type": self.return_type,
        }


@dataclass(frozen=True, slots=True)
class EnumRecord:
    """Structural description of one enum."""

    enum: str
    qualified_name: str
    backing_type: str | None
    cases: list[CaseRecord]
    methods: list[MethodRecord]
    mixins: list[str]
    capabilities: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "enum": self.enum,
            "qualified_name": self.qualified_name,
            "backing_type": self.backing_type,
            "cases": [case.to_dict() for case in self.cases],
            "methods": [method.to_dict() for method in self.methods],
            "mixins": self.mixins,
            "capabilities": self.capabilities,
        }


@dataclass(frozen=True, slots=True)
class EnumValuesRecord:
    """Cases of one enum reduced to names and values."""

    enum: str
    qualified_name: str
    backing_type: str | None
    values: dict[str, Any] | list[str]

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


# =============================================================================
# Cases
# =============================================================================


def backing_type(enum_cls: type[Enum]) -> str | None:
    """Name of the enum's member data type; None for a symbolic enum."""
    member_type = enum_cls._member_type_
    if member_type is object:
        return None
    return member_type.__name__


def canonical_members(enum_cls: type[Enum]) -> list[Enum]:
    """Members in declaration order, aliases excluded."""
    return [member for name, member in enum_cls.__members__.items() if member.name == name]


def _case_hints(enum_cls: type[Enum]) -> dict[str, Any]:
    try:
        return inspect.get_annotations(enum_cls, eval_str=True)
    except Exception:
        return inspect.get_annotations(enum_cls)


def _instance_properties(instance: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(instance):
        return {f.name: getattr(instance, f.name) for f in dataclasses.fields(instance)}
    properties: dict[str, Any] = {}
    for slot in getattr(type(instance), "__slots__", ()):
        if hasattr(instance, slot):
            properties[slot] = getattr(instance, slot)
    properties.update(getattr(instance, "__dict__", {}))
    return properties


def _annotation_record(item: Any) -> dict[str, Any]:
    instance = item() if isinstance(item, type) else item
    return {"name": type(instance).__name__, **_instance_properties(instance)}


def case_annotations(enum_cls: type[Enum], case: str, hint: Any) -> list[dict[str, Any]]:
    """Flattened ``Annotated`` metadata attached to one case.

    Metadata given as a class is instantiated without arguments. Metadata
    that fails to materialize is skipped.
    """
    if typing.get_origin(hint) is not Annotated:
        return []
    records: list[dict[str, Any]] = []
    for item in hint.__metadata__:
        if is_scalar(item):
            continue
        try:
            records.append(_annotation_record(item))
        except Exception as e:
            log.info(
                "annotation_skipped",
                enum=enum_cls.__name__,
                case=case,
                annotation=getattr(item, "__name__", type(item).__name__),
                reason=str(e),
            )
    return records


def _cases(enum_cls: type[Enum], backed: bool) -> list[CaseRecord]:
    hints = _case_hints(enum_cls)
    return [
        CaseRecord(
            name=member.name,
            value=member.value if backed else None,
            backed=backed,
            annotations=case_annotations(enum_cls, member.name, hints.get(member.name)),
        )
        for member in canonical_members(enum_cls)
    ]


# =============================================================================
# Methods
# =============================================================================


def _signature(func: Any) -> inspect.Signature:
    try:
        return inspect.signature(func, eval_str=True)
    except Exception:
        return inspect.signature(func)


def _default_value(default: Any) -> Any:
    """Scalars as-is, anything else as its source-like ``repr``."""
    if default is inspect.Parameter.empty:
        return None
    return default if is_scalar(default) else repr(default)


def describe_method(name: str, value: Any) -> MethodRecord | None:
    """Describe a function declared in a class body, None if it is not one."""
    if isinstance(value, staticmethod | classmethod):
        func, static = value.__func__, True
        skip_first = isinstance(value, classmethod)
    elif inspect.isfunction(value):
        func, static, skip_first = value, False, True
    else:
        return None

    signature = _signature(func)
    params = list(signature.parameters.values())
    if skip_first and params:
        params = params[1:]

    parameters = [
        ParameterRecord(
            name=param.name,
            type=render_annotation(param.annotation),
            default=_default_value(param.default),
            has_default=param.default is not inspect.Parameter.empty,
        )
        for param in params
    ]
    return MethodRecord(
        name=name,
        static=static,
        parameters=parameters,
        return_type=render_annotation(signature.return_annotation),
    )


def _methods(enum_cls: type[Enum]) -> list[MethodRecord]:
    methods: list[MethodRecord] = []
    for name, value in own_public_members(enum_cls):
        record = describe_method(name, value)
        if record is not None:
            methods.append(record)
    return methods


# =============================================================================
# Composition
# =============================================================================


def _is_enum_hierarchy(base: type) -> bool:
    return issubclass(base, Enum)


def enum_mixins(enum_cls: type[Enum]) -> tuple[list[str], list[str]]:
    """Composition mixins and capability interfaces of an enum."""
    bases = application_bases(enum_cls, _is_enum_hierarchy)
    mixins = [base for base in bases if not is_interface_like(base)]
    capabilities = [base for base in bases if is_interface_like(base)]
    capabilities.extend(
        base
        for base in enum_cls.__mro__[1:]
        if base.__module__ == "enum" and issubclass(base, Enum)
    )
    return sorted(basic_names(mixins)), sorted(basic_names(capabilities))


# =============================================================================
# Operations
# =============================================================================


def list_enums(runtime: Runtime) -> list[CatalogEntry]:
    return scan_category(enum_category(runtime))


def enum_entry_dict(entry: CatalogEntry) -> dict[str, Any]:
    """Catalog entry with the enum's backing type and case count."""
    return {
        **entry.to_dict(),
        "backing_type": backing_type(entry.cls),
        "case_count": len(canonical_members(entry.cls)),
    }


def inspect_enum(runtime: Runtime, name: str) -> EnumRecord:
    """Describe the enum ``name`` resolves to.

    Raises:
        TypeNotFoundError: ``name`` does not resolve to an enum.
    """
    enum_cls = resolve_name(enum_category(runtime), name)
    backing = backing_type(enum_cls)
    mixins, capabilities = enum_mixins(enum_cls)
    return EnumRecord(
        enum=name,
        qualified_name=qualified_class_name(enum_cls),
        backing_type=backing,
        cases=_cases(enum_cls, backed=backing is not None),
        methods=_methods(enum_cls),
        mixins=mixins,
        capabilities=capabilities,
    )


def enum_values(runtime: Runtime, name: str) -> EnumValuesRecord:
    """Names and values of the enum ``name`` resolves to.

    Raises:
        TypeNotFoundError: ``name`` does not resolve to an enum.
    """
    enum_cls = resolve_name(enum_category(runtime), name)
    backing = backing_type(enum_cls)
    members = canonical_members(enum_cls)
    values: dict[str, Any] | list[str]
    if backing is not None:
        values = {member.name: member.value for member in members}
    else:
        values = [member.name for member in members]
    return EnumValuesRecord(
        enum=name,
        qualified_name=qualified_class_name(enum_cls),
        backing_type=backing,
        values=values,
    )
