"""Helpers shared by the model and enum introspectors.

Annotation rendering, scalar checks, and classification of a class's bases
into composition mixins and capability interfaces.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from typing import Any

from appinspector.config.constants import FRAMEWORK_MODULE_PREFIXES

SCALAR_TYPES = (type(None), bool, int, float, str)


def is_scalar(value: Any) -> bool:
    """Whether a value is a JSON scalar (enum members excluded)."""
    return type(value) in SCALAR_TYPES


def _render_single(annotation: Any) -> str:
    if annotation is None or annotation is type(None):
        return "None"
    if isinstance(annotation, type):
        return annotation.__name__
    if isinstance(annotation, typing.ForwardRef):
        return annotation.__forward_arg__
    return str(annotation)


def render_annotation(annotation: Any) -> str | None:
    """Render a declared type as text.

    Unions become their member names joined by ``|``; named classes render
    as their name; any other form renders as its literal string. Returns
    None when nothing was declared.
    """
    if annotation is inspect.Parameter.empty:
        return None
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return "|".join(_render_single(arg) for arg in typing.get_args(annotation))
    return _render_single(annotation)


def is_framework_class(cls: type) -> bool:
    module = getattr(cls, "__module__", "") or ""
    return module == "builtins" or any(
        module == prefix or module.startswith(prefix + ".") for prefix in FRAMEWORK_MODULE_PREFIXES
    )


def is_interface_like(cls: type) -> bool:
    """A Protocol, or a class whose own public callables are all abstract."""
    if getattr(cls, "_is_protocol", False):
        return True
    callables = [
        value
        for name, value in vars(cls).items()
        if not name.startswith("_") and callable(getattr(value, "__func__", value))
    ]
    return bool(callables) and all(
        getattr(getattr(value, "__func__", value), "__isabstractmethod__", False)
        for value in callables
    )


def application_bases(cls: type, skip: Callable[[type], bool]) -> list[type]:
    """Non-framework classes in the MRO of ``cls``, excluding ``cls`` itself.

    ``skip`` drops bases that are part of the type hierarchy proper (mapped
    parents, declarative bases, parent enums) rather than composition.
    """
    bases: list[type] = []
    for base in cls.__mro__[1:]:
        if base is object or is_framework_class(base) or skip(base):
            continue
        bases.append(base)
    return bases


def basic_names(classes: list[type]) -> list[str]:
    """Last path segment of each class name, first occurrence wins."""
    seen: dict[str, None] = {}
    for cls in classes:
        seen.setdefault(cls.__name__, None)
    return list(seen)


def own_public_members(cls: type) -> list[tuple[str, Any]]:
    """Public attributes declared directly in the class body, in order."""
    return [(name, value) for name, value in vars(cls).items() if not name.startswith("_")]
