"""Type catalog scanning, name resolution and search.

A catalog is the sorted list of classes a category accepts under one
package directory of the application. Entry names are the module path
relative to the package (slash-delimited) followed by the class name, so
``app/models/accounts/ira_account.py::IraAccount`` is listed as
``accounts/ira_account/IraAccount``.
"""

from __future__ import annotations

import importlib
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper

from appinspector.config.constants import ALWAYS_PRUNED_DIRS, SOURCE_SUFFIX
from appinspector.core.errors import CatalogError, TypeNotFoundError
from appinspector.runtime.bootstrap import Runtime
from appinspector.runtime.loader import import_object

log = structlog.get_logger(__name__)

Predicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One accepted class in a catalog."""

    name: str
    qualified_name: str
    cls: type = field(compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "qualified_name": self.qualified_name}


@dataclass(frozen=True)
class Category:
    """Where a kind of type lives and how to recognise it."""

    key: str
    label: str
    root_dir: Path
    package: str
    exclude_dirs: frozenset[str]
    accept: Predicate

    @property
    def plural(self) -> str:
        return f"{self.key}s"


# =============================================================================
# Predicates
# =============================================================================


def is_model_class(obj: Any, base_class: type | None = None) -> bool:
    """A concrete SQLAlchemy-mapped class, optionally under ``base_class``."""
    if not isinstance(obj, type):
        return False
    if base_class is not None and not issubclass(obj, base_class):
        return False
    return isinstance(sa_inspect(obj, raiseerr=False), Mapper)


def is_enum_class(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, Enum)


def model_category(runtime: Runtime) -> Category:
    target = runtime.target
    base_class = runtime.base_class
    return Category(
        key="model",
        label="Model",
        root_dir=runtime.models_dir,
        package=target.models_package,
        exclude_dirs=frozenset(target.models_exclude_dirs),
        accept=lambda obj: is_model_class(obj, base_class),
    )


def enum_category(runtime: Runtime) -> Category:
    target = runtime.target
    return Category(
        key="enum",
        label="Enum",
        root_dir=runtime.enums_dir,
        package=target.enums_package,
        exclude_dirs=frozenset(target.enums_exclude_dirs),
        accept=is_enum_class,
    )


# =============================================================================
# Scanning
# =============================================================================


def _walk_sources(root: Path, exclude_dirs: frozenset[str]) -> list[str]:
    """Relative posix paths of source files, pruning excluded and hidden dirs."""
    results: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [
            d
            for d in dirnames
            if d not in exclude_dirs and d not in ALWAYS_PRUNED_DIRS and not d.startswith(".")
        ]
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        for filename in filenames:
            if not filename.endswith(SOURCE_SUFFIX):
                continue
            results.append(filename if rel_dir == "." else f"{rel_dir}/{filename}")
    return results


def _module_path(rel_path: str) -> str:
    """``accounts/ira_account.py`` -> ``accounts/ira_account``; ``__init__`` dropped."""
    segments = rel_path[: -len(SOURCE_SUFFIX)].split("/")
    if segments[-1] == "__init__":
        segments.pop()
    return "/".join(segments)


def scan_catalog(
    root_dir: Path,
    package: str,
    accept: Predicate,
    exclude_dirs: Iterable[str] = (),
    *,
    label: str | None = None,
) -> list[CatalogEntry]:
    """Enumerate every accepted class defined under ``root_dir``.

    Each source file is imported as a module of ``package``; a file that
    fails to import is skipped. Only classes defined in that module are
    considered. The result is sorted by name.

    Raises:
        CatalogError: ``root_dir`` does not exist.
    """
    if not root_dir.is_dir():
        raise CatalogError.missing_directory(label or package.replace(".", "/"), str(root_dir))

    entries: dict[str, CatalogEntry] = {}
    for rel_path in _walk_sources(root_dir, frozenset(exclude_dirs)):
        module_path = _module_path(rel_path)
        module_name = ".".join(filter(None, [package, module_path.replace("/", ".")]))
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            log.debug("catalog_import_skipped", module=module_name, error=str(e))
            continue

        for attr_name, obj in vars(module).items():
            if not isinstance(obj, type) or obj.__module__ != module_name:
                continue
            if obj.__name__ != attr_name:
                continue
            try:
                accepted = accept(obj)
            except Exception as e:
                log.debug("catalog_candidate_skipped", candidate=attr_name, error=str(e))
                continue
            if not accepted:
                continue
            name = f"{module_path}/{attr_name}" if module_path else attr_name
            entries[name] = CatalogEntry(
                name=name, qualified_name=f"{package}.{name.replace('/', '.')}", cls=obj
            )

    log.debug("catalog_scanned", package=package, total=len(entries))
    return [entries[name] for name in sorted(entries)]


def scan_category(category: Category) -> list[CatalogEntry]:
    return scan_catalog(
        category.root_dir,
        category.package,
        category.accept,
        category.exclude_dirs,
    )


def search_catalog(entries: list[CatalogEntry], query: str) -> list[CatalogEntry]:
    """Entries whose name contains ``query``, case-insensitively, order kept."""
    needle = query.casefold()
    return [entry for entry in entries if needle in entry.name.casefold()]


# =============================================================================
# Name resolution
# =============================================================================


def resolve_name(category: Category, name: str) -> type:
    """Resolve a user-supplied name to its class.

    Candidates are ``<package>.<name>`` as given, then with ``/`` read as the
    namespace separator. A bare class name that matches exactly one catalog
    entry is accepted as well.

    Raises:
        TypeNotFoundError: No candidate loads and satisfies the predicate.
    """
    candidates = [f"{category.package}.{name}"]
    dotted = f"{category.package}.{name.replace('/', '.')}"
    if dotted not in candidates:
        candidates.append(dotted)

    for qualified_name in candidates:
        try:
            obj = import_object(qualified_name)
            accepted = category.accept(obj)
        except Exception as e:
            log.debug("resolve_candidate_failed", candidate=qualified_name, error=str(e))
            continue
        if accepted:
            return obj

    if name and "/" not in name and "." not in name:
        match = _unique_basename_match(category, name)
        if match is not None:
            return match.cls

    raise TypeNotFoundError.for_name(category.label, name)


def _unique_basename_match(category: Category, name: str) -> CatalogEntry | None:
    try:
        entries = scan_category(category)
    except CatalogError:
        return None
    matches = [entry for entry in entries if entry.cls.__name__ == name]
    if len(matches) == 1:
        return matches[0]
    return None
