"""Runtime bootstrap for the inspected application.

Locates the application root, imports its bootstrap module so that models,
enums and database bindings are live, and resolves the SQLAlchemy engine
used for column introspection. Every command invocation bootstraps afresh;
nothing is cached across invocations.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy import Engine, create_engine

from appinspector.config.constants import DEFAULT_RELATIVE_APP_ROOT, ENV_APP_PATH
from appinspector.config.models import TargetConfig
from appinspector.core.errors import BootstrapError
from appinspector.runtime.loader import import_object

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Runtime:
    """A bootstrapped application, ready for introspection."""

    app_root: Path
    target: TargetConfig
    engine: Engine | None = None
    base_class: type | None = None

    @property
    def models_dir(self) -> Path:
        return package_dir(self.app_root, self.target.models_package)

    @property
    def enums_dir(self) -> Path:
        return package_dir(self.app_root, self.target.enums_package)


def package_dir(app_root: Path, package: str) -> Path:
    """Directory of a dotted package under the app root."""
    return app_root.joinpath(*package.split("."))


def has_bootstrap_entry(app_root: Path, target: TargetConfig) -> bool:
    """Whether the bootstrap module exists as a package or a single module."""
    module_path = package_dir(app_root, target.bootstrap_module)
    return (module_path / "__init__.py").is_file() or module_path.with_suffix(".py").is_file()


def locate_app_root(target: TargetConfig, cwd: Path | None = None) -> Path:
    """Find the target application's root directory.

    Order: the APPINSPECTOR_APP_PATH environment value; the working directory
    when it holds the bootstrap module and the models directory; otherwise a
    fixed path relative to the working directory.
    """
    env_value = os.environ.get(ENV_APP_PATH)
    if env_value:
        return Path(env_value).expanduser().resolve()

    cwd = (cwd or Path.cwd()).resolve()
    if has_bootstrap_entry(cwd, target) and package_dir(cwd, target.models_package).is_dir():
        return cwd

    return (cwd / DEFAULT_RELATIVE_APP_ROOT).resolve()


def bootstrap(app_root: Path, target: TargetConfig) -> Runtime:
    """Initialize the application so its type graph is live in memory.

    Raises:
        BootstrapError: The bootstrap module is absent or fails to import,
            or a configured base class / engine reference cannot be loaded.
    """
    if not has_bootstrap_entry(app_root, target):
        raise BootstrapError.app_not_found(str(app_root))

    root_str = str(app_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    try:
        bootstrap_module = import_object(target.bootstrap_module)
    except Exception as e:
        raise BootstrapError.failed(target.bootstrap_module, str(e)) from e

    base_class: type | None = None
    if target.base_class:
        try:
            base_class = import_object(target.base_class)
        except Exception as e:
            raise BootstrapError.failed(target.base_class, str(e)) from e

    engine = _resolve_engine(target, bootstrap_module)
    log.debug(
        "bootstrap_complete",
        app_root=root_str,
        bootstrap_module=target.bootstrap_module,
        has_engine=engine is not None,
    )
    return Runtime(app_root=app_root, target=target, engine=engine, base_class=base_class)


def _resolve_engine(target: TargetConfig, bootstrap_module: Any) -> Engine | None:
    if target.database_url:
        return create_engine(target.database_url)

    if target.engine:
        try:
            candidate = import_object(target.engine)
        except Exception as e:
            raise BootstrapError.failed(target.engine, str(e)) from e
    else:
        candidate = getattr(bootstrap_module, "engine", None)

    if callable(candidate) and not isinstance(candidate, Engine):
        try:
            candidate = candidate()
        except Exception as e:
            raise BootstrapError.failed(target.engine or "engine", str(e)) from e
    if isinstance(candidate, Engine):
        return candidate

    if candidate is not None:
        log.warning(
            "bootstrap_engine_ignored", reference=target.engine, type=type(candidate).__name__
        )
    # Without an engine every model reports an empty column mapping.
    log.info("bootstrap_no_engine")
    return None
